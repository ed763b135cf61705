# ABOUTME: Pydantic BaseModels for client configuration, OpenWeatherMap payloads and gateway responses.
# ABOUTME: Upstream views are lenient (extra fields allowed); response models serialize with camelCase keys.

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Language(str, Enum):
    """Language codes accepted by the OpenWeatherMap API."""

    EN = "en"
    IT = "it"
    FR = "fr"
    DE = "de"
    ES = "es"


class Units(str, Enum):
    """Measurement systems accepted by the OpenWeatherMap API."""

    STANDARD = "standard"
    METRIC = "metric"
    IMPERIAL = "imperial"


class ClientConfig(BaseModel):
    """Credentials and presentation options for the upstream client."""

    model_config = ConfigDict(frozen=True)

    api_key: str
    language: Language = Language.IT
    units: Units = Units.METRIC

    @field_validator("api_key")
    @classmethod
    def api_key_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("api_key must not be empty")
        return value


class MainReadings(BaseModel):
    """The `main` block shared by current-weather and forecast entries."""

    model_config = ConfigDict(extra="allow")

    # int | float keeps the provider's integer readings as integers
    temp: int | float
    pressure: int | float | None = None
    humidity: int | float


class CurrentConditions(BaseModel):
    """The parts of a current-weather payload the grouped forecast reads."""

    model_config = ConfigDict(extra="allow")

    name: str
    main: MainReadings


class ForecastTimeslot(BaseModel):
    """One three-hour entry of the forecast list."""

    model_config = ConfigDict(extra="allow")

    dt_txt: str
    main: MainReadings


class ForecastList(BaseModel):
    """Parsed response from the OpenWeatherMap forecast endpoint."""

    model_config = ConfigDict(extra="allow")

    timeslots: list[ForecastTimeslot] = Field(default_factory=list, alias="list")


class TimeslotReadings(BaseModel):
    """Readings kept for each timestamp of the five-day forecast."""

    temp: int | float
    pressure: int | float | None = None
    humidity: int | float


class CityValue(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    city_name: str | None = None
    value: int | float = -999  # sentinel below any real reading, so the first city always wins


class GroupedForecastResult(BaseModel):
    """Aggregate of the current weather across every registered city."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    mean_temp: float | None = None
    highest_humidity: CityValue = Field(default_factory=CityValue)
    highest_temperature: CityValue = Field(default_factory=CityValue)
