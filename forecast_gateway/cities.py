# ABOUTME: Static registry of the cities the gateway serves, keyed by display name.
# ABOUTME: Lookups are exact and case-sensitive; the registry is read-only once built.

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict

from forecast_gateway.errors import InvalidCityError


class City(BaseModel):
    """A supported city and its fixed coordinates."""

    model_config = ConfigDict(frozen=True)

    name: str
    latitude: float
    longitude: float


DEFAULT_CITIES = (
    City(name="Bologna", latitude=44.467, longitude=11.433),
    City(name="Seattle", latitude=47.606, longitude=-122.332),
    City(name="Canberra", latitude=-35.283, longitude=149.128),
)


class CityRegistry:
    """Ordered, immutable mapping of city name to City."""

    def __init__(self, cities: Iterable[City] = DEFAULT_CITIES):
        self._cities: dict[str, City] = {}
        for city in cities:
            if city.name in self._cities:
                raise ValueError(f"Duplicate city in registry: {city.name}")
            self._cities[city.name] = city

    def lookup(self, name: str | None) -> City:
        """Return the city registered under exactly `name`, or raise InvalidCityError."""
        city = self._cities.get(name) if isinstance(name, str) else None
        if city is None:
            raise InvalidCityError(self.list_names())
        return city

    def list_names(self) -> list[str]:
        """Registered city names in registration order."""
        return list(self._cities)

    def __contains__(self, name: object) -> bool:
        return name in self._cities

    def __iter__(self) -> Iterator[City]:
        return iter(self._cities.values())

    def __len__(self) -> int:
        return len(self._cities)
