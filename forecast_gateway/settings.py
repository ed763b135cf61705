# ABOUTME: Process configuration read from environment variables (and a .env file via python-dotenv).
# ABOUTME: Validated eagerly so a missing API key stops the gateway at startup.

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError, field_validator

from forecast_gateway.errors import ConfigurationError
from forecast_gateway.models import ClientConfig, Language, Units


class Settings(BaseModel):
    """Everything the gateway needs to start."""

    client: ClientConfig
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, value: str) -> str:
        if value not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {value}")
        return value

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        """Build settings from `environ` (defaults to os.environ after loading .env)."""
        if environ is None:
            load_dotenv()
            environ = dict(os.environ)

        api_key = environ.get("OPEN_WEATHER_API_KEY", "")
        if not api_key.strip():
            raise ConfigurationError("OPEN_WEATHER_API_KEY is not set")

        try:
            return cls(
                client=ClientConfig(
                    api_key=api_key,
                    language=Language(environ.get("OPEN_WEATHER_LANGUAGE", Language.IT.value)),
                    units=Units(environ.get("OPEN_WEATHER_UNITS", Units.METRIC.value)),
                ),
                host=environ.get("HOST", "0.0.0.0"),
                port=environ.get("PORT", "3000"),
                log_level=environ.get("LOG_LEVEL", "INFO").upper(),
            )
        except (ValidationError, ValueError) as e:
            raise ConfigurationError(f"Invalid gateway configuration: {e}") from e
