# ABOUTME: Exception taxonomy for the forecast gateway and the tagged upstream result.
# ABOUTME: Every error carries the HTTP status the web boundary should answer with.

import traceback
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict


class ConfigurationError(ValueError):
    """Raised at startup when the environment does not describe a usable gateway."""


class ForecastError(Exception):
    """Base error surfaced to the HTTP boundary as a plain-text body."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class InvalidCityError(ForecastError):
    """The requested city is not one of the registered ones."""

    def __init__(self, available: list[str]):
        super().__init__(
            f"User has not entered one of the available cities: {','.join(available)}",
            status_code=400,
        )
        self.available = available


class UpstreamError(ForecastError):
    """A failed call to the weather provider, whatever the cause.

    status_code is None when the failure happened before a response was received.
    """

    def __init__(
        self,
        name: str,
        message: str,
        status_code: int | None = None,
        stack_trace: str | None = None,
    ):
        super().__init__(message, status_code=status_code)
        self.name = name
        self.stack_trace = stack_trace

    @classmethod
    def from_exception(cls, exc: Exception) -> "UpstreamError":
        status_code = None
        message = str(exc)
        if isinstance(exc, httpx.HTTPStatusError):
            status_code = exc.response.status_code
            # str(exc) embeds the request URL, which carries the API key
            message = f"Request failed with status code {status_code}"
        return cls(
            name=type(exc).__name__,
            message=message,
            status_code=status_code,
            stack_trace="".join(traceback.format_exception(exc)),
        )


class UpstreamResult(BaseModel):
    """Either the decoded provider payload or the error that prevented getting it."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    payload: Any = None
    error: UpstreamError | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def unwrap(self) -> Any:
        """Return the payload, or raise the carried UpstreamError unchanged."""
        if self.error is not None:
            raise self.error
        return self.payload
