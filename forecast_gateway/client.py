# ABOUTME: Async client for the OpenWeatherMap current-weather and forecast endpoints.
# ABOUTME: Never raises for upstream failures; every call returns a tagged UpstreamResult.

import logging
from typing import Any

import httpx

from forecast_gateway.cities import City
from forecast_gateway.errors import UpstreamError, UpstreamResult
from forecast_gateway.models import ClientConfig

logger = logging.getLogger(__name__)

CURRENT_WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"
FORECAST_URL = "https://api.openweathermap.org/data/2.5/forecast"


class OpenWeatherMapClient:
    """Fetch weather data for a city's coordinates.

    The httpx.AsyncClient is borrowed, not owned: whoever created it closes it.
    """

    def __init__(self, config: ClientConfig, http_client: httpx.AsyncClient):
        self.config = config
        self.http_client = http_client

    async def get_current_weather(self, city: City) -> UpstreamResult:
        """Current conditions at the city, as returned by the provider."""
        return await self._retrieve(CURRENT_WEATHER_URL, city)

    async def get_forecast_list(self, city: City) -> UpstreamResult:
        """Five-day forecast in three-hour timeslots under the payload's `list` key."""
        return await self._retrieve(FORECAST_URL, city)

    def _params(self, city: City) -> dict[str, Any]:
        """Query parameters shared by both provider endpoints."""
        return {
            "lat": city.latitude,
            "lon": city.longitude,
            "appid": self.config.api_key,
            "language": self.config.language.value,
            "units": self.config.units.value,
        }

    async def _retrieve(self, url: str, city: City) -> UpstreamResult:
        try:
            resp = await self.http_client.get(url, params=self._params(city))
            resp.raise_for_status()
            payload = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            error = UpstreamError.from_exception(e)
            logger.warning("Upstream call for %s failed: %s (%s)", city.name, error.message, error.status_code)
            return UpstreamResult(error=error)
        return UpstreamResult(payload=payload)
