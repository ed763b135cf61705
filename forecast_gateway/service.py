# ABOUTME: Forecast service validating city names, calling the upstream client and reshaping its payloads.
# ABOUTME: Provides current, five-day and grouped (all cities) forecasts.

import asyncio
import logging
import math
from typing import Any

from pydantic import ValidationError

from forecast_gateway.cities import City, CityRegistry
from forecast_gateway.client import OpenWeatherMapClient
from forecast_gateway.errors import UpstreamError
from forecast_gateway.models import (
    CityValue,
    CurrentConditions,
    ForecastList,
    GroupedForecastResult,
    TimeslotReadings,
)

logger = logging.getLogger(__name__)


class ForecastService:
    """Entry point used by the HTTP handlers, one method per response flavor."""

    def __init__(self, registry: CityRegistry, client: OpenWeatherMapClient):
        self.registry = registry
        self.client = client

    async def get_current(self, city_name: str | None) -> Any:
        """Return the provider's current-weather payload for a registered city, unchanged.

        Raises:
            InvalidCityError: city_name is not exactly a registered name.
            UpstreamError: the provider call failed.
        """
        city = self.registry.lookup(city_name)
        result = await self.client.get_current_weather(city)
        return result.unwrap()

    async def get_five_day_forecast(self, city_name: str | None) -> dict[str, TimeslotReadings]:
        """Map each forecast timestamp (`dt_txt`) to its temperature, pressure and humidity."""
        city = self.registry.lookup(city_name)
        result = await self.client.get_forecast_list(city)
        forecast = _parse(ForecastList, result.unwrap())

        response: dict[str, TimeslotReadings] = {}
        for timeslot in forecast.timeslots:
            response[timeslot.dt_txt] = TimeslotReadings(
                temp=timeslot.main.temp,
                pressure=timeslot.main.pressure,
                humidity=timeslot.main.humidity,
            )
        return response

    async def get_grouped(self) -> GroupedForecastResult:
        """Aggregate current weather over every registered city.

        Any single upstream failure fails the whole aggregate. Ties on the highest
        values keep the city registered first. With no cities the mean is NaN.
        """
        payloads = await self._fetch_all_current(list(self.registry))

        response = GroupedForecastResult()
        temperatures: list[float] = []
        for payload in payloads:
            conditions = _parse(CurrentConditions, payload)
            temperatures.append(conditions.main.temp)

            if conditions.main.humidity > response.highest_humidity.value:
                response.highest_humidity = CityValue(city_name=conditions.name, value=conditions.main.humidity)
            if conditions.main.temp > response.highest_temperature.value:
                response.highest_temperature = CityValue(city_name=conditions.name, value=conditions.main.temp)

        response.mean_temp = sum(temperatures) / len(temperatures) if temperatures else math.nan
        return response

    async def _fetch_all_current(self, cities: list[City]) -> list[Any]:
        """Fetch current weather for all cities concurrently, in registry order.

        The first failure to arrive cancels the calls still in flight and is raised.
        """
        tasks = [asyncio.create_task(self.client.get_current_weather(city)) for city in cities]
        try:
            for next_done in asyncio.as_completed(tasks):
                (await next_done).unwrap()
        except UpstreamError:
            logger.info("Grouped forecast aborted after an upstream failure")
            raise
        finally:
            for task in tasks:
                task.cancel()
        return [task.result().payload for task in tasks]


def _parse(model, payload: Any):
    """Validate a provider payload, reporting a malformed one as an UpstreamError."""
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise UpstreamError.from_exception(e) from e
