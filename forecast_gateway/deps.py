# ABOUTME: Dependency container for the gateway using Pydantic BaseModel.
# ABOUTME: Wires the shared httpx.AsyncClient, city registry, upstream client and forecast service.

import httpx
from pydantic import BaseModel, ConfigDict

from forecast_gateway.cities import CityRegistry
from forecast_gateway.client import OpenWeatherMapClient
from forecast_gateway.models import ClientConfig
from forecast_gateway.service import ForecastService


class GatewayDeps(BaseModel):
    """Process-wide objects built once at startup and shared by every request."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient
    service: ForecastService


def create_http_client() -> httpx.AsyncClient:
    """Create a plain httpx client; upstream failures are reported, never retried."""
    return httpx.AsyncClient()


def build_deps(
    config: ClientConfig,
    registry: CityRegistry | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> GatewayDeps:
    """Wire the upstream client and forecast service around a shared HTTP client."""
    if http_client is None:
        http_client = create_http_client()
    if registry is None:
        registry = CityRegistry()
    client = OpenWeatherMapClient(config, http_client)
    service = ForecastService(registry, client)
    return GatewayDeps(http_client=http_client, service=service)
