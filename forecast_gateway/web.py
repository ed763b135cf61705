# ABOUTME: ASGI web entry point for the forecast gateway.
# ABOUTME: Starlette routes binding the city name from query, JSON body or path, plus error-to-status mapping.

import contextlib
import logging

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Route

from forecast_gateway.deps import GatewayDeps, build_deps
from forecast_gateway.errors import ForecastError
from forecast_gateway.service import ForecastService
from forecast_gateway.settings import Settings

logger = logging.getLogger(__name__)

# Status used when an upstream failure carried no HTTP status of its own
DEFAULT_ERROR_STATUS = 501


def _service(request: Request) -> ForecastService:
    return request.app.state.deps.service


async def _body_city_name(request: Request) -> str | None:
    """Read `cityName` from a JSON object body; anything else counts as no city."""
    try:
        body = await request.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    return body.get("cityName")


async def root(request: Request) -> Response:
    """Plain-text liveness answer."""
    return PlainTextResponse("Root endpoint")


async def _current(request: Request, city_name: str | None) -> Response:
    return JSONResponse(await _service(request).get_current(city_name))


async def _five_days(request: Request, city_name: str | None) -> Response:
    forecast = await _service(request).get_five_day_forecast(city_name)
    return JSONResponse({timestamp: readings.model_dump(exclude_none=True) for timestamp, readings in forecast.items()})


async def current_from_query(request: Request) -> Response:
    return await _current(request, request.query_params.get("cityName"))


async def current_from_body(request: Request) -> Response:
    return await _current(request, await _body_city_name(request))


async def current_from_path(request: Request) -> Response:
    return await _current(request, request.path_params["cityName"])


async def five_days_from_query(request: Request) -> Response:
    return await _five_days(request, request.query_params.get("cityName"))


async def five_days_from_body(request: Request) -> Response:
    return await _five_days(request, await _body_city_name(request))


async def five_days_from_path(request: Request) -> Response:
    return await _five_days(request, request.path_params["cityName"])


async def grouped(request: Request) -> Response:
    result = await _service(request).get_grouped()
    # model_dump_json renders a NaN mean (no cities) as null
    return Response(result.model_dump_json(by_alias=True), media_type="application/json")


async def handle_forecast_error(request: Request, exc: ForecastError) -> Response:
    """Render gateway errors as plain text with the error's own status."""
    status_code = exc.status_code or DEFAULT_ERROR_STATUS
    logger.info("%s %s -> %d: %s", request.method, request.url.path, status_code, exc.message)
    stack_trace = getattr(exc, "stack_trace", None)
    if status_code >= 500 and stack_trace:
        logger.debug("Upstream stack trace:\n%s", stack_trace)
    return PlainTextResponse(exc.message, status_code=status_code)


routes = [
    Route("/", root, methods=["GET"]),
    Route("/forecast/today", current_from_query, methods=["GET"]),
    Route("/forecast/today", current_from_body, methods=["POST"]),
    Route("/forecast/today/{cityName}", current_from_path, methods=["GET"]),
    Route("/forecast/five-days", five_days_from_query, methods=["GET"]),
    Route("/forecast/five-days", five_days_from_body, methods=["POST"]),
    Route("/forecast/five-days/{cityName}", five_days_from_path, methods=["GET"]),
    Route("/forecast/grouped", grouped, methods=["GET", "POST"]),
]


def create_app(deps: GatewayDeps | None = None, settings: Settings | None = None) -> Starlette:
    """Build the gateway app.

    When `deps` is not given they are built from `settings` (or the environment),
    and the app closes the HTTP client it created on shutdown.
    """
    owns_deps = deps is None
    if deps is None:
        if settings is None:
            settings = Settings.from_env()
        deps = build_deps(settings.client)

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette):
        yield
        if owns_deps:
            await deps.http_client.aclose()

    app = Starlette(
        routes=routes,
        exception_handlers={ForecastError: handle_forecast_error},
        lifespan=lifespan,
    )
    app.state.deps = deps
    return app
