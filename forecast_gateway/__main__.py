# ABOUTME: Command-line entry point: `python -m forecast_gateway` serves the gateway with uvicorn.
# ABOUTME: Configuration comes from the environment; see forecast_gateway.settings.

import logging

import uvicorn

from forecast_gateway.settings import Settings
from forecast_gateway.web import create_app


def main() -> None:
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info("Server up on http://localhost:%d", settings.port)
    uvicorn.run(create_app(settings=settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
