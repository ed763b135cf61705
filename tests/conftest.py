# ABOUTME: Shared test fixtures for the forecast gateway test suite.
# ABOUTME: Provides a ready-made client configuration.

import pytest

from forecast_gateway.models import ClientConfig


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(api_key="test-key")
