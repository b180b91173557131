import pytest
import structlog

from route_openapi.config import get_settings


@pytest.fixture(autouse=True)
def reset_global_state():
    yield
    # The CLI configures structlog against the runner's streams.
    structlog.reset_defaults()
    get_settings.cache_clear()
