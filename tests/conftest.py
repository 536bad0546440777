"""Pytest configuration and fixtures."""

from collections.abc import Generator
from pathlib import Path

import pytest
from dotenv import load_dotenv
from prometheus_client import REGISTRY, CollectorRegistry

from common.core.flask_app import App
from exporter import create_app
from exporter.config import Settings

# Load test environment variables from .env.test
_TEST_ENV_FILE = Path(__file__).parent.parent / ".env.test"
if _TEST_ENV_FILE.exists():
    load_dotenv(_TEST_ENV_FILE, override=True)


@pytest.fixture(autouse=True)
def clear_prometheus_registry():
    """Clear Prometheus registry before and after each test to ensure isolation."""
    collectors = list(REGISTRY._collector_to_names.keys())
    for collector in collectors:
        try:
            REGISTRY.unregister(collector)
        except (KeyError, ValueError):
            pass
    yield
    collectors = list(REGISTRY._collector_to_names.keys())
    for collector in collectors:
        try:
            REGISTRY.unregister(collector)
        except (KeyError, ValueError):
            pass


def _build_test_settings() -> Settings:
    """Construct base Settings object for tests."""
    return Settings(
        flask_env="testing",
        latitude=49.9929,
        longitude=8.2473,
        radius=5.0,
        api_key="test-api-key",
        tankerkoenig_url="https://creativecommons.tankerkoenig.de/json/list.php",
        fetch_connect_timeout=1.0,
        fetch_read_timeout=2.0,
        fetch_max_response_bytes=1024 * 1024,
        verify_tls=True,
        skip_unpriced_fuels=True,
        prime_on_startup=False,
    )


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return _build_test_settings()


@pytest.fixture
def collector_registry() -> CollectorRegistry:
    """Fresh Prometheus registry for unit tests."""
    return CollectorRegistry()


@pytest.fixture
def app(test_settings: Settings) -> Generator[App, None, None]:
    """Create Flask app for testing."""
    application = create_app(test_settings, skip_background_services=True)

    try:
        yield application
    finally:
        application.container.shutdown_coordinator().shutdown()
        application.container.unwire()


@pytest.fixture
def client(app: App):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def container(app: App):
    """Access to the DI container."""
    return app.container
