"""Unit test fixtures - mocks and sample data."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from openweathermap_publisher.config import OpenWeatherMapConfig
from openweathermap_publisher.outputs import OutputManager
from openweathermap_publisher.publisher import PublisherState

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures" / "openweathermap"


@pytest.fixture
def current_weather_data() -> dict:
    """Current weather response for Amsterdam."""
    return json.loads((FIXTURES_DIR / "current_amsterdam.json").read_text())


@pytest.fixture
def daily_forecast_data() -> dict:
    """Daily forecast response for Amsterdam."""
    return json.loads((FIXTURES_DIR / "daily_amsterdam.json").read_text())


@pytest.fixture
def owm_config(sample_cities: list[str]) -> OpenWeatherMapConfig:
    """OpenWeatherMap configuration for testing."""
    return OpenWeatherMapConfig(
        apikey="test-key",
        cities=";".join(sample_cities),
        publisher_id="openweathermap",
        base_url="https://api.openweathermap.org/data/2.5",
    )


@pytest.fixture
def mock_writer() -> MagicMock:
    """Mock output writer."""
    return MagicMock()


@pytest.fixture
def publisher(mock_writer: MagicMock) -> PublisherState:
    """Publisher state writing to a mock writer."""
    return PublisherState(
        zone="test",
        publisher_id="openweathermap",
        output_manager=OutputManager(writers=[mock_writer]),
    )
