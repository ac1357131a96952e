"""Shared test fixtures for all tests."""

import pytest


@pytest.fixture
def sample_city() -> str:
    """Sample city name as OpenWeatherMap expects it."""
    return "Amsterdam"


@pytest.fixture
def sample_cities() -> list[str]:
    """Sample list of configured cities."""
    return ["Amsterdam", "Paris", "Vancouver,ca"]
