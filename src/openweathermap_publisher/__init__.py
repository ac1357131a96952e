"""OpenWeatherMap Publisher - city weather republished as node outputs.

This package fetches the current weather (and optionally the daily forecast)
of configured cities from OpenWeatherMap and publishes it as named outputs of
one node per city:

- clients: async OpenWeatherMap API client
- publisher: node/output registry with value history and change detection
- outputs: CSV and Kafka writers for published values

Usage:
    from openweathermap_publisher import PublisherState, WeatherApp
"""

__version__ = "0.1.0"

from .config import Settings, get_settings
from .publisher import PublisherState
from .schemas import IOType, Node, Output
from .weather_app import WeatherApp

__all__ = [
    "IOType",
    "Node",
    "Output",
    "PublisherState",
    "Settings",
    "WeatherApp",
    "get_settings",
]
