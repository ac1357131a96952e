"""HTTP clients for weather data sources."""

from .openweathermap import OpenWeatherMapClient

__all__ = ["OpenWeatherMapClient"]
