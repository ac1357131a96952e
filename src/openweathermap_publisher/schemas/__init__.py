"""Publisher and OpenWeatherMap schemas.

Pydantic models for API parsing and message serialization.
"""

from .enums import (
    CURRENT_INSTANCE,
    FORECAST_INSTANCE,
    LAST_HOUR_INSTANCE,
    MAX_INSTANCE,
    MIN_INSTANCE,
    PUBLISHER_NODE_ID,
    DataType,
    IOType,
)
from .node import ConfigAttr, ForecastMessage, HistoryValue, Node, Output, OutputValueMessage
from .weather import CurrentWeather, DailyForecast, DailyForecastItem

__all__ = [
    "CURRENT_INSTANCE",
    "FORECAST_INSTANCE",
    "LAST_HOUR_INSTANCE",
    "MAX_INSTANCE",
    "MIN_INSTANCE",
    "PUBLISHER_NODE_ID",
    "ConfigAttr",
    "CurrentWeather",
    "DailyForecast",
    "DailyForecastItem",
    "DataType",
    "ForecastMessage",
    "HistoryValue",
    "IOType",
    "Node",
    "Output",
    "OutputValueMessage",
]
