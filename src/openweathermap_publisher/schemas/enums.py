"""Enums for publisher nodes and outputs."""

from enum import Enum


class IOType(str, Enum):
    """Output type identifier, the first half of an output's (type, instance) pair."""

    WEATHER = "weather"
    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    ATMOSPHERIC_PRESSURE = "atmosphericpressure"
    WIND_HEADING = "windheading"
    WIND_SPEED = "windspeed"
    RAIN = "rain"
    SNOW = "snow"


class DataType(str, Enum):
    """Data type of a node configuration attribute."""

    BOOL = "bool"
    ENUM = "enum"
    INT = "int"
    NUMBER = "number"
    STRING = "string"


# Instance names distinguishing readings of the same output type
CURRENT_INSTANCE = "current"
LAST_HOUR_INSTANCE = "hour"
FORECAST_INSTANCE = "forecast"
MAX_INSTANCE = "max"
MIN_INSTANCE = "min"

# Node ID reserved for the publisher itself
PUBLISHER_NODE_ID = "$publisher"
