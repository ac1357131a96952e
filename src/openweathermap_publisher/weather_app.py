"""OpenWeatherMap weather app publishing the weather of cities as node outputs.

Each configured city becomes a node with these outputs:

    node: city
        weather      / current   weather description
        temperature  / current
        humidity     / current
        atmosphericpressure / current
        windheading  / current
        windspeed    / current
        rain         / hour      last hour rain
        snow         / hour      last hour snow
        weather      / forecast  daily forecast placeholders
        temperature  / max
        temperature  / min

The publisher detects value changes and publishes them.
"""

import logging
from datetime import datetime, timezone

from .clients import OpenWeatherMapClient
from .config import OpenWeatherMapConfig
from .publisher import PublisherState
from .schemas import (
    CURRENT_INSTANCE,
    FORECAST_INSTANCE,
    LAST_HOUR_INSTANCE,
    MAX_INSTANCE,
    MIN_INSTANCE,
    PUBLISHER_NODE_ID,
    ConfigAttr,
    DataType,
    HistoryValue,
    IOType,
    Node,
)

logger = logging.getLogger(__name__)

LANGUAGE_CONFIG = "language"
DEFAULT_LANGUAGE = "en"

# (type, instance) of every output created on a city node
CITY_OUTPUTS: list[tuple[IOType, str]] = [
    (IOType.WEATHER, CURRENT_INSTANCE),
    (IOType.TEMPERATURE, CURRENT_INSTANCE),
    (IOType.HUMIDITY, CURRENT_INSTANCE),
    (IOType.ATMOSPHERIC_PRESSURE, CURRENT_INSTANCE),
    (IOType.WIND_HEADING, CURRENT_INSTANCE),
    (IOType.WIND_SPEED, CURRENT_INSTANCE),
    (IOType.RAIN, LAST_HOUR_INSTANCE),
    (IOType.SNOW, LAST_HOUR_INSTANCE),
    (IOType.WEATHER, FORECAST_INSTANCE),
    (IOType.TEMPERATURE, MAX_INSTANCE),
    (IOType.TEMPERATURE, MIN_INSTANCE),
]

CURRENT_WEATHER_ERROR = "Current weather not available"
FORECAST_ERROR = "Error getting the daily forecast"
FORECAST_EMPTY_ERROR = "Daily forecast not provided"


class WeatherApp:
    """Fetches weather per city and writes it into the city node outputs."""

    def __init__(
        self,
        config: OpenWeatherMapConfig | None = None,
        client: OpenWeatherMapClient | None = None,
    ) -> None:
        """Initialize the weather app.

        Args:
            config: OpenWeatherMap configuration with cities and API key.
            client: Optional OpenWeatherMapClient for testing.
        """
        self.config = config or OpenWeatherMapConfig()
        self.cities = self.config.get_cities_list()
        self.apikey = self.config.apikey
        self.publisher_id = self.config.publisher_id
        self._client = client

    @property
    def client(self) -> OpenWeatherMapClient:
        """Lazy-initialize OpenWeatherMap client."""
        if self._client is None:
            self._client = OpenWeatherMapClient(self.config)
        return self._client

    async def close(self) -> None:
        """Clean up resources."""
        if self._client is not None:
            await self._client.close()

    def publish_nodes(self, publisher: PublisherState) -> None:
        """Create a node with the weather outputs for each configured city.

        Safe to call repeatedly; existing nodes, outputs and configured
        languages are kept.
        """
        languages = self.config.get_languages_map()

        for city in self.cities:
            node = publisher.nodes.update_node(
                Node(zone=publisher.zone, publisher_id=self.publisher_id, node_id=city)
            )

            language = ConfigAttr(
                name=LANGUAGE_CONFIG,
                datatype=DataType.ENUM,
                description="Reporting language. See https://openweathermap.org/current for more options",
                default=DEFAULT_LANGUAGE,
                value=languages.get(city),
            )
            publisher.nodes.update_node_config(node, language)

            for output_type, instance in CITY_OUTPUTS:
                publisher.outputs.new_output(node, output_type, instance)

        publisher.nodes.set_node_config_handler(self.on_node_config)
        logger.info("Published %d city nodes", len(self.cities))

    def _city_nodes(self, publisher: PublisherState) -> list[Node]:
        return [n for n in publisher.nodes.get_all_nodes() if n.node_id != PUBLISHER_NODE_ID]

    async def update_weather(self, publisher: PublisherState) -> bool:
        """Fetch the current weather of each city node and update its outputs.

        The first city that fails aborts the cycle for all remaining cities;
        the next cycle tries again.

        Returns:
            True if all cities were updated.
        """
        logger.info("Updating current weather")
        history = publisher.output_history

        for node in self._city_nodes(publisher):
            language = node.get_config_value(LANGUAGE_CONFIG, DEFAULT_LANGUAGE)
            current = await self.client.get_current_weather(node.node_id, language)
            if current is None:
                publisher.set_error_status(node, CURRENT_WEATHER_ERROR)
                return False

            values: list[tuple[IOType, str, str]] = [
                (IOType.WEATHER, CURRENT_INSTANCE, current.description()),
                (IOType.TEMPERATURE, CURRENT_INSTANCE, f"{current.main.temp:.1f}"),
                (IOType.HUMIDITY, CURRENT_INSTANCE, f"{current.main.humidity:d}"),
                (IOType.ATMOSPHERIC_PRESSURE, CURRENT_INSTANCE, f"{current.main.pressure:.0f}"),
                (IOType.WIND_SPEED, CURRENT_INSTANCE, f"{current.wind.speed:.1f}"),
                (IOType.WIND_HEADING, CURRENT_INSTANCE, f"{current.wind.deg:.0f}"),
                (IOType.RAIN, LAST_HOUR_INSTANCE, f"{current.rain.last_hour * 1000:.1f}"),
                (IOType.SNOW, LAST_HOUR_INSTANCE, f"{current.snow.last_hour * 1000:.1f}"),
            ]
            for output_type, instance, value in values:
                history.update_output_value(node, output_type, instance, value)

            publisher.clear_error_status(node)

        publisher.output_manager.flush()
        return True

    async def update_forecast(self, publisher: PublisherState) -> bool:
        """Fetch the daily forecast of each city node and publish it.

        Needs a paid OpenWeatherMap account. Aborts on the first city that
        fails, like update_weather.

        Returns:
            True if all cities were updated.
        """
        logger.info("Updating daily forecast")

        for node in self._city_nodes(publisher):
            language = node.get_config_value(LANGUAGE_CONFIG, DEFAULT_LANGUAGE)
            forecast = await self.client.get_daily_forecast(node.node_id, language)
            if forecast is None:
                publisher.set_error_status(node, FORECAST_ERROR)
                return False
            if not forecast.days:
                publisher.set_error_status(node, FORECAST_EMPTY_ERROR)
                return False

            weather_list: list[HistoryValue] = []
            max_temp_list: list[HistoryValue] = []
            min_temp_list: list[HistoryValue] = []

            for day in forecast.days:
                timestamp = datetime.fromtimestamp(day.dt, tz=timezone.utc)
                weather_list.append(HistoryValue(timestamp=timestamp, value=day.description()))
                max_temp_list.append(HistoryValue(timestamp=timestamp, value=f"{day.temp.max:.1f}"))
                min_temp_list.append(HistoryValue(timestamp=timestamp, value=f"{day.temp.min:.1f}"))

            publisher.update_forecast(node, IOType.WEATHER, FORECAST_INSTANCE, weather_list)
            publisher.update_forecast(node, IOType.TEMPERATURE, MAX_INSTANCE, max_temp_list)
            publisher.update_forecast(node, IOType.TEMPERATURE, MIN_INSTANCE, min_temp_list)

        publisher.output_manager.flush()
        return True

    def on_node_config(self, node: Node, params: dict[str, str]) -> dict[str, str] | None:
        """Handle requests to update node configuration.

        Requests are acknowledged but not applied.
        """
        logger.info("Config update for node %s not applied: %s", node.node_id, params)
        return None
