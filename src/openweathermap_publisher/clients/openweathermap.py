"""OpenWeatherMap API client for current weather and daily forecasts."""

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..config import OpenWeatherMapConfig
from ..schemas import CurrentWeather, DailyForecast

logger = logging.getLogger(__name__)

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)


class OpenWeatherMapClient:
    """HTTP client for fetching weather data from the OpenWeatherMap API.

    Cities are queried by name (`q=`), the way they are listed in the
    configuration. Failures are logged and reported as None so the caller
    can decide how to flag them.
    """

    def __init__(
        self,
        config: OpenWeatherMapConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize OpenWeatherMap client.

        Args:
            config: OpenWeatherMap configuration settings.
            http_client: Optional custom HTTP client for testing.
        """
        self.config = config or OpenWeatherMapConfig()
        self._http_client = http_client

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Lazy-initialize HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.config.timeout_seconds,
                follow_redirects=True,
            )
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    def _params(self, city: str, language: str) -> dict[str, str]:
        return {
            "q": city,
            "appid": self.config.apikey,
            "lang": language,
            "units": self.config.units,
        }

    async def _get(
        self,
        path: str,
        params: dict[str, str],
        model: type[ResponseModel],
        city: str,
    ) -> ResponseModel | None:
        """GET an endpoint and parse the JSON body into a model.

        Args:
            path: Endpoint path relative to the base URL.
            params: Query parameters.
            model: Pydantic model to validate the response with.
            city: City name, for log messages.

        Returns:
            Parsed model or None if the request or parsing fails.
        """
        url = f"{self.config.base_url}{path}"
        try:
            response = await self.http_client.get(url, params=params)
            response.raise_for_status()
            data: Any = response.json()
        except httpx.HTTPError as e:
            logger.warning("Failed to fetch %s for %s: %s", path, city, e)
            return None
        except ValueError as e:
            logger.warning("Invalid JSON from %s for %s: %s", path, city, e)
            return None

        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.warning("Unexpected %s response for %s: %s", path, city, e)
            return None

    async def get_current_weather(self, city: str, language: str = "en") -> CurrentWeather | None:
        """Fetch the current weather for a city.

        Args:
            city: City name as expected by the API (e.g. "Amsterdam,nl").
            language: Language code for weather descriptions.

        Returns:
            CurrentWeather or None if the fetch fails.
        """
        return await self._get("/weather", self._params(city, language), CurrentWeather, city)

    async def get_daily_forecast(self, city: str, language: str = "en") -> DailyForecast | None:
        """Fetch the daily forecast for a city.

        This endpoint needs a paid OpenWeatherMap plan.

        Args:
            city: City name as expected by the API.
            language: Language code for weather descriptions.

        Returns:
            DailyForecast or None if the fetch fails.
        """
        params = self._params(city, language)
        params["cnt"] = str(self.config.forecast_days)
        return await self._get("/forecast/daily", params, DailyForecast, city)
