"""Unit tests for OpenWeatherMap client."""

import httpx
import pytest
import respx

from openweathermap_publisher.clients.openweathermap import OpenWeatherMapClient
from openweathermap_publisher.config import OpenWeatherMapConfig

BASE_URL = "https://api.openweathermap.org/data/2.5"


@pytest.fixture
def client(owm_config: OpenWeatherMapConfig) -> OpenWeatherMapClient:
    """OpenWeatherMap client for testing."""
    return OpenWeatherMapClient(config=owm_config)


class TestGetCurrentWeather:
    @respx.mock
    @pytest.mark.asyncio
    async def test_parses_current_weather(self, client: OpenWeatherMapClient, current_weather_data: dict):
        """Test fetching and parsing current weather."""
        respx.get(f"{BASE_URL}/weather").mock(
            return_value=httpx.Response(200, json=current_weather_data)
        )

        current = await client.get_current_weather("Amsterdam", "nl")

        assert current is not None
        assert current.name == "Amsterdam"
        assert current.description() == "light rain"
        assert current.main.temp == 12.34
        assert current.main.humidity == 87
        assert current.main.pressure == 1012
        assert current.wind.speed == 5.66
        assert current.wind.deg == 230
        assert current.rain.last_hour == 0.002
        assert current.snow.last_hour == 0.0

    @respx.mock
    @pytest.mark.asyncio
    async def test_sends_query_parameters(self, client: OpenWeatherMapClient, current_weather_data: dict):
        """Test city, API key, language and units are sent."""
        route = respx.get(f"{BASE_URL}/weather").mock(
            return_value=httpx.Response(200, json=current_weather_data)
        )

        await client.get_current_weather("Vancouver,ca", "fr")

        params = route.calls.last.request.url.params
        assert params["q"] == "Vancouver,ca"
        assert params["appid"] == "test-key"
        assert params["lang"] == "fr"
        assert params["units"] == "metric"

    @respx.mock
    @pytest.mark.asyncio
    async def test_http_error_returns_none(self, client: OpenWeatherMapClient):
        """Test handling 401 (bad API key)."""
        respx.get(f"{BASE_URL}/weather").mock(return_value=httpx.Response(401))

        assert await client.get_current_weather("Amsterdam") is None

    @respx.mock
    @pytest.mark.asyncio
    async def test_connection_error_returns_none(self, client: OpenWeatherMapClient):
        """Test handling connection failures."""
        respx.get(f"{BASE_URL}/weather").mock(side_effect=httpx.ConnectError("refused"))

        assert await client.get_current_weather("Amsterdam") is None

    @respx.mock
    @pytest.mark.asyncio
    async def test_invalid_json_returns_none(self, client: OpenWeatherMapClient):
        """Test handling a body that is not JSON."""
        respx.get(f"{BASE_URL}/weather").mock(
            return_value=httpx.Response(200, text="<html>maintenance</html>")
        )

        assert await client.get_current_weather("Amsterdam") is None

    @respx.mock
    @pytest.mark.asyncio
    async def test_missing_main_block_returns_none(self, client: OpenWeatherMapClient):
        """Test handling a payload without the main readings."""
        respx.get(f"{BASE_URL}/weather").mock(
            return_value=httpx.Response(200, json={"name": "Amsterdam", "weather": []})
        )

        assert await client.get_current_weather("Amsterdam") is None


class TestGetDailyForecast:
    @respx.mock
    @pytest.mark.asyncio
    async def test_parses_daily_forecast(self, client: OpenWeatherMapClient, daily_forecast_data: dict):
        """Test fetching and parsing the daily forecast."""
        route = respx.get(f"{BASE_URL}/forecast/daily").mock(
            return_value=httpx.Response(200, json=daily_forecast_data)
        )

        forecast = await client.get_daily_forecast("Amsterdam", "en")

        assert forecast is not None
        assert forecast.days is not None
        assert len(forecast.days) == 3
        assert forecast.days[0].temp.max == 9.36
        assert forecast.days[0].temp.min == 4.04
        assert forecast.days[2].description() == ""
        assert route.calls.last.request.url.params["cnt"] == "7"

    @respx.mock
    @pytest.mark.asyncio
    async def test_missing_list(self, client: OpenWeatherMapClient):
        """Test a forecast without a list parses with no days."""
        respx.get(f"{BASE_URL}/forecast/daily").mock(
            return_value=httpx.Response(200, json={"cod": "200", "cnt": 0})
        )

        forecast = await client.get_daily_forecast("Amsterdam")

        assert forecast is not None
        assert forecast.days is None

    @respx.mock
    @pytest.mark.asyncio
    async def test_http_error_returns_none(self, client: OpenWeatherMapClient):
        """Test handling 401 for accounts without forecast access."""
        respx.get(f"{BASE_URL}/forecast/daily").mock(return_value=httpx.Response(401))

        assert await client.get_daily_forecast("Amsterdam") is None


class TestClientLifecycle:
    @pytest.mark.asyncio
    async def test_client_close(self, owm_config: OpenWeatherMapConfig):
        """Test client close method."""
        client = OpenWeatherMapClient(config=owm_config)

        _ = client.http_client

        await client.close()

        assert client._http_client is None
