"""OpenWeatherMap API response schemas.

Only the fields the weather app publishes are modelled; everything else in
the API response is ignored.
"""

from pydantic import BaseModel, ConfigDict, Field


class WeatherCondition(BaseModel):
    """One entry of the `weather` list."""

    id: int | None = None
    main: str = ""
    description: str = ""


class MainReading(BaseModel):
    """The `main` block of a current weather response."""

    temp: float
    humidity: int
    pressure: float


class Wind(BaseModel):
    """The `wind` block."""

    speed: float = 0.0
    deg: float = 0.0


class Precipitation(BaseModel):
    """Rain or snow volume in mm; absent blocks mean none fell."""

    model_config = ConfigDict(populate_by_name=True)

    last_hour: float = Field(default=0.0, alias="1h")
    last_3_hours: float = Field(default=0.0, alias="3h")


class CurrentWeather(BaseModel):
    """Response of the `/weather` endpoint."""

    name: str = ""
    dt: int | None = None
    weather: list[WeatherCondition] = []
    main: MainReading
    wind: Wind = Wind()
    rain: Precipitation = Precipitation()
    snow: Precipitation = Precipitation()

    def description(self) -> str:
        """First weather description, empty string when there is none."""
        if self.weather:
            return self.weather[0].description
        return ""


class ForecastTemperature(BaseModel):
    """The `temp` block of a daily forecast entry."""

    day: float | None = None
    min: float
    max: float


class DailyForecastItem(BaseModel):
    """Forecast for a single day."""

    dt: int
    temp: ForecastTemperature
    weather: list[WeatherCondition] = []

    def description(self) -> str:
        """First weather description, empty string when there is none."""
        if self.weather:
            return self.weather[0].description
        return ""


class DailyForecast(BaseModel):
    """Response of the `/forecast/daily` endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    cnt: int | None = None
    days: list[DailyForecastItem] | None = Field(default=None, alias="list")
