"""Configuration settings loaded from environment variables."""

from pydantic_settings import BaseSettings


class CSVConfig(BaseSettings):
    """CSV output configuration."""

    enabled: bool = True
    output_dir: str = "./data"
    value_file_prefix: str = "values"
    forecast_file_prefix: str = "forecasts"
    node_file_prefix: str = "nodes"
    buffer_size: int = 100  # Flush after N value rows

    model_config = {"env_prefix": "CSV_"}


class KafkaConfig(BaseSettings):
    """Kafka connection configuration."""

    enabled: bool = False
    bootstrap_servers: str = "localhost:9092"
    value_topic: str = "iot.output.value"
    forecast_topic: str = "iot.output.forecast"
    node_topic: str = "iot.node"

    model_config = {"env_prefix": "KAFKA_"}


class PublisherConfig(BaseSettings):
    """Node/output publisher configuration."""

    zone: str = "local"
    max_history: int = 24  # Values kept per output

    model_config = {"env_prefix": "PUBLISHER_"}


class OpenWeatherMapConfig(BaseSettings):
    """OpenWeatherMap weather app configuration."""

    apikey: str = ""
    cities: str = ""  # Semicolon-separated, e.g. "Amsterdam,nl;Paris"
    publisher_id: str = "openweathermap"
    languages: str = ""  # "city:lang;city2:lang2"
    base_url: str = "https://api.openweathermap.org/data/2.5"
    units: str = "metric"
    timeout_seconds: float = 30.0
    update_interval_seconds: int = 900  # 15 minutes
    forecast_enabled: bool = False  # Daily forecast needs a paid account
    forecast_interval_seconds: int = 21600  # 6 hours
    forecast_days: int = 7

    model_config = {"env_prefix": "OWM_"}

    def get_cities_list(self) -> list[str]:
        """Parse cities string into an ordered list without duplicates."""
        result: list[str] = []
        for city in self.cities.split(";"):
            city = city.strip()
            if city and city not in result:
                result.append(city)
        return result

    def get_languages_map(self) -> dict[str, str]:
        """Parse languages string into a city -> language mapping."""
        if not self.languages.strip():
            return {}
        result: dict[str, str] = {}
        for entry in self.languages.split(";"):
            city, sep, language = entry.rpartition(":")
            if not sep or not city.strip() or not language.strip():
                continue
            result[city.strip()] = language.strip()
        return result


class Settings(BaseSettings):
    """Application settings combining all configs."""

    log_level: str = "INFO"
    csv: CSVConfig = CSVConfig()
    kafka: KafkaConfig = KafkaConfig()
    publisher: PublisherConfig = PublisherConfig()
    owm: OpenWeatherMapConfig = OpenWeatherMapConfig()


def get_settings() -> Settings:
    """Load settings from environment."""
    return Settings()
