"""Unit tests for main entry point."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from openweathermap_publisher.config import OpenWeatherMapConfig, Settings
from openweathermap_publisher.main import (
    create_publisher,
    parse_args,
    run_periodic,
    run_weather_app,
    setup_logging,
)


@pytest.fixture
def settings(owm_config: OpenWeatherMapConfig) -> Settings:
    return Settings(owm=owm_config)


@pytest.fixture
def mock_app() -> MagicMock:
    app = MagicMock()
    app.cities = ["Amsterdam"]
    app.apikey = "test-key"
    app.update_weather = AsyncMock(return_value=True)
    app.update_forecast = AsyncMock(return_value=True)
    app.close = AsyncMock()
    return app


class TestParseArgs:
    def test_default_args(self):
        """Test default argument values."""
        with patch("sys.argv", ["openweathermap-publisher"]):
            args = parse_args()

        assert args.once is False
        assert args.forecast is None
        assert args.log_level is None

    def test_once_flag(self):
        with patch("sys.argv", ["openweathermap-publisher", "--once"]):
            args = parse_args()

        assert args.once is True

    def test_forecast_flag(self):
        with patch("sys.argv", ["openweathermap-publisher", "--forecast"]):
            args = parse_args()

        assert args.forecast is True

    def test_log_level_arg(self):
        with patch("sys.argv", ["openweathermap-publisher", "--log-level", "DEBUG"]):
            args = parse_args()

        assert args.log_level == "DEBUG"


class TestSetupLogging:
    def test_setup_logging_info(self):
        setup_logging("INFO")

    def test_setup_logging_debug(self):
        setup_logging("DEBUG")


class TestCreatePublisher:
    def test_uses_configured_ids(self, settings: Settings, tmp_path):
        settings.csv.output_dir = str(tmp_path)

        publisher = create_publisher(settings)

        assert publisher.zone == settings.publisher.zone
        assert publisher.publisher_id == "openweathermap"


class TestRunPeriodic:
    @pytest.mark.asyncio
    async def test_runs_until_shutdown(self):
        cycle = AsyncMock()
        shutdown_event = asyncio.Event()

        async def trigger_shutdown():
            await asyncio.sleep(0.1)
            shutdown_event.set()

        await asyncio.gather(
            run_periodic("test", cycle, 0.02, shutdown_event),
            trigger_shutdown(),
        )

        assert cycle.await_count >= 2

    @pytest.mark.asyncio
    async def test_cycle_errors_do_not_stop_loop(self):
        cycle = AsyncMock(side_effect=RuntimeError("boom"))
        shutdown_event = asyncio.Event()

        async def trigger_shutdown():
            await asyncio.sleep(0.1)
            shutdown_event.set()

        await asyncio.gather(
            run_periodic("test", cycle, 0.02, shutdown_event),
            trigger_shutdown(),
        )

        assert cycle.await_count >= 2

    @pytest.mark.asyncio
    async def test_first_cycle_runs_before_waiting(self):
        """Test the interval is waited after a cycle, not before the first one."""
        shutdown_event = asyncio.Event()
        cycle = AsyncMock(side_effect=lambda: shutdown_event.set())

        await asyncio.wait_for(run_periodic("test", cycle, 3600, shutdown_event), timeout=1)

        cycle.assert_awaited_once()


class TestRunWeatherApp:
    @pytest.mark.asyncio
    async def test_run_once(self, settings: Settings, publisher, mock_app: MagicMock):
        """Test a single run provisions, updates and cleans up."""
        await run_weather_app(settings, run_once=True, publisher=publisher, app=mock_app)

        mock_app.publish_nodes.assert_called_once_with(publisher)
        mock_app.update_weather.assert_awaited_once_with(publisher)
        mock_app.update_forecast.assert_not_awaited()
        mock_app.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_run_once_with_forecast(self, settings: Settings, publisher, mock_app: MagicMock):
        await run_weather_app(
            settings, run_once=True, forecast=True, publisher=publisher, app=mock_app
        )

        mock_app.update_forecast.assert_awaited_once_with(publisher)

    @pytest.mark.asyncio
    async def test_forecast_from_config(self, settings: Settings, publisher, mock_app: MagicMock):
        settings.owm.forecast_enabled = True

        await run_weather_app(settings, run_once=True, publisher=publisher, app=mock_app)

        mock_app.update_forecast.assert_awaited_once_with(publisher)

    @pytest.mark.asyncio
    async def test_stops_publisher(
        self, settings: Settings, publisher, mock_app: MagicMock, mock_writer: MagicMock
    ):
        await run_weather_app(settings, run_once=True, publisher=publisher, app=mock_app)

        mock_writer.close.assert_called_once()
