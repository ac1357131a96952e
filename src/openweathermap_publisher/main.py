"""Main entry point for running the OpenWeatherMap publisher."""

import argparse
import asyncio
import logging
import signal
import sys
from typing import Awaitable, Callable, NoReturn

from . import __version__
from .config import Settings, get_settings
from .outputs import OutputManager
from .publisher import PublisherState
from .weather_app import WeatherApp

logger = logging.getLogger(__name__)

_shutdown_event: asyncio.Event | None = None


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Reduce noise from httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def handle_shutdown(signum: int, frame: object) -> None:
    """Handle shutdown signals gracefully."""
    sig_name = signal.Signals(signum).name
    logger.info("Received %s, initiating shutdown...", sig_name)
    if _shutdown_event:
        _shutdown_event.set()


async def run_periodic(
    name: str,
    cycle: Callable[[], Awaitable[object]],
    interval: float,
    shutdown_event: asyncio.Event,
) -> None:
    """Run a cycle, then wait `interval` seconds, until shutdown.

    Args:
        name: Name of the cycle, for log messages.
        cycle: Coroutine function running one cycle.
        interval: Seconds to wait after a cycle finishes before the next one.
        shutdown_event: Event to signal shutdown.
    """
    logger.info("Starting %s, %d seconds between cycles", name, interval)
    while not shutdown_event.is_set():
        try:
            await cycle()
        except Exception as e:
            logger.error("Error in %s: %s", name, e, exc_info=True)

        try:
            await asyncio.wait_for(shutdown_event.wait(), timeout=interval)
            break
        except asyncio.TimeoutError:
            continue
    logger.info("Stopped %s", name)


def create_publisher(settings: Settings) -> PublisherState:
    """Create the publisher state with the configured output writers."""
    output_manager = OutputManager(csv_config=settings.csv, kafka_config=settings.kafka)
    return PublisherState(
        zone=settings.publisher.zone,
        publisher_id=settings.owm.publisher_id,
        output_manager=output_manager,
        max_history=settings.publisher.max_history,
    )


async def run_weather_app(
    settings: Settings,
    run_once: bool = False,
    forecast: bool | None = None,
    publisher: PublisherState | None = None,
    app: WeatherApp | None = None,
) -> None:
    """Provision the city nodes and run the update cycles.

    Args:
        settings: Application settings.
        run_once: If True, run each cycle once and exit.
        forecast: Run the forecast cycle. None uses the configured setting.
        publisher: Optional publisher state for testing.
        app: Optional weather app for testing.
    """
    global _shutdown_event
    _shutdown_event = asyncio.Event()

    if forecast is None:
        forecast = settings.owm.forecast_enabled

    publisher = publisher or create_publisher(settings)
    app = app or WeatherApp(settings.owm)

    if not app.cities:
        logger.warning("No cities configured. Set OWM_CITIES")
    if not app.apikey:
        logger.warning("No API key configured. Set OWM_APIKEY")

    app.publish_nodes(publisher)
    publisher.start()

    try:
        if run_once:
            await app.update_weather(publisher)
            if forecast:
                await app.update_forecast(publisher)
            return

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, lambda s=sig: handle_shutdown(s, None))

        tasks = [
            asyncio.create_task(
                run_periodic(
                    "weather updates",
                    lambda: app.update_weather(publisher),
                    settings.owm.update_interval_seconds,
                    _shutdown_event,
                ),
                name="weather",
            )
        ]
        if forecast:
            tasks.append(
                asyncio.create_task(
                    run_periodic(
                        "forecast updates",
                        lambda: app.update_forecast(publisher),
                        settings.owm.forecast_interval_seconds,
                        _shutdown_event,
                    ),
                    name="forecast",
                )
            )

        try:
            await asyncio.gather(*tasks)
        except asyncio.CancelledError:
            logger.info("Update cycles cancelled")
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
                    try:
                        await task
                    except asyncio.CancelledError:
                        pass
    finally:
        await app.close()
        publisher.stop()


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="OpenWeatherMap Publisher - city weather as node outputs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Publish the weather of the configured cities continuously
  openweathermap-publisher

  # Run one update and exit (useful for testing or cron)
  openweathermap-publisher --once

  # Include the daily forecast (needs a paid account)
  openweathermap-publisher --forecast

Environment Variables:
  OWM_APIKEY              OpenWeatherMap API key
  OWM_CITIES              Semicolon-separated cities (e.g. "Amsterdam,nl;Paris")
  OWM_LANGUAGES           Per city language, "city:lang;..." (default: en)
  OWM_PUBLISHER_ID        Publisher ID (default: openweathermap)
  OWM_FORECAST_ENABLED    Enable daily forecast updates (default: false)
  PUBLISHER_ZONE          Zone of the published nodes (default: local)
  CSV_ENABLED             Write outputs to CSV files (default: true)
  KAFKA_ENABLED           Publish outputs to Kafka (default: false)
        """,
    )

    parser.add_argument(
        "--once",
        action="store_true",
        help="Run one update and exit",
    )

    parser.add_argument(
        "--forecast",
        action="store_true",
        default=None,
        help="Also publish the daily forecast (default: OWM_FORECAST_ENABLED)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: LOG_LEVEL or INFO)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser.parse_args()


def main() -> NoReturn:
    """Main entry point."""
    args = parse_args()

    settings = get_settings()
    setup_logging(args.log_level or settings.log_level)

    logger.info("OpenWeatherMap publisher starting")
    logger.info("Cities: %s", ", ".join(settings.owm.get_cities_list()) or "none")

    try:
        asyncio.run(
            run_weather_app(
                settings=settings,
                run_once=args.once,
                forecast=args.forecast,
            )
        )
    except KeyboardInterrupt:
        logger.info("Interrupted by user")

    logger.info("Shutdown complete")
    sys.exit(0)


if __name__ == "__main__":
    main()
