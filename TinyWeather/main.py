"""Tiny Weather - morning briefing for parents on the command line."""
import argparse
import logging
import signal
import sys
import time
from datetime import datetime
from typing import List, Optional

from child import Child, parse_child_spec
from config import ConfigError, Settings, load_settings
from google_weather_provider import GoogleWeatherProvider
from mock_weather import get_mock_weather_data
from report import build_briefing, render_briefing
from retry import RetryPolicy
from weather_cache import FileWeatherCache, MemoryWeatherCache
from weather_data import WeatherData
from weather_provider import WeatherProviderError
from weather_service import WeatherService


def _child_arg(value: str) -> Child:
    try:
        return parse_child_spec(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("tinyweather", description="Weather briefing for parents of young children")
    parser.add_argument(
        "--child",
        dest="children",
        action="append",
        type=_child_arg,
        default=[],
        metavar="NAME:MONTHS",
        help="Child to dress, e.g. Ava:8 (repeatable)",
    )
    parser.add_argument("--mock", action="store_true", help="Use generated weather instead of the API")
    parser.add_argument("--seed", type=int, default=None, help="Seed for --mock data")
    parser.add_argument("--celsius", action="store_true", help="Show temperatures in °C")
    parser.add_argument("--force-refresh", action="store_true", help="Ignore cached weather")
    parser.add_argument("--no-cache", action="store_true", help="Neither read nor write the cache")
    parser.add_argument("--cache-dir", default=None, help="Keep the weather cache in this directory")
    parser.add_argument("--watch", type=float, default=None, metavar="SECONDS", help="Refresh every SECONDS")
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: Optional[str], verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def load_config(args: argparse.Namespace) -> Settings:
    try:
        settings = load_settings()
    except ConfigError as exc:
        raise SystemExit(str(exc)) from exc

    if args.cache_dir:
        settings.cache_dir = args.cache_dir
    if args.celsius:
        settings.use_celsius = True

    if not args.mock:
        if not settings.api_key:
            raise SystemExit("Missing WEATHER_API_KEY in environment")
        if not settings.has_location:
            raise SystemExit("Missing WEATHER_LAT/WEATHER_LON in environment")

    logging.info(f"Configuration loaded: lat={settings.lat} lng={settings.lng} mock={args.mock}")
    return settings


def build_weather_service(settings: Settings) -> WeatherService:
    provider = GoogleWeatherProvider(
        api_key=settings.api_key,
        base_url=settings.base_url,
        timeout=settings.timeout,
    )
    if settings.cache_dir:
        cache = FileWeatherCache(settings.cache_dir)
    else:
        cache = MemoryWeatherCache()
    service = WeatherService(
        provider=provider,
        cache=cache,
        cache_duration_seconds=settings.cache_duration_seconds,
        hourly_hours=settings.hourly_hours,
        daily_days=settings.daily_days,
        retry_policy=RetryPolicy(settings.retry_attempts, settings.retry_delay_seconds),
    )
    logging.info(f"Weather service ready (cache ttl={settings.cache_duration_seconds}s)")
    return service


def get_weather(
    service: Optional[WeatherService],
    settings: Settings,
    args: argparse.Namespace,
) -> WeatherData:
    if service is None:
        return get_mock_weather_data(
            seed=args.seed,
            hours=settings.hourly_hours,
            days=settings.daily_days,
            cache_duration_seconds=settings.cache_duration_seconds,
        )
    if args.no_cache:
        return service.fetch_all_weather(settings.lat, settings.lng, use_cache=False)
    return service.load_weather(settings.lat, settings.lng, force_refresh=args.force_refresh)


def show_briefing(weather: WeatherData, children: List[Child], use_celsius: bool) -> None:
    briefing = build_briefing(weather, children, now=datetime.now().astimezone())
    print(render_briefing(briefing, use_celsius))


def weather_loop(service: Optional[WeatherService], settings: Settings, args: argparse.Namespace) -> None:
    last_error = None
    frame = 0
    while True:
        frame += 1
        logging.info(f"Refresh {frame}: fetching weather")
        try:
            weather = get_weather(service, settings, args)
            show_briefing(weather, args.children, settings.use_celsius)
            last_error = None
        except WeatherProviderError as err:
            if last_error != str(err):
                logging.error(f"Weather fetch failed: {err}")
            last_error = str(err)

        time.sleep(max(args.watch, 1.0))


def signal_handler(signum, frame):
    logging.info(f"Received signal {signum}, shutting down")
    raise KeyboardInterrupt()


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    settings = load_config(args)
    service = None if args.mock else build_weather_service(settings)

    if args.watch is None:
        try:
            weather = get_weather(service, settings, args)
        except WeatherProviderError as err:
            logging.error(f"Weather unavailable: {err}")
            return 1
        show_briefing(weather, args.children, settings.use_celsius)
        return 0

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)
    try:
        weather_loop(service, settings, args)
    except KeyboardInterrupt:
        logging.info("Stopping")
    return 0


if __name__ == "__main__":
    sys.exit(main())
