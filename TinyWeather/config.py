"""Environment-driven settings (optionally loaded from a .env file)."""
import logging
import os
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://weather.googleapis.com/v1"

T = TypeVar("T")


class ConfigError(ValueError):
    """Raised when an environment variable holds an unusable value."""


@dataclass
class Settings:
    api_key: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    base_url: str = DEFAULT_BASE_URL
    cache_duration_seconds: int = 1800
    hourly_hours: int = 12
    daily_days: int = 7
    retry_attempts: int = 3
    retry_delay_seconds: float = 1.0
    timeout: float = 10
    cache_dir: Optional[str] = None
    use_celsius: bool = False

    @property
    def has_location(self) -> bool:
        return self.lat is not None and self.lng is not None


def _read(name: str, parse: Callable[[str], T], default: T) -> T:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return parse(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"Invalid value for {name}: {raw!r} ({exc})") from exc


def _positive_int(raw: str) -> int:
    value = int(raw)
    if value <= 0:
        raise ValueError("must be positive")
    return value


def _non_negative_float(raw: str) -> float:
    value = float(raw)
    if value < 0:
        raise ValueError("must not be negative")
    return value


def _flag(raw: str) -> bool:
    lowered = raw.lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError("expected true/false")


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """
    Build settings from the environment.

    Missing API key or coordinates are allowed here; the CLI decides whether
    it needs them.

    Raises:
        ConfigError: If a variable is set to something that cannot be parsed
    """
    load_dotenv(dotenv_path)
    settings = Settings(
        api_key=os.getenv("WEATHER_API_KEY") or None,
        lat=_read("WEATHER_LAT", float, None),
        lng=_read("WEATHER_LON", float, None),
        base_url=os.getenv("WEATHER_BASE_URL") or DEFAULT_BASE_URL,
        cache_duration_seconds=_read("TINYWEATHER_CACHE_TTL", _positive_int, 1800),
        hourly_hours=_read("TINYWEATHER_HOURLY_HOURS", _positive_int, 12),
        daily_days=_read("TINYWEATHER_DAILY_DAYS", _positive_int, 7),
        retry_attempts=_read("TINYWEATHER_RETRY_ATTEMPTS", _positive_int, 3),
        retry_delay_seconds=_read("TINYWEATHER_RETRY_DELAY", _non_negative_float, 1.0),
        timeout=_read("TINYWEATHER_TIMEOUT", _non_negative_float, 10),
        cache_dir=os.getenv("TINYWEATHER_CACHE_DIR") or None,
        use_celsius=_read("TINYWEATHER_CELSIUS", _flag, False),
    )
    logging.debug(
        f"Settings loaded: lat={settings.lat} lng={settings.lng} "
        f"cache_ttl={settings.cache_duration_seconds}s retries={settings.retry_attempts}"
    )
    return settings
