"""Weather service with caching and retries."""
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from retry import RetryPolicy, call_with_retry
from weather_cache import DEFAULT_CACHE_KEY, WeatherCache
from weather_data import CurrentConditions, DailyForecast, HourlyForecast, WeatherData
from weather_provider import WeatherProviderBase, WeatherProviderError


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WeatherService:
    """
    Service that wraps a weather provider with caching and retries.

    Fetches current, hourly and daily data in parallel, stamps the combined
    result with ``fetched_at``/``expires_at`` and keeps it in a cache until it
    expires (default: 30 minutes).
    """

    def __init__(
        self,
        provider: WeatherProviderBase,
        cache: Optional[WeatherCache] = None,
        cache_key: str = DEFAULT_CACHE_KEY,
        cache_duration_seconds: int = 1800,
        hourly_hours: int = 12,
        daily_days: int = 7,
        retry_policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize weather service.

        Args:
            provider: Weather provider to use
            cache: Where combined payloads are kept; None disables caching
            cache_key: Cache slot for the combined payload
            cache_duration_seconds: How long a fetched payload stays valid
            hourly_hours: Hourly forecast horizon
            daily_days: Daily forecast horizon
            retry_policy: Attempts and backoff for each provider call
            sleep: Wait function used between retries
            clock: Source of "now" (aware datetimes)
        """
        self.provider = provider
        self.cache = cache
        self.cache_key = cache_key
        self.cache_duration_seconds = cache_duration_seconds
        self.hourly_hours = hourly_hours
        self.daily_days = daily_days
        self.retry_policy = retry_policy or RetryPolicy()
        self._sleep = sleep
        self._clock = clock

    def _with_retry(self, operation, description: str):
        return call_with_retry(
            operation,
            self.retry_policy,
            retry_on=(WeatherProviderError,),
            sleep=self._sleep,
            description=description,
        )

    def fetch_current_conditions(self, lat: float, lng: float) -> CurrentConditions:
        return self._with_retry(lambda: self.provider.get_current(lat, lng), "Current conditions fetch")

    def fetch_hourly_forecast(self, lat: float, lng: float, hours: Optional[int] = None) -> List[HourlyForecast]:
        hours = hours or self.hourly_hours
        return self._with_retry(lambda: self.provider.get_hourly(lat, lng, hours), "Hourly forecast fetch")

    def fetch_daily_forecast(self, lat: float, lng: float, days: Optional[int] = None) -> List[DailyForecast]:
        days = days or self.daily_days
        return self._with_retry(lambda: self.provider.get_daily(lat, lng, days), "Daily forecast fetch")

    def get_cached_weather(self) -> Optional[WeatherData]:
        """Return the cached payload if it has not expired; expired entries are purged."""
        if self.cache is None:
            return None

        cached = self.cache.get(self.cache_key)
        if cached is None:
            return None

        now = self._clock()
        if cached.is_expired(now):
            logging.info(f"Cache expired at {cached.expires_at.isoformat()}, discarding")
            self.cache.clear(self.cache_key)
            return None

        age = (now - cached.fetched_at).total_seconds() if cached.fetched_at else 0.0
        logging.debug(f"Using cached weather data (age: {age:.1f}s, TTL: {self.cache_duration_seconds}s)")
        return cached

    def clear_cache(self) -> None:
        if self.cache is not None:
            self.cache.clear(self.cache_key)

    def fetch_all_weather(
        self,
        lat: float,
        lng: float,
        use_cache: bool = True,
        force_refresh: bool = False,
    ) -> WeatherData:
        """
        Get current, hourly and daily weather, using the cache if still fresh.

        Args:
            lat: Latitude
            lng: Longitude
            use_cache: Read from and write to the cache
            force_refresh: Skip the cache read (the result is still cached)

        Returns:
            WeatherData: Combined weather payload

        Raises:
            WeatherProviderError: If any of the three fetches fails after its retries
        """
        if use_cache and not force_refresh:
            cached = self.get_cached_weather()
            if cached is not None:
                logging.info("Using cached weather data")
                return cached

        logging.info("Fetching weather data from provider...")
        with ThreadPoolExecutor(max_workers=3, thread_name_prefix="weather-fetch") as pool:
            current_future = pool.submit(self.fetch_current_conditions, lat, lng)
            hourly_future = pool.submit(self.fetch_hourly_forecast, lat, lng)
            daily_future = pool.submit(self.fetch_daily_forecast, lat, lng)
            current = current_future.result()
            hourly = hourly_future.result()
            daily = daily_future.result()

        now = self._clock()
        weather = WeatherData(
            current=current,
            hourly=hourly,
            daily=daily,
            fetched_at=now,
            expires_at=now + timedelta(seconds=self.cache_duration_seconds),
        )
        logging.info(
            f"Weather fetch successful: {current.temperature}°F, {current.condition.label}, "
            f"{len(hourly)} hours, {len(daily)} days"
        )

        if use_cache and self.cache is not None:
            self.cache.put(self.cache_key, weather)
            logging.info(f"Cached weather data until {weather.expires_at.isoformat()}")

        return weather

    def load_weather(self, lat: float, lng: float, force_refresh: bool = False) -> WeatherData:
        """
        Fetch weather, falling back to the last good cached payload on failure.

        Raises:
            WeatherProviderError: If fetching fails and nothing usable is cached
        """
        try:
            return self.fetch_all_weather(lat, lng, force_refresh=force_refresh)
        except WeatherProviderError as e:
            cached = self.get_cached_weather()
            if cached is not None:
                logging.warning(f"Weather fetch failed ({e}), using cached data from {cached.fetched_at}")
                return cached
            logging.error(f"Weather fetch failed and no cache available: {e}")
            raise

    def is_stale(self, weather: WeatherData) -> bool:
        return weather.is_expired(self._clock())
