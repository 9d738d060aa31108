"""Weather provider abstraction - allows swapping different weather APIs."""
from abc import ABC, abstractmethod
from typing import List, Optional

from weather_data import CurrentConditions, DailyForecast, HourlyForecast


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers.

    Implementations return data already converted to internal units (°F, mph).
    """

    @abstractmethod
    def get_current(self, lat: float, lng: float) -> CurrentConditions:
        """
        Fetch current weather conditions.

        Raises:
            WeatherProviderError: If the provider fails to fetch data
        """
        pass

    @abstractmethod
    def get_hourly(self, lat: float, lng: float, hours: int) -> List[HourlyForecast]:
        """Fetch the next ``hours`` hourly forecasts, oldest first."""
        pass

    @abstractmethod
    def get_daily(self, lat: float, lng: float, days: int) -> List[DailyForecast]:
        """Fetch the next ``days`` daily forecasts, oldest first."""
        pass


class WeatherProviderError(Exception):
    """Exception raised when a weather provider fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
