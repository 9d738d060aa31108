"""Shared fixtures for building weather payloads in tests."""
from datetime import datetime, timedelta, timezone

import pytest

from thresholds import Condition
from weather_data import CurrentConditions, DailyForecast, HourlyForecast, WeatherData

# A Wednesday, 7am UTC
FIXED_NOW = datetime(2024, 5, 15, 7, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def make_hour():
    """Factory for an hourly record; defaults describe a pleasant hour."""
    def _make(hour_of_day=10, temperature=68, humidity=50, rain=5, uv=3, wind=3,
              feels_like=None, condition=Condition.CLEAR, day=FIXED_NOW):
        return HourlyForecast(
            time=day.replace(hour=hour_of_day, minute=0, second=0, microsecond=0),
            temperature=temperature,
            feels_like=temperature if feels_like is None else feels_like,
            humidity=humidity,
            precipitation_probability=rain,
            uv_index=uv,
            wind_speed=wind,
            condition=condition,
        )
    return _make


@pytest.fixture
def make_current():
    def _make(temperature=68, humidity=50, wind=3, uv=3, rain=5, condition=Condition.CLEAR,
              observation_time=FIXED_NOW):
        return CurrentConditions(
            temperature=temperature,
            feels_like=temperature,
            humidity=humidity,
            wind_speed=wind,
            uv_index=uv,
            precipitation_probability=rain,
            condition=condition,
            observation_time=observation_time,
        )
    return _make


@pytest.fixture
def make_day():
    def _make(date, high=72, low=55, rain=10, condition=Condition.CLEAR):
        return DailyForecast(
            date=date,
            temp_high=high,
            temp_low=low,
            precipitation_probability=rain,
            condition=condition,
        )
    return _make


@pytest.fixture
def make_weather(make_current, make_day):
    """Factory for a full payload; ``hourly`` defaults to an empty list."""
    def _make(current=None, hourly=None, daily=None, fetched_at=FIXED_NOW, ttl_seconds=1800):
        if daily is None:
            daily = [make_day(FIXED_NOW + timedelta(days=i)) for i in range(7)]
        return WeatherData(
            current=current or make_current(),
            hourly=hourly or [],
            daily=daily,
            fetched_at=fetched_at,
            expires_at=fetched_at + timedelta(seconds=ttl_seconds),
        )
    return _make
