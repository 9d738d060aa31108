"""Realistic fake weather for development and the ``--mock`` CLI flag."""
import random
from datetime import datetime, timedelta
from typing import Optional

from thresholds import Condition
from weather_data import CurrentConditions, DailyForecast, HourlyForecast, WeatherData

BASE_TEMP = 65
_DAILY_CONDITIONS = (Condition.CLEAR, Condition.MOSTLY_CLEAR, Condition.PARTLY_CLOUDY, Condition.CLOUDY)


def _temp_offset(hour_of_day: int) -> int:
    # Cool morning, warming to an afternoon plateau, cooling into the evening
    if hour_of_day < 8:
        return -8
    if hour_of_day < 12:
        return (hour_of_day - 8) * 2
    if hour_of_day < 16:
        return 8
    return 8 - (hour_of_day - 16) * 2


def get_mock_weather_data(
    now: Optional[datetime] = None,
    seed: Optional[int] = None,
    hours: int = 12,
    days: int = 7,
    cache_duration_seconds: int = 1800,
) -> WeatherData:
    """
    Generate a 12-hour / 7-day payload that looks like a mild spring day.

    Pass ``seed`` for repeatable output.
    """
    rng = random.Random(seed)
    now = now or datetime.now().astimezone()
    start = now.replace(minute=0, second=0, microsecond=0)

    hourly = []
    for i in range(hours):
        time = start + timedelta(hours=i)
        hour_of_day = time.hour
        temp = BASE_TEMP + _temp_offset(hour_of_day) + rng.uniform(-2, 2)
        if 10 <= hour_of_day <= 14:
            uv = 7
        elif 8 <= hour_of_day <= 16:
            uv = 4
        else:
            uv = 1
        hourly.append(HourlyForecast(
            time=time,
            temperature=round(temp),
            feels_like=round(temp - 2),
            humidity=round(50 + rng.random() * 30),
            precipitation_probability=40 if 14 <= hour_of_day <= 17 else 10,
            uv_index=uv,
            wind_speed=round(5 + rng.random() * 10),
            condition=Condition.PARTLY_CLOUDY,
        ))

    daily = []
    for i in range(days):
        daily.append(DailyForecast(
            date=start.replace(hour=0) + timedelta(days=i),
            temp_high=round(BASE_TEMP + 10 + rng.uniform(-3, 3)),
            temp_low=round(BASE_TEMP - 5 + rng.uniform(-2, 2)),
            precipitation_probability=round(rng.random() * 40),
            condition=rng.choice(_DAILY_CONDITIONS),
            uv_index_max=6 + rng.randrange(3),
            sunrise="6:45 AM",
            sunset="7:30 PM",
        ))

    return WeatherData(
        current=CurrentConditions(
            temperature=BASE_TEMP + 3,
            feels_like=BASE_TEMP + 1,
            humidity=55,
            wind_speed=8,
            uv_index=5,
            precipitation_probability=15,
            condition=Condition.PARTLY_CLOUDY,
            observation_time=now,
            icon="partly_cloudy",
        ),
        hourly=hourly,
        daily=daily,
        fetched_at=now,
        expires_at=now + timedelta(seconds=cache_duration_seconds),
    )
