"""Tests for mock weather data."""
from datetime import timedelta

from mock_weather import get_mock_weather_data


def test_mock_weather_shape(fixed_now):
    weather = get_mock_weather_data(now=fixed_now, seed=1)

    assert len(weather.hourly) == 12
    assert len(weather.daily) == 7
    assert weather.fetched_at == fixed_now
    assert weather.expires_at == fixed_now + timedelta(seconds=1800)
    assert weather.current.temperature == 68


def test_mock_weather_is_chronological(fixed_now):
    weather = get_mock_weather_data(now=fixed_now, seed=1)

    times = [h.time for h in weather.hourly]
    assert times == sorted(times)
    assert weather.hourly[0].time == fixed_now.replace(minute=0)


def test_mock_weather_seed_is_repeatable(fixed_now):
    first = get_mock_weather_data(now=fixed_now, seed=42)
    second = get_mock_weather_data(now=fixed_now, seed=42)
    assert first == second


def test_mock_weather_shape_of_day(fixed_now):
    """Afternoon rain chance and midday UV peak."""
    weather = get_mock_weather_data(now=fixed_now, seed=3)
    by_hour = {h.time.hour: h for h in weather.hourly}

    assert by_hour[15].precipitation_probability == 40
    assert by_hour[9].precipitation_probability == 10
    assert by_hour[12].uv_index == 7
    assert by_hour[7].uv_index == 1
    assert by_hour[7].temperature < by_hour[13].temperature
