"""Tests for units module."""
from datetime import datetime, timezone

import pytest

from units import (
    FIELD_DEFAULTS,
    celsius_to_fahrenheit,
    coerce_field,
    coerce_number,
    fahrenheit_to_celsius,
    first_present,
    format_hour,
    format_temperature,
    format_temperature_short,
    mps_to_mph,
    parse_timestamp,
    round_half_up,
)


def test_round_half_up():
    """Halves round up rather than to even."""
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(84.49) == 84
    assert round_half_up(-0.5) == 0


@pytest.mark.parametrize("value,expected", [
    (12, 12),
    (12.5, 12.5),
    ("7.5", 7.5),
    (None, 99),
    ("n/a", 99),
    (True, 99),
    (float("nan"), 99),
    ({"degrees": 3}, 99),
])
def test_coerce_number(value, expected):
    assert coerce_number(value, 99) == expected


def test_coerce_field_uses_documented_defaults():
    assert coerce_field("humidity", None) == 50
    assert coerce_field("uv_index", "high") == 0
    assert coerce_field("precipitation_probability", None) == 0
    assert FIELD_DEFAULTS["temperature"] == 70


def test_first_present_walks_paths_in_order():
    record = {"temperature": {"degrees": 21}, "wind": {"speed": {"value": 4}}}
    assert first_present(record, ("feelsLike",), ("temperature", "degrees")) == 21
    assert first_present(record, ("wind", "speed", "value")) == 4
    assert first_present(record, ("temperature", "degrees", "deeper")) is None
    assert first_present(record, ("missing",)) is None


@pytest.mark.parametrize("celsius,fahrenheit", [
    (0, 32),
    (20, 68),
    (-40, -40),
    (21.5, 71),
    (35.6, 96),
])
def test_celsius_to_fahrenheit(celsius, fahrenheit):
    assert celsius_to_fahrenheit(celsius) == fahrenheit


def test_celsius_to_fahrenheit_defaults_to_70():
    assert celsius_to_fahrenheit(None) == 70
    assert celsius_to_fahrenheit("warm") == 70


def test_mps_to_mph():
    assert mps_to_mph(10) == 22
    assert mps_to_mph(1) == 2
    assert mps_to_mph(None) == 0


def test_parse_timestamp_iso_with_nanoseconds():
    parsed = parse_timestamp("2024-05-15T14:00:00.123456789Z")
    assert parsed.tzinfo is not None
    assert parsed == datetime(2024, 5, 15, 14, 0, 0, 123456, tzinfo=timezone.utc)


def test_parse_timestamp_other_shapes():
    assert parse_timestamp(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)
    day = parse_timestamp({"year": 2024, "month": 5, "day": 18})
    assert (day.year, day.month, day.day) == (2024, 5, 18)


def test_parse_timestamp_falls_back_to_default():
    default = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert parse_timestamp("not a date", default) is default
    assert parse_timestamp(None, default) is default
    assert parse_timestamp({"year": 2024}, default) is default


def test_format_temperature():
    assert format_temperature(72) == "72°F"
    assert format_temperature(72, use_celsius=True) == "22°C"
    assert format_temperature_short(32, use_celsius=True) == "0°"
    assert format_temperature_short(71.6) == "72°"
    assert fahrenheit_to_celsius(212) == 100


@pytest.mark.parametrize("hour,expected", [
    (0, "12am"),
    (7, "7am"),
    (12, "12pm"),
    (15, "3pm"),
    (24, "12am"),
])
def test_format_hour(hour, expected):
    assert format_hour(hour) == expected


def test_format_hour_accepts_datetime():
    assert format_hour(datetime(2024, 5, 15, 19, 30)) == "7pm"
