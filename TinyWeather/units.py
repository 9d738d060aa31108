"""Unit conversion, coerce-or-default field handling and temperature display.

Provider payloads are parsed tolerantly: every numeric field goes through
``coerce_number`` with the default listed in ``FIELD_DEFAULTS`` so analyzers
only ever see real numbers.
"""
import math
import re
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Sequence, Union

Number = Union[int, float]

# One default per field, already in internal units (°F, mph, %).
FIELD_DEFAULTS = {
    "temperature": 70,
    "feels_like": 70,
    "temp_high": 70,
    "temp_low": 70,
    "humidity": 50,
    "wind_speed": 0,
    "uv_index": 0,
    "precipitation_probability": 0,
}

MPS_TO_MPH = 2.237

_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (``round`` would round to even)."""
    return int(math.floor(value + 0.5))


def coerce_number(value: Any, default: Number) -> Number:
    """Return ``value`` as a number, or ``default`` if it is missing or not numeric."""
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, (int, float)):
        return default if math.isnan(value) or math.isinf(value) else value
    if isinstance(value, str):
        try:
            parsed = float(value)
        except ValueError:
            return default
        return default if math.isnan(parsed) or math.isinf(parsed) else parsed
    return default


def coerce_field(field_name: str, value: Any) -> Number:
    return coerce_number(value, FIELD_DEFAULTS[field_name])


def first_present(record: Mapping, *paths: Sequence[str]) -> Any:
    """
    Walk each key path in order and return the first value found.

    ``first_present(hour, ("temperature", "degrees"), ("temperature",))``
    handles both ``{"temperature": {"degrees": 21}}`` and
    ``{"temperature": 21}``. Returns None if no path resolves.
    """
    for path in paths:
        node: Any = record
        for key in path:
            if not isinstance(node, Mapping) or key not in node:
                node = None
                break
            node = node[key]
        if node is not None:
            return node
    return None


def celsius_to_fahrenheit(celsius: Any, default: Number = FIELD_DEFAULTS["temperature"]) -> Number:
    """Convert °C to whole °F; non-numeric input yields ``default`` (already °F)."""
    value = coerce_number(celsius, None)
    if value is None:
        return default
    return round_half_up(value * 9 / 5 + 32)


def mps_to_mph(mps: Any) -> int:
    value = coerce_number(mps, None)
    if value is None:
        return FIELD_DEFAULTS["wind_speed"]
    return round_half_up(value * MPS_TO_MPH)


def fahrenheit_to_celsius(fahrenheit: float) -> int:
    return round_half_up((fahrenheit - 32) * 5 / 9)


def parse_timestamp(value: Any, default: Optional[datetime] = None) -> Optional[datetime]:
    """
    Parse the timestamp shapes providers send into an aware local datetime.

    Accepts datetimes, ISO-8601 strings (a trailing ``Z`` and nanosecond
    fractions included), UNIX seconds and ``{"year", "month", "day"}`` dicts.
    Anything else returns ``default``.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        text = _FRACTION_RE.sub(r"\1", value.strip())
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return default
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        parsed = datetime.fromtimestamp(value, tz=timezone.utc)
    elif isinstance(value, Mapping) and {"year", "month", "day"} <= set(value):
        try:
            parsed = datetime(int(value["year"]), int(value["month"]), int(value["day"]))
        except (TypeError, ValueError):
            return default
    else:
        return default
    return parsed.astimezone()


def format_temperature(temp_f: float, use_celsius: bool = False) -> str:
    """Format an internal °F temperature for display, e.g. "72°F" or "22°C"."""
    if use_celsius:
        return f"{fahrenheit_to_celsius(temp_f)}°C"
    return f"{round_half_up(temp_f)}°F"


def format_temperature_short(temp_f: float, use_celsius: bool = False) -> str:
    if use_celsius:
        return f"{fahrenheit_to_celsius(temp_f)}°"
    return f"{round_half_up(temp_f)}°"


def format_hour(hour: Union[int, datetime]) -> str:
    """Format an hour of day as "7am", "12pm", "3pm"."""
    if isinstance(hour, datetime):
        hour = hour.hour
    hour %= 24
    suffix = "pm" if hour >= 12 else "am"
    hour12 = hour - 12 if hour > 12 else 12 if hour == 0 else hour
    return f"{hour12}{suffix}"
