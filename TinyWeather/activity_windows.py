"""Activity window analysis - finds the best hours for outdoor play.

Each forecast hour gets a 0-100 score from five weighted factors
(temperature, rain chance, UV, humidity, wind). Scores map to a quality
bucket, and consecutive same-quality hours inside the outdoor time range are
grouped into windows.
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional

from thresholds import (
    DEFAULT_CATALOG,
    HumidityThresholds,
    RainThresholds,
    TemperatureThresholds,
    ThresholdCatalog,
    UVThresholds,
    WindThresholds,
)
from units import format_hour, round_half_up
from weather_data import HourlyForecast, WeatherData


class Quality(str, Enum):
    PERFECT = "perfect"
    GOOD = "good"
    FAIR = "fair"
    SKIP = "skip"

    @property
    def emoji(self) -> str:
        return _QUALITY_EMOJI[self]


_QUALITY_EMOJI = {
    Quality.PERFECT: "✨",
    Quality.GOOD: "✓",
    Quality.FAIR: "~",
    Quality.SKIP: "✗",
}


@dataclass
class ActivityHour:
    time: datetime
    temperature: float
    feels_like: float
    quality: Quality
    score: int
    reason: str
    rain_chance: float
    uv_index: float

    @property
    def emoji(self) -> str:
        return self.quality.emoji


@dataclass
class ActivityWindow:
    start_time: datetime
    end_time: datetime  # exclusive: one hour past the last member hour
    quality: Quality
    avg_score: int
    avg_temp: int
    label: str
    description: str
    hours: List[ActivityHour] = field(default_factory=list)


@dataclass
class ActivityAnalysis:
    hours: List[ActivityHour]
    windows: List[ActivityWindow]
    best_window: Optional[ActivityWindow]
    day_summary: str

    @property
    def has_good_windows(self) -> bool:
        return any(w.quality in (Quality.PERFECT, Quality.GOOD) for w in self.windows)


# ============================================================================
# SCORING
# ============================================================================

def score_temperature(temp: float, t: TemperatureThresholds = DEFAULT_CATALOG.temperature) -> float:
    """100 in the ideal band, sliding down through cool/warm, flat low scores at the extremes."""
    if t.ideal_outdoor_low <= temp <= t.ideal_outdoor_high:
        return 100

    if temp < t.too_cold_for_playground:
        return max(0, 30 - (t.too_cold_for_playground - temp) * 3)

    if temp < t.ideal_outdoor_low:
        span = t.ideal_outdoor_low - t.too_cold_for_playground
        return 50 + (temp - t.too_cold_for_playground) / span * 50

    if temp <= t.warm:
        span = t.warm - t.ideal_outdoor_high
        return 100 - (temp - t.ideal_outdoor_high) / span * 30

    if temp <= t.hot:
        return 50
    if temp <= t.very_hot:
        return 30
    return 10


def score_rain_probability(rain_chance: float, r: RainThresholds = DEFAULT_CATALOG.rain) -> int:
    if rain_chance <= r.unlikely:
        return 100
    if rain_chance <= r.slight_chance:
        return 90
    if rain_chance <= r.possible:
        return 70
    if rain_chance <= r.likely:
        return 40
    if rain_chance <= r.very_likely:
        return 20
    return 5


def score_uv_index(uv_index: float, u: UVThresholds = DEFAULT_CATALOG.uv) -> int:
    if uv_index <= u.low:
        return 100
    if uv_index <= u.moderate:
        return 90
    if uv_index <= u.high:
        return 70
    if uv_index <= u.very_high:
        return 40
    return 20


def score_humidity(humidity: float, h: HumidityThresholds = DEFAULT_CATALOG.humidity) -> float:
    if h.comfortable_low <= humidity <= h.comfortable_high:
        return 100
    if humidity < h.comfortable_low:
        # Too dry: mildly uncomfortable, one point per percent below the band
        return max(0, 80 - (h.comfortable_low - humidity))
    if humidity <= h.humid:
        return 70
    if humidity <= h.very_humid:
        return 50
    return 30


def score_wind(wind_speed: float, w: WindThresholds = DEFAULT_CATALOG.wind) -> int:
    if wind_speed <= w.calm:
        return 100
    if wind_speed <= w.light:
        return 90
    if wind_speed <= w.moderate:
        return 75
    if wind_speed <= w.breezy:
        return 50
    if wind_speed <= w.windy:
        return 30
    return 10


def calculate_hour_score(hour: HourlyForecast, catalog: ThresholdCatalog = DEFAULT_CATALOG) -> int:
    weights = catalog.weights
    weighted = (
        score_temperature(hour.temperature, catalog.temperature) * weights.temperature
        + score_rain_probability(hour.precipitation_probability, catalog.rain) * weights.rain_chance
        + score_uv_index(hour.uv_index, catalog.uv) * weights.uv_index
        + score_humidity(hour.humidity, catalog.humidity) * weights.humidity
        + score_wind(hour.wind_speed, catalog.wind) * weights.wind
    )
    return round_half_up(weighted)


def get_quality_from_score(score: int, catalog: ThresholdCatalog = DEFAULT_CATALOG) -> Quality:
    if score >= catalog.quality.perfect:
        return Quality.PERFECT
    if score >= catalog.quality.good:
        return Quality.GOOD
    if score >= catalog.quality.fair:
        return Quality.FAIR
    return Quality.SKIP


def get_hour_reason(hour: HourlyForecast, score: int, catalog: ThresholdCatalog = DEFAULT_CATALOG) -> str:
    """Describe what holds an hour back, or praise it if nothing does."""
    t, r, u, h, w = catalog.temperature, catalog.rain, catalog.uv, catalog.humidity, catalog.wind
    issues = []

    if hour.temperature < t.too_cold_for_playground:
        issues.append("Too cold")
    elif hour.temperature < t.cool:
        issues.append("Chilly")
    elif hour.temperature > t.hot:
        issues.append("Too hot")
    elif hour.temperature > t.warm:
        issues.append("Warm")

    if hour.precipitation_probability >= r.very_likely:
        issues.append("Rain likely")
    elif hour.precipitation_probability >= r.likely:
        issues.append("Chance of rain")

    if hour.uv_index >= u.very_high:
        issues.append("Extreme UV")
    elif hour.uv_index >= u.high:
        issues.append("High UV")

    if hour.humidity >= h.oppressive:
        issues.append("Very humid")
    elif hour.humidity >= h.very_humid:
        issues.append("Humid")

    if hour.wind_speed >= w.windy:
        issues.append("Very windy")
    elif hour.wind_speed >= w.breezy:
        issues.append("Breezy")

    if not issues:
        return "Perfect conditions" if score >= catalog.quality.perfect else "Good conditions"
    return ", ".join(issues)


def score_hour(hour: HourlyForecast, catalog: ThresholdCatalog = DEFAULT_CATALOG) -> ActivityHour:
    score = calculate_hour_score(hour, catalog)
    return ActivityHour(
        time=hour.time,
        temperature=hour.temperature,
        feels_like=hour.feels_like,
        quality=get_quality_from_score(score, catalog),
        score=score,
        reason=get_hour_reason(hour, score, catalog),
        rain_chance=hour.precipitation_probability,
        uv_index=hour.uv_index,
    )


# ============================================================================
# WINDOW GROUPING
# ============================================================================

def get_window_description(
    quality: Quality,
    avg_temp: int,
    hours: List[ActivityHour],
    catalog: ThresholdCatalog = DEFAULT_CATALOG,
) -> str:
    t = catalog.temperature
    has_rain = any(h.rain_chance >= catalog.rain.likely for h in hours)
    has_high_uv = any(h.uv_index >= catalog.uv.high for h in hours)

    if quality is Quality.PERFECT:
        return f"Perfect for outdoor play ({avg_temp}°)"
    if quality is Quality.GOOD:
        if has_high_uv:
            return f"Good with sun protection ({avg_temp}°, high UV)"
        if avg_temp > t.warm:
            return f"Good but warm ({avg_temp}°)"
        if avg_temp < t.cool:
            return f"Good but cool ({avg_temp}°)"
        return f"Good for outdoor activities ({avg_temp}°)"
    if quality is Quality.FAIR:
        if has_rain:
            return f"Possible but rain risk ({avg_temp}°)"
        if avg_temp > t.hot:
            return f"Hot - limit time outdoors ({avg_temp}°)"
        if avg_temp < t.too_cold_for_playground:
            return f"Cold - bundle up well ({avg_temp}°)"
        return f"Fair conditions ({avg_temp}°)"

    if has_rain:
        return "Skip - rain likely"
    if avg_temp > t.very_hot:
        return "Skip - too hot"
    if avg_temp < t.freezing:
        return "Skip - too cold"
    return "Not recommended"


def _summarize_window(hours: List[ActivityHour], catalog: ThresholdCatalog) -> ActivityWindow:
    avg_score = round_half_up(sum(h.score for h in hours) / len(hours))
    avg_temp = round_half_up(sum(h.temperature for h in hours) / len(hours))
    start, last = hours[0].time, hours[-1].time
    quality = hours[0].quality
    return ActivityWindow(
        start_time=start,
        end_time=last + timedelta(hours=1),
        quality=quality,
        avg_score=avg_score,
        avg_temp=avg_temp,
        label=f"{format_hour(start.hour)} - {format_hour(last.hour + 1)}",
        description=get_window_description(quality, avg_temp, hours, catalog),
        hours=list(hours),
    )


def group_into_windows(hours: List[ActivityHour], catalog: ThresholdCatalog = DEFAULT_CATALOG) -> List[ActivityWindow]:
    """
    Group consecutive same-quality hours into windows.

    Hours outside the outdoor time range close any open window and are
    dropped.
    """
    time_config = catalog.time
    runs: List[List[ActivityHour]] = []
    current: List[ActivityHour] = []

    for hour in hours:
        hour_of_day = hour.time.hour
        if hour_of_day < time_config.outdoor_hours_start or hour_of_day > time_config.outdoor_hours_end:
            if current:
                runs.append(current)
                current = []
            continue

        if current and hour.quality is not current[0].quality:
            runs.append(current)
            current = []
        current.append(hour)

    if current:
        runs.append(current)

    return [_summarize_window(run, catalog) for run in runs]


def find_best_window(windows: List[ActivityWindow]) -> Optional[ActivityWindow]:
    """Highest average score among perfect/good windows; the first one wins ties."""
    best = None
    for window in windows:
        if window.quality not in (Quality.PERFECT, Quality.GOOD):
            continue
        if best is None or window.avg_score > best.avg_score:
            best = window
    return best


def summarize_day(hours: List[ActivityHour]) -> str:
    perfect = sum(1 for h in hours if h.quality is Quality.PERFECT)
    good = sum(1 for h in hours if h.quality is Quality.GOOD)
    skip = sum(1 for h in hours if h.quality is Quality.SKIP)

    if perfect >= 4:
        return "Great day for outdoor activities!"
    if perfect + good >= 4:
        return "Good opportunities for outdoor time today"
    if perfect + good >= 2:
        return "Limited outdoor windows today"
    if skip > len(hours) / 2:
        return "Challenging day - plan indoor activities"
    return "Mixed conditions - check hourly forecast"


# ============================================================================
# ENTRY POINTS
# ============================================================================

def analyze_activity_windows(
    weather: Optional[WeatherData],
    catalog: ThresholdCatalog = DEFAULT_CATALOG,
) -> Optional[ActivityAnalysis]:
    """Score every forecast hour and group them into activity windows.

    Returns None when there is no weather yet.
    """
    if weather is None:
        return None

    hours = [score_hour(h, catalog) for h in weather.hourly]
    windows = group_into_windows(hours, catalog)
    return ActivityAnalysis(
        hours=hours,
        windows=windows,
        best_window=find_best_window(windows),
        day_summary=summarize_day(hours),
    )


def get_activity_summary(analysis: ActivityAnalysis) -> str:
    if analysis.best_window is None:
        return "No ideal outdoor windows today"
    best = analysis.best_window
    return f"Best time: {best.label} ({best.avg_temp}°)"
