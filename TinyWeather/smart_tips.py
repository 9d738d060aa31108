"""Smart tips - parent-focused alerts and planning hints.

Seven independent generators (temperature, rain, UV, comfort, playground,
weekend, safety) each look at the weather and may emit tips. The merged list
is sorted by priority and trimmed to one tip per (category, priority).
"""
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from thresholds import DEFAULT_CATALOG, ThresholdCatalog
from weather_data import DailyForecast, WeatherData

THURSDAY, FRIDAY, SATURDAY, SUNDAY = 3, 4, 5, 6


class TipType(str, Enum):
    ALERT = "alert"
    INFO = "info"
    TIP = "tip"
    WARNING = "warning"


class TipPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {TipPriority.HIGH: 0, TipPriority.MEDIUM: 1, TipPriority.LOW: 2}


@dataclass
class SmartTip:
    title: str
    message: str
    category: str
    type: TipType = TipType.INFO
    priority: TipPriority = TipPriority.MEDIUM
    emoji: str = "💡"
    action_text: Optional[str] = None
    id: str = field(default_factory=lambda: f"tip-{uuid.uuid4().hex}")


@dataclass
class SmartTipsResult:
    tips: List[SmartTip]
    primary_tip: Optional[SmartTip]
    alerts: List[SmartTip]


# ============================================================================
# GENERATORS
# ============================================================================

def generate_temperature_tips(weather: WeatherData, catalog: ThresholdCatalog = DEFAULT_CATALOG) -> List[SmartTip]:
    t, limits = catalog.temperature, catalog.tips
    current = weather.current
    tips = []

    if weather.hourly:
        temps = [h.temperature for h in weather.hourly]
        low, high = min(temps), max(temps)
        swing = high - low

        if swing >= limits.major_swing:
            tips.append(SmartTip(
                type=TipType.ALERT,
                priority=TipPriority.HIGH,
                title="Major Temperature Swing",
                message=f"Huge {swing}° swing today: {low}° to {high}°. "
                        f"Dress in layers you can add/remove easily.",
                emoji="🌡️",
                category="temperature",
            ))
        elif swing >= limits.notable_swing:
            tips.append(SmartTip(
                type=TipType.WARNING,
                priority=TipPriority.MEDIUM,
                title="Temperature Swing",
                message=f"{swing}° swing today ({low}° → {high}°). Use removable layers.",
                emoji="🌡️",
                category="temperature",
            ))
        elif swing >= limits.moderate_swing:
            tips.append(SmartTip(
                type=TipType.INFO,
                priority=TipPriority.LOW,
                title="Moderate Temperature Change",
                message=f"Starts at {low}°, warms to {high}°. Pack a layer to shed.",
                emoji="📊",
                category="temperature",
            ))

    if current.temperature < t.freezing:
        tips.append(SmartTip(
            type=TipType.ALERT,
            priority=TipPriority.HIGH,
            title="Freezing Temperatures",
            message="Bundle up! Limit outdoor time and watch for signs of cold stress.",
            emoji="🥶",
            category="temperature",
        ))
    elif current.temperature < t.very_cold:
        tips.append(SmartTip(
            type=TipType.WARNING,
            priority=TipPriority.MEDIUM,
            title="Very Cold Outside",
            message=f"Only {current.temperature}° right now. Add extra layer for little ones.",
            emoji="❄️",
            category="temperature",
        ))

    if current.temperature >= t.dangerous:
        tips.append(SmartTip(
            type=TipType.ALERT,
            priority=TipPriority.HIGH,
            title="Dangerous Heat",
            message="Heat advisory! Avoid outdoor activities. Risk of heat stroke.",
            emoji="🔥",
            category="temperature",
        ))
    elif current.temperature >= t.very_hot:
        tips.append(SmartTip(
            type=TipType.WARNING,
            priority=TipPriority.HIGH,
            title="Very Hot Today",
            message=f"{current.temperature}° - Plan activities for early morning or late afternoon only.",
            emoji="☀️",
            category="temperature",
        ))
    elif current.temperature >= t.hot:
        tips.append(SmartTip(
            type=TipType.INFO,
            priority=TipPriority.MEDIUM,
            title="Hot Weather",
            message="Bring extra water and plan for shade breaks.",
            emoji="🌡️",
            category="temperature",
        ))

    return tips


def generate_rain_tips(weather: WeatherData, catalog: ThresholdCatalog = DEFAULT_CATALOG) -> List[SmartTip]:
    r, time_config = catalog.rain, catalog.time
    hourly = weather.hourly
    tips = []

    rainy_hours = [h for h in hourly if h.precipitation_probability >= r.likely]

    if not rainy_hours:
        # No real rain coming; early moisture can still leave things wet
        early = hourly[:catalog.tips.early_hours]
        if any(h.precipitation_probability >= r.possible for h in early):
            tips.append(SmartTip(
                type=TipType.INFO,
                priority=TipPriority.LOW,
                title="Wet Morning",
                message="Playground equipment may be wet from early moisture. Pack backup clothes.",
                emoji="💧",
                category="rain",
            ))
        return tips

    first_rainy = rainy_hours[0]
    if time_config.morning_start <= first_rainy.time.hour <= time_config.morning_end:
        tips.append(SmartTip(
            type=TipType.WARNING,
            priority=TipPriority.HIGH,
            title="Rain at Dropoff",
            message=f"{first_rainy.precipitation_probability}% chance of rain during morning dropoff. "
                    f"Have rain gear ready!",
            emoji="🌧️",
            category="rain",
        ))

    margin = time_config.school_run_margin
    pickup_rain = [
        h for h in rainy_hours
        if time_config.pickup_hour - margin <= h.time.hour <= time_config.pickup_hour + margin
    ]
    if pickup_rain:
        max_chance = max(h.precipitation_probability for h in pickup_rain)
        tips.append(SmartTip(
            type=TipType.WARNING,
            priority=TipPriority.HIGH,
            title="Rain at Pickup Time",
            message=f"{max_chance}% chance of rain around pickup. Keep rain gear in the car!",
            emoji="☔",
            category="rain",
            action_text="Set reminder",
        ))

    afternoon_rain = [
        h for h in rainy_hours
        if time_config.afternoon_start <= h.time.hour <= time_config.afternoon_end
    ]
    if afternoon_rain and not pickup_rain:
        tips.append(SmartTip(
            type=TipType.INFO,
            priority=TipPriority.MEDIUM,
            title="Afternoon Rain Expected",
            message="Rain likely this afternoon. Plan outdoor activities for morning.",
            emoji="🌦️",
            category="rain",
        ))

    if len(rainy_hours) >= len(hourly) * catalog.tips.rainy_day_fraction:
        tips.append(SmartTip(
            type=TipType.WARNING,
            priority=TipPriority.HIGH,
            title="Rainy Day",
            message="Rain expected most of the day. Plan indoor activities and pack full rain gear.",
            emoji="☔",
            category="rain",
        ))

    return tips


def generate_uv_tips(weather: WeatherData, catalog: ThresholdCatalog = DEFAULT_CATALOG) -> List[SmartTip]:
    u = catalog.uv
    if not weather.hourly:
        return []

    max_uv = max(h.uv_index for h in weather.hourly)
    if max_uv >= u.extreme:
        return [SmartTip(
            type=TipType.ALERT,
            priority=TipPriority.HIGH,
            title="Extreme UV",
            message="UV index extremely high! Avoid outdoor play 10am-4pm. "
                    "Use SPF 50+ and protective clothing.",
            emoji="⚠️",
            category="uv",
        )]
    if max_uv >= u.very_high:
        return [SmartTip(
            type=TipType.WARNING,
            priority=TipPriority.HIGH,
            title="Very High UV",
            message="Strong sun today. Apply sunscreen every 2 hours and use sun hat.",
            emoji="☀️",
            category="uv",
        )]
    if max_uv >= u.high:
        return [SmartTip(
            type=TipType.INFO,
            priority=TipPriority.MEDIUM,
            title="High UV Today",
            message="Sunscreen and hat recommended. Seek shade during midday.",
            emoji="🌤️",
            category="uv",
        )]
    return []


def generate_comfort_tips(weather: WeatherData, catalog: ThresholdCatalog = DEFAULT_CATALOG) -> List[SmartTip]:
    t, h, w = catalog.temperature, catalog.humidity, catalog.wind
    current = weather.current
    tips = []

    if current.humidity >= h.very_humid and current.temperature >= t.warm:
        tips.append(SmartTip(
            type=TipType.WARNING,
            priority=TipPriority.MEDIUM,
            title="Humid & Hot",
            message=f"{current.humidity}% humidity makes {current.temperature}° feel much hotter. "
                    f"Bring extra water and take breaks.",
            emoji="💦",
            category="comfort",
        ))
    elif current.humidity >= h.oppressive:
        tips.append(SmartTip(
            type=TipType.INFO,
            priority=TipPriority.LOW,
            title="Very Humid",
            message="Muggy day - dress in breathable fabrics.",
            emoji="😓",
            category="comfort",
        ))

    max_wind = max((hour.wind_speed for hour in weather.hourly), default=current.wind_speed)
    if max_wind >= w.very_windy:
        tips.append(SmartTip(
            type=TipType.WARNING,
            priority=TipPriority.MEDIUM,
            title="Very Windy",
            message="Strong winds today. Secure loose items and avoid flying debris areas.",
            emoji="💨",
            category="wind",
        ))
    elif max_wind >= w.windy and current.temperature < t.cool:
        tips.append(SmartTip(
            type=TipType.INFO,
            priority=TipPriority.MEDIUM,
            title="Wind Chill Factor",
            message="Wind makes it feel colder than the thermometer shows. Add a windbreaker layer.",
            emoji="🌬️",
            category="wind",
        ))

    return tips


def generate_playground_tips(weather: WeatherData, catalog: ThresholdCatalog = DEFAULT_CATALOG) -> List[SmartTip]:
    t = catalog.temperature
    current = weather.current
    tips = []

    if current.temperature >= t.hot:
        tips.append(SmartTip(
            type=TipType.WARNING,
            priority=TipPriority.HIGH,
            title="Hot Playground Equipment",
            message="Metal slides and surfaces can burn! Check with your hand before letting kids play.",
            emoji="🔥",
            category="playground",
        ))

    recent = weather.hourly[:catalog.tips.playground_recent_hours]
    if any(h.precipitation_probability >= catalog.rain.very_likely for h in recent):
        tips.append(SmartTip(
            type=TipType.INFO,
            priority=TipPriority.MEDIUM,
            title="Wet Playground",
            message="Equipment may be slippery from rain. Pack extra outfit for wet clothes.",
            emoji="💧",
            category="playground",
        ))

    if current.temperature < t.freezing:
        tips.append(SmartTip(
            type=TipType.WARNING,
            priority=TipPriority.HIGH,
            title="Icy Conditions",
            message="Playground surfaces may be icy. Watch for slipping hazards.",
            emoji="🧊",
            category="playground",
        ))

    return tips


def score_day(day: DailyForecast, catalog: ThresholdCatalog = DEFAULT_CATALOG) -> int:
    """0-100 outdoor score for a whole day, used to compare weekend days."""
    t, r, p = catalog.temperature, catalog.rain, catalog.tips
    score = 100

    if day.precipitation_probability >= r.very_likely:
        score -= p.heavy_rain_penalty
    elif day.precipitation_probability >= r.likely:
        score -= p.likely_rain_penalty
    elif day.precipitation_probability >= r.possible:
        score -= p.possible_rain_penalty

    if day.temp_high > t.very_hot:
        score -= p.very_hot_penalty
    elif day.temp_high > t.hot:
        score -= p.hot_penalty

    if day.temp_low < t.freezing:
        score -= p.freezing_penalty
    elif day.temp_low < t.very_cold:
        score -= p.very_cold_penalty

    return max(0, score)


def generate_weekend_tips(
    weather: WeatherData,
    catalog: ThresholdCatalog = DEFAULT_CATALOG,
    today: Optional[date] = None,
) -> List[SmartTip]:
    """Compare Saturday and Sunday; only runs on Thursdays and Fridays."""
    today = today or date.today()
    if today.weekday() not in (THURSDAY, FRIDAY):
        return []

    saturday = next((d for d in weather.daily if d.date.weekday() == SATURDAY), None)
    sunday = next((d for d in weather.daily if d.date.weekday() == SUNDAY), None)
    if saturday is None or sunday is None:
        return []

    limits = catalog.tips
    sat_score = score_day(saturday, catalog)
    sun_score = score_day(sunday, catalog)

    if sat_score >= limits.weekend_great and sun_score >= limits.weekend_great:
        return [SmartTip(
            type=TipType.TIP,
            priority=TipPriority.LOW,
            title="Great Weekend Ahead!",
            message=f"Both Saturday ({saturday.temp_high}°) and Sunday ({sunday.temp_high}°) "
                    f"look perfect for outdoor activities.",
            emoji="🎉",
            category="weekend",
        )]
    if sat_score >= limits.weekend_good and sun_score < limits.weekend_poor:
        return [SmartTip(
            type=TipType.TIP,
            priority=TipPriority.MEDIUM,
            title="Plan for Saturday",
            message=f"Saturday looks better for outdoor plans. "
                    f"Sunday has {sunday.precipitation_probability}% rain chance.",
            emoji="📅",
            category="weekend",
        )]
    if sun_score >= limits.weekend_good and sat_score < limits.weekend_poor:
        return [SmartTip(
            type=TipType.TIP,
            priority=TipPriority.MEDIUM,
            title="Plan for Sunday",
            message=f"Sunday looks better for outdoor plans. "
                    f"Saturday has {saturday.precipitation_probability}% rain chance.",
            emoji="📅",
            category="weekend",
        )]
    if sat_score < limits.weekend_poor and sun_score < limits.weekend_poor:
        return [SmartTip(
            type=TipType.INFO,
            priority=TipPriority.LOW,
            title="Indoor Weekend",
            message="Both weekend days look challenging. Time to plan indoor activities!",
            emoji="🏠",
            category="weekend",
        )]
    return []


def generate_safety_tips(weather: WeatherData, catalog: ThresholdCatalog = DEFAULT_CATALOG) -> List[SmartTip]:
    t = catalog.temperature
    current = weather.current
    tips = []

    if current.temperature < t.cold:
        tips.append(SmartTip(
            type=TipType.TIP,
            priority=TipPriority.MEDIUM,
            title="Car Seat Reminder",
            message="Remove puffy jackets before buckling into car seats. Use blankets over straps instead.",
            emoji="🚗",
            category="safety",
        ))

    if current.temperature >= t.warm:
        tips.append(SmartTip(
            type=TipType.WARNING,
            priority=TipPriority.HIGH,
            title="Hot Car Alert",
            message="Car interior gets dangerously hot. Never leave children or pets unattended.",
            emoji="🚙",
            category="safety",
        ))

    return tips


# ============================================================================
# MAIN
# ============================================================================

def rank_and_dedupe(tips: List[SmartTip]) -> List[SmartTip]:
    """Sort by priority (stable) and keep the first tip per (category, priority)."""
    seen = set()
    kept = []
    for tip in sorted(tips, key=lambda t: t.priority.rank):
        key = (tip.category, tip.priority)
        if key in seen:
            continue
        seen.add(key)
        kept.append(tip)
    return kept


def generate_smart_tips(
    weather: Optional[WeatherData],
    today: Optional[date] = None,
    catalog: ThresholdCatalog = DEFAULT_CATALOG,
) -> Optional[SmartTipsResult]:
    """
    Run every tip generator over the weather and rank the results.

    Args:
        weather: Full weather payload, or None if nothing has been fetched yet
        today: Date used for the weekend check (defaults to today)
        catalog: Threshold bands to use

    Returns:
        SmartTipsResult, or None when there is no weather
    """
    if weather is None:
        return None
    if isinstance(today, datetime):
        today = today.date()

    all_tips = (
        generate_temperature_tips(weather, catalog)
        + generate_rain_tips(weather, catalog)
        + generate_uv_tips(weather, catalog)
        + generate_comfort_tips(weather, catalog)
        + generate_playground_tips(weather, catalog)
        + generate_weekend_tips(weather, catalog, today)
        + generate_safety_tips(weather, catalog)
    )
    tips = rank_and_dedupe(all_tips)

    return SmartTipsResult(
        tips=tips,
        primary_tip=tips[0] if tips else None,
        alerts=[tip for tip in tips if tip.priority is TipPriority.HIGH],
    )


def get_primary_tip_message(result: SmartTipsResult) -> str:
    if result.primary_tip is None:
        return "No special alerts today"
    return f"{result.primary_tip.emoji} {result.primary_tip.message}"
