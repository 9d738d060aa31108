"""Plain-text briefing for the command line.

Runs the three analyzers over one weather payload and renders the results.
Rendering is kept free of I/O so it can be tested directly.
"""
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional

from activity_windows import ActivityAnalysis, analyze_activity_windows, get_activity_summary
from child import Child
from outfit_engine import OutfitRecommendation, generate_all_outfit_recommendations
from smart_tips import SmartTipsResult, TipPriority, generate_smart_tips, get_primary_tip_message
from thresholds import DEFAULT_CATALOG, Layer, ThresholdCatalog
from units import format_hour, format_temperature, format_temperature_short
from weather_data import WeatherData

RULE = "-" * 48


@dataclass
class Briefing:
    weather: WeatherData
    outfits: List[OutfitRecommendation]
    activity: Optional[ActivityAnalysis]
    tips: Optional[SmartTipsResult]


def build_briefing(
    weather: WeatherData,
    children: List[Child],
    now: Optional[datetime] = None,
    catalog: ThresholdCatalog = DEFAULT_CATALOG,
) -> Briefing:
    today: Optional[date] = now.date() if now else None
    return Briefing(
        weather=weather,
        outfits=generate_all_outfit_recommendations(children, weather, now, catalog),
        activity=analyze_activity_windows(weather, catalog),
        tips=generate_smart_tips(weather, today, catalog),
    )


def render_current(weather: WeatherData, use_celsius: bool = False) -> List[str]:
    current = weather.current
    lines = [
        f"{current.condition.emoji} {format_temperature(current.temperature, use_celsius)} "
        f"{current.condition_text} (feels like {format_temperature_short(current.feels_like, use_celsius)})",
        f"Humidity {round(current.humidity)}%  Wind {round(current.wind_speed)} mph  "
        f"UV {round(current.uv_index)}  Rain {round(current.precipitation_probability)}%",
    ]
    if weather.fetched_at is not None:
        lines.append(f"Updated {weather.fetched_at.astimezone().strftime('%H:%M')}")
    return lines


def render_outfit(outfit: OutfitRecommendation, use_celsius: bool = False) -> List[str]:
    lines = [
        f"{outfit.child_name} ({outfit.age_group.label}): {outfit.summary}",
        f"  Morning {format_temperature_short(outfit.morning_temp, use_celsius)}, "
        f"afternoon {format_temperature_short(outfit.afternoon_temp, use_celsius)} "
        f"[{outfit.temp_category.value}]",
    ]
    for layer in Layer:
        for item in outfit.items_for(layer):
            line = f"  {item.emoji} {item.name}"
            if not item.required:
                line += " (optional)"
            if item.reason:
                line += f" - {item.reason}"
            lines.append(line)
    lines.extend(f"  * {tip}" for tip in outfit.tips)
    return lines


def render_activity(analysis: ActivityAnalysis, use_celsius: bool = False) -> List[str]:
    lines = [analysis.day_summary, get_activity_summary(analysis)]
    for window in analysis.windows:
        lines.append(f"  {window.quality.emoji} {window.label}: {window.description}")
    if not analysis.windows:
        lines.append("  No hours inside the outdoor time range")
    lines.append(
        "  "
        + " ".join(
            f"{format_hour(hour.time)}{hour.emoji}{format_temperature_short(hour.temperature, use_celsius)}"
            for hour in analysis.hours
        )
    )
    return lines


def render_tips(result: SmartTipsResult) -> List[str]:
    lines = [get_primary_tip_message(result)]
    for tip in result.tips:
        marker = "!" if tip.priority is TipPriority.HIGH else "-"
        lines.append(f"  {marker} {tip.emoji} {tip.title}: {tip.message}")
    return lines


def render_briefing(briefing: Briefing, use_celsius: bool = False) -> str:
    sections = [("NOW", render_current(briefing.weather, use_celsius))]
    if briefing.outfits:
        outfit_lines = []
        for outfit in briefing.outfits:
            outfit_lines.extend(render_outfit(outfit, use_celsius))
        sections.append(("WHAT TO WEAR", outfit_lines))
    if briefing.activity is not None:
        sections.append(("OUTDOOR TIME", render_activity(briefing.activity, use_celsius)))
    if briefing.tips is not None:
        sections.append(("TIPS", render_tips(briefing.tips)))

    out = []
    for title, lines in sections:
        out.append(RULE)
        out.append(title)
        out.extend(lines)
    out.append(RULE)
    return "\n".join(out)
