"""Outfit recommendation engine.

Builds a layered outfit for one child from the morning temperature, the
afternoon swing, rain chance, UV and the child's age band. Babies get an
extra layer, toddlers get a backup-clothes reminder, and every layer except
accessories ends up with a single item.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, List, Optional

from child import Child
from thresholds import (
    DEFAULT_CATALOG,
    AgeGroup,
    ClothingItem,
    Layer,
    ThresholdCatalog,
    get_extra_layers,
)
from units import round_half_up
from weather_data import HourlyForecast, WeatherData

DEFAULT_MORNING_TEMP = 65
DEFAULT_AFTERNOON_TEMP = 70


class TempCategory(str, Enum):
    COLD = "cold"
    COOL = "cool"
    COMFORTABLE = "comfortable"
    WARM = "warm"
    HOT = "hot"


@dataclass
class OutfitItem:
    item: ClothingItem
    required: bool
    reason: Optional[str] = None

    @property
    def id(self) -> str:
        return self.item.item_id

    @property
    def name(self) -> str:
        return self.item.display_name

    @property
    def layer(self) -> Layer:
        return self.item.layer

    @property
    def emoji(self) -> str:
        return self.item.emoji


@dataclass
class DayTemperatures:
    morning: float
    afternoon: float

    @property
    def swing(self) -> float:
        return abs(self.afternoon - self.morning)


@dataclass
class OutfitRecommendation:
    child_id: str
    child_name: str
    age_group: AgeGroup
    items: List[OutfitItem]
    tips: List[str]
    summary: str
    temp_category: TempCategory
    needs_rain_gear: bool
    needs_sun_protection: bool
    morning_temp: float
    afternoon_temp: float
    temp_swing: float

    def items_for(self, layer: Layer) -> List[OutfitItem]:
        return [i for i in self.items if i.layer is layer]


@dataclass
class _OutfitContext:
    morning_temp: float
    afternoon_temp: float
    temp_swing: float
    uv_index: float
    rain_chance: float
    humidity: float
    age_group: AgeGroup
    max_rain_time: Optional[datetime] = None


# ============================================================================
# TEMPERATURE ANALYSIS
# ============================================================================

def get_temp_category(temp: float, catalog: ThresholdCatalog = DEFAULT_CATALOG) -> TempCategory:
    t = catalog.temperature
    if temp < t.cold:
        return TempCategory.COLD
    if temp < t.cool:
        return TempCategory.COOL
    if temp < t.warm:
        return TempCategory.COMFORTABLE
    if temp < t.hot:
        return TempCategory.WARM
    return TempCategory.HOT


def _average_temp(hours: List[HourlyForecast]) -> int:
    return round_half_up(sum(h.temperature for h in hours) / len(hours))


def analyze_day_temperatures(
    hourly: List[HourlyForecast],
    now: Optional[datetime] = None,
    catalog: ThresholdCatalog = DEFAULT_CATALOG,
) -> DayTemperatures:
    """
    Average the morning and afternoon windows of the hourly forecast.

    Falls back to the first/last sample when a window has no hours. Once the
    clock is past the morning window, the first hourly sample stands in for
    the morning temperature.
    """
    if not hourly:
        return DayTemperatures(morning=DEFAULT_MORNING_TEMP, afternoon=DEFAULT_AFTERNOON_TEMP)

    time_config = catalog.time
    now = now or datetime.now().astimezone()

    morning_hours = [h for h in hourly if time_config.morning_start <= h.time.hour <= time_config.morning_end]
    afternoon_hours = [h for h in hourly if time_config.afternoon_start <= h.time.hour <= time_config.afternoon_end]

    morning = _average_temp(morning_hours) if morning_hours else hourly[0].temperature
    afternoon = _average_temp(afternoon_hours) if afternoon_hours else hourly[-1].temperature

    if now.hour >= time_config.midday_start:
        morning = hourly[0].temperature

    return DayTemperatures(morning=morning, afternoon=afternoon)


# ============================================================================
# CLOTHING SELECTION
# ============================================================================

def _proxy_extra_layers(age_group: AgeGroup) -> float:
    # Looks the factor up via a representative age per band rather than the
    # child's real age. Kept as-is pending review; see DESIGN.md.
    proxy_months = {AgeGroup.BABY: 6, AgeGroup.TODDLER: 24}.get(age_group, 60)
    return get_extra_layers(proxy_months)


def get_base_layers(temp: float, age_group: AgeGroup, catalog: ThresholdCatalog = DEFAULT_CATALOG) -> List[OutfitItem]:
    t = catalog.temperature
    items = []

    if temp < t.cool:
        items.append(OutfitItem(ClothingItem.LONG_SLEEVE, required=True))
    elif temp < t.warm:
        items.append(OutfitItem(ClothingItem.TSHIRT, required=True))
    else:
        items.append(OutfitItem(
            ClothingItem.TSHIRT,
            required=True,
            reason="Light, breathable fabric" if temp >= t.hot else None,
        ))

    if age_group is AgeGroup.BABY and temp < t.baby_extra_layer_below:
        items.insert(0, OutfitItem(ClothingItem.ONESIE, required=True, reason="Base layer for warmth"))

    if temp < t.warm:
        items.append(OutfitItem(ClothingItem.PANTS, required=True))
    else:
        items.append(OutfitItem(ClothingItem.SHORTS, required=True))

    return items


def get_mid_layers(
    temp: float,
    afternoon_temp: float,
    age_group: AgeGroup,
    catalog: ThresholdCatalog = DEFAULT_CATALOG,
) -> List[OutfitItem]:
    t = catalog.temperature
    items = []
    adjusted_threshold = t.cool + _proxy_extra_layers(age_group) * catalog.outfit.extra_layer_step

    if temp < t.very_cold:
        items.append(OutfitItem(ClothingItem.FLEECE, required=True, reason="Insulating layer"))
    elif temp < t.cold:
        items.append(OutfitItem(ClothingItem.LIGHT_SWEATER, required=True))
    elif temp < adjusted_threshold:
        items.append(OutfitItem(ClothingItem.LIGHT_SWEATER, required=False, reason="For cooler moments"))

    rises_a_lot = afternoon_temp - temp >= catalog.outfit.pack_layer_rise
    if rises_a_lot and temp < t.comfortable_high and not items:
        items.append(OutfitItem(
            ClothingItem.LIGHT_SWEATER,
            required=False,
            reason="Pack for later - temp will rise significantly",
        ))

    return items


def get_outer_layers(temp: float, rain_chance: float, catalog: ThresholdCatalog = DEFAULT_CATALOG) -> List[OutfitItem]:
    t, r = catalog.temperature, catalog.rain
    items = []

    if temp < t.freezing:
        items.append(OutfitItem(ClothingItem.WINTER_COAT, required=True, reason="Essential for freezing temps"))
    elif temp < t.very_cold:
        items.append(OutfitItem(ClothingItem.PUFFER, required=True))
    elif temp < t.cold:
        items.append(OutfitItem(ClothingItem.LIGHT_JACKET, required=True))
    elif temp < t.cool:
        items.append(OutfitItem(ClothingItem.LIGHT_JACKET, required=False, reason="Morning chill"))

    if rain_chance >= r.very_likely:
        items.append(OutfitItem(ClothingItem.RAIN_JACKET, required=True, reason="Rain very likely"))
    elif rain_chance >= r.pack_umbrella:
        items.append(OutfitItem(ClothingItem.RAIN_JACKET, required=False, reason="Pack in bag just in case"))

    return items


def get_footwear(
    temp: float,
    rain_chance: float,
    recent_rain: bool = False,
    catalog: ThresholdCatalog = DEFAULT_CATALOG,
) -> OutfitItem:
    t = catalog.temperature
    if temp < t.freezing:
        return OutfitItem(ClothingItem.WINTER_BOOTS, required=True)
    if rain_chance >= catalog.rain.rain_boots_needed or recent_rain:
        return OutfitItem(
            ClothingItem.RAIN_BOOTS,
            required=True,
            reason="Puddles likely" if recent_rain else "Rain expected",
        )
    if temp < t.cold:
        return OutfitItem(ClothingItem.BOOTS, required=True)
    if temp >= t.hot:
        return OutfitItem(ClothingItem.SANDALS, required=True, reason="Keep feet cool")
    return OutfitItem(ClothingItem.SNEAKERS, required=True)


def get_accessories(
    temp: float,
    uv_index: float,
    rain_chance: float,
    age_group: AgeGroup,
    catalog: ThresholdCatalog = DEFAULT_CATALOG,
) -> List[OutfitItem]:
    t, u, r = catalog.temperature, catalog.uv, catalog.rain
    items = []

    if temp < t.freezing:
        items.append(OutfitItem(ClothingItem.WINTER_HAT, required=True))
        items.append(OutfitItem(ClothingItem.MITTENS, required=True))
        items.append(OutfitItem(ClothingItem.SCARF, required=True))
    elif temp < t.very_cold:
        items.append(OutfitItem(ClothingItem.WINTER_HAT, required=True))
        if age_group in (AgeGroup.BABY, AgeGroup.TODDLER):
            items.append(OutfitItem(ClothingItem.MITTENS, required=True))
        else:
            items.append(OutfitItem(ClothingItem.GLOVES, required=False))
    elif temp < t.cold:
        items.append(OutfitItem(ClothingItem.WINTER_HAT, required=False, reason="For wind chill"))

    if uv_index >= u.sunscreen_needed:
        items.append(OutfitItem(
            ClothingItem.SUNSCREEN,
            required=True,
            reason="UV very high - reapply often!" if uv_index >= u.very_high else "Apply before going out",
        ))
    if uv_index >= u.hat_needed:
        items.append(OutfitItem(ClothingItem.SUN_HAT, required=True, reason="Protect face from sun"))
    if uv_index >= u.moderate:
        items.append(OutfitItem(ClothingItem.SUNGLASSES, required=False))

    if r.pack_umbrella <= rain_chance < r.rain_boots_needed:
        items.append(OutfitItem(ClothingItem.UMBRELLA, required=False, reason="Rain possible"))

    return items


def dedupe_by_layer(items: Iterable[OutfitItem]) -> List[OutfitItem]:
    """Keep the first item of each layer; accessories are all kept."""
    seen = set()
    kept = []
    for item in items:
        if item.layer is not Layer.ACCESSORY:
            if item.layer in seen:
                continue
            seen.add(item.layer)
        kept.append(item)
    return kept


# ============================================================================
# TIPS
# ============================================================================

def _in_window(hour: int, center: int, margin: int) -> bool:
    return center - margin <= hour <= center + margin


def generate_outfit_tips(context: _OutfitContext, catalog: ThresholdCatalog = DEFAULT_CATALOG) -> List[str]:
    t, u, r, h = catalog.temperature, catalog.uv, catalog.rain, catalog.humidity
    time_config = catalog.time
    tips = []

    if context.temp_swing >= catalog.outfit.big_swing:
        tips.append(
            f"Big swing today: {context.morning_temp}° to {context.afternoon_temp}° - dress in removable layers")
    elif context.temp_swing >= catalog.outfit.notable_swing:
        tips.append(f"Starts {context.morning_temp}°, warms to {context.afternoon_temp}° - have layers to shed")

    if context.age_group is AgeGroup.BABY:
        tips.append("Babies can't regulate temperature well - check often")
        if context.morning_temp < t.baby_too_cold:
            tips.append("Bundle up! Add blanket for stroller")
        if context.afternoon_temp > t.baby_too_hot:
            tips.append("Watch for overheating - keep in shade")

    if context.age_group is AgeGroup.TODDLER:
        tips.append("Pack backup outfit - toddlers get messy!")
        if context.humidity > h.humid:
            tips.append("Sticky day - bring extra water")

    if context.rain_chance >= r.likely and context.max_rain_time is not None:
        rain_hour = context.max_rain_time.hour
        margin = time_config.school_run_margin
        if _in_window(rain_hour, time_config.pickup_hour, margin):
            tips.append("Rain likely during pickup time - have gear in car")
        elif _in_window(rain_hour, time_config.dropoff_hour, margin):
            tips.append("Morning rain - dress ready or plan to change")

    if context.uv_index >= u.very_high:
        tips.append("Extreme UV - avoid 10am-2pm outdoors if possible")
    elif context.uv_index >= u.high:
        tips.append("High UV - seek shade during midday")

    if context.morning_temp < t.cold:
        tips.append("Remove puffy jacket before car seat for safety")

    if context.humidity >= h.oppressive and context.afternoon_temp >= t.warm:
        tips.append("Very humid - feels hotter than it is")

    return tips


# ============================================================================
# MAIN RECOMMENDATION
# ============================================================================

def _peak_rain_hour(hourly: List[HourlyForecast]) -> Optional[HourlyForecast]:
    peak = None
    for hour in hourly:
        if hour.precipitation_probability > (peak.precipitation_probability if peak else 0):
            peak = hour
    return peak


def build_summary(items: List[OutfitItem], swing: float, rain_chance: float,
                  catalog: ThresholdCatalog = DEFAULT_CATALOG) -> str:
    top = next(
        (i for i in items if i.required and i.layer is Layer.BASE and not i.item.is_bottom),
        None,
    )
    summary = top.name if top else "Comfortable clothes"
    if swing >= catalog.outfit.notable_swing:
        summary += f" + layers for {swing}° swing"
    if rain_chance >= catalog.rain.pack_umbrella:
        summary += " + rain gear"
    return summary


def generate_outfit_recommendation(
    child: Child,
    weather: WeatherData,
    now: Optional[datetime] = None,
    catalog: ThresholdCatalog = DEFAULT_CATALOG,
) -> OutfitRecommendation:
    """
    Recommend an outfit for one child.

    Args:
        child: The child to dress
        weather: Current + hourly forecast
        now: Time of the recommendation (defaults to the local clock)
        catalog: Threshold bands to use

    Returns:
        OutfitRecommendation with deduplicated items, tips and a one-line summary
    """
    current, hourly = weather.current, weather.hourly
    temps = analyze_day_temperatures(hourly, now, catalog)
    age_group = child.age_group

    peak_rain = _peak_rain_hour(hourly)
    max_rain_chance = peak_rain.precipitation_probability if peak_rain else current.precipitation_probability
    max_uv = max([current.uv_index] + [h.uv_index for h in hourly])
    recent_rain = current.condition.is_wet

    morning = temps.morning
    all_items = (
        get_base_layers(morning, age_group, catalog)
        + get_mid_layers(morning, temps.afternoon, age_group, catalog)
        + get_outer_layers(morning, max_rain_chance, catalog)
        + [get_footwear(morning, max_rain_chance, recent_rain, catalog)]
        + get_accessories(morning, max_uv, max_rain_chance, age_group, catalog)
    )
    items = dedupe_by_layer(all_items)

    tips = generate_outfit_tips(_OutfitContext(
        morning_temp=morning,
        afternoon_temp=temps.afternoon,
        temp_swing=temps.swing,
        uv_index=max_uv,
        rain_chance=max_rain_chance,
        humidity=current.humidity,
        age_group=age_group,
        max_rain_time=peak_rain.time if peak_rain else None,
    ), catalog)

    return OutfitRecommendation(
        child_id=child.id,
        child_name=child.name,
        age_group=age_group,
        items=items,
        tips=tips,
        summary=build_summary(items, temps.swing, max_rain_chance, catalog),
        temp_category=get_temp_category(morning, catalog),
        needs_rain_gear=max_rain_chance >= catalog.rain.pack_umbrella,
        needs_sun_protection=max_uv >= catalog.uv.sunscreen_needed,
        morning_temp=morning,
        afternoon_temp=temps.afternoon,
        temp_swing=temps.swing,
    )


def generate_all_outfit_recommendations(
    children: List[Child],
    weather: Optional[WeatherData],
    now: Optional[datetime] = None,
    catalog: ThresholdCatalog = DEFAULT_CATALOG,
) -> List[OutfitRecommendation]:
    if weather is None:
        return []
    return [generate_outfit_recommendation(child, weather, now, catalog) for child in children]
