"""Threshold catalog - every tunable band, weight and lookup table in one place.

All temperatures are Fahrenheit, wind speeds are mph, humidity and rain
chance are percentages. Analyzers accept a ``ThresholdCatalog`` so any value
can be tuned without touching the scoring code.
"""
import re
from dataclasses import dataclass, field
from enum import Enum


# ============================================================================
# NUMERIC BANDS
# ============================================================================

@dataclass(frozen=True)
class TemperatureThresholds:
    freezing: float = 32
    very_cold: float = 40
    cold: float = 50
    cool: float = 60
    comfortable_low: float = 65
    comfortable_high: float = 75
    warm: float = 80
    hot: float = 85
    very_hot: float = 90
    dangerous: float = 95

    # Activity-specific
    too_cold_for_playground: float = 45
    ideal_outdoor_low: float = 60
    ideal_outdoor_high: float = 75

    # Babies are more sensitive
    baby_extra_layer_below: float = 65
    baby_too_cold: float = 50
    baby_too_hot: float = 85


@dataclass(frozen=True)
class UVThresholds:
    low: float = 2
    moderate: float = 5
    high: float = 7
    very_high: float = 10
    extreme: float = 11

    sunscreen_needed: float = 3
    hat_needed: float = 6
    avoid_midday: float = 8
    limit_exposure: float = 10


@dataclass(frozen=True)
class RainThresholds:
    unlikely: float = 10
    slight_chance: float = 20
    possible: float = 30
    likely: float = 50
    very_likely: float = 70
    almost_certain: float = 90

    pack_umbrella: float = 30
    rain_boots_needed: float = 50
    avoid_outdoor: float = 70


@dataclass(frozen=True)
class HumidityThresholds:
    very_dry: float = 20
    dry: float = 30
    comfortable_low: float = 40
    comfortable_high: float = 60
    humid: float = 70
    very_humid: float = 80
    oppressive: float = 90


@dataclass(frozen=True)
class WindThresholds:
    calm: float = 5
    light: float = 10
    moderate: float = 15
    breezy: float = 20
    windy: float = 25
    very_windy: float = 35
    high_wind: float = 45


@dataclass(frozen=True)
class ActivityWeights:
    temperature: float = 0.35
    rain_chance: float = 0.30
    uv_index: float = 0.15
    humidity: float = 0.10
    wind: float = 0.10

    def total(self) -> float:
        return self.temperature + self.rain_chance + self.uv_index + self.humidity + self.wind


@dataclass(frozen=True)
class QualityThresholds:
    perfect: int = 85
    good: int = 70
    fair: int = 50  # below fair is "skip"


@dataclass(frozen=True)
class TimeConfig:
    """Hour-of-day windows (0-23) matching a typical parent schedule."""
    morning_start: int = 6
    morning_end: int = 9
    midday_start: int = 11
    midday_end: int = 14
    afternoon_start: int = 14
    afternoon_end: int = 18

    dropoff_hour: int = 8
    pickup_hour: int = 15
    # Hours either side of dropoff/pickup that count as "around" them
    school_run_margin: int = 1

    outdoor_hours_start: int = 7
    outdoor_hours_end: int = 19


@dataclass(frozen=True)
class OutfitThresholds:
    big_swing: float = 20
    notable_swing: float = 15
    pack_layer_rise: float = 15
    # Degrees added to the mid-layer cutoff per extra layer an age band needs
    extra_layer_step: float = 10


@dataclass(frozen=True)
class TipThresholds:
    major_swing: float = 25
    notable_swing: float = 18
    moderate_swing: float = 12

    early_hours: int = 3
    playground_recent_hours: int = 4
    rainy_day_fraction: float = 0.6

    weekend_great: int = 80
    weekend_good: int = 70
    weekend_poor: int = 50

    # Day score penalties used for weekend comparison
    heavy_rain_penalty: int = 50
    likely_rain_penalty: int = 30
    possible_rain_penalty: int = 15
    very_hot_penalty: int = 30
    hot_penalty: int = 15
    freezing_penalty: int = 20
    very_cold_penalty: int = 10


@dataclass(frozen=True)
class ThresholdCatalog:
    temperature: TemperatureThresholds = field(default_factory=TemperatureThresholds)
    uv: UVThresholds = field(default_factory=UVThresholds)
    rain: RainThresholds = field(default_factory=RainThresholds)
    humidity: HumidityThresholds = field(default_factory=HumidityThresholds)
    wind: WindThresholds = field(default_factory=WindThresholds)
    weights: ActivityWeights = field(default_factory=ActivityWeights)
    quality: QualityThresholds = field(default_factory=QualityThresholds)
    time: TimeConfig = field(default_factory=TimeConfig)
    outfit: OutfitThresholds = field(default_factory=OutfitThresholds)
    tips: TipThresholds = field(default_factory=TipThresholds)

    def __post_init__(self):
        if abs(self.weights.total() - 1.0) > 1e-9:
            raise ValueError(f"Activity weights must sum to 1.0, got {self.weights.total()}")


DEFAULT_CATALOG = ThresholdCatalog()


# ============================================================================
# AGE GROUPS
# ============================================================================

class AgeGroup(Enum):
    """Age bands, ordered youngest first: (label, max months, extra layers)."""
    BABY = ("baby", 12, 1.0)
    TODDLER = ("toddler", 36, 0.5)
    PRESCHOOL = ("preschool", 60, 0.0)
    SCHOOL_AGE = ("school-age", 144, 0.0)

    def __init__(self, label: str, max_months: int, extra_layers: float):
        self.label = label
        self.max_months = max_months
        self.extra_layers = extra_layers

    @classmethod
    def from_label(cls, label: str) -> "AgeGroup":
        for group in cls:
            if group.label == label:
                return group
        raise ValueError(f"Unknown age group: {label!r}")


def get_age_group(age_months: float) -> AgeGroup:
    """Classify an age in months; anything past preschool is school-age."""
    if age_months <= AgeGroup.BABY.max_months:
        return AgeGroup.BABY
    if age_months <= AgeGroup.TODDLER.max_months:
        return AgeGroup.TODDLER
    if age_months <= AgeGroup.PRESCHOOL.max_months:
        return AgeGroup.PRESCHOOL
    return AgeGroup.SCHOOL_AGE


def get_extra_layers(age_months: float) -> float:
    """Extra clothing layers a child of this age needs compared to an adult."""
    if age_months <= AgeGroup.BABY.max_months:
        return AgeGroup.BABY.extra_layers
    if age_months <= AgeGroup.TODDLER.max_months:
        return AgeGroup.TODDLER.extra_layers
    return 0.0


# ============================================================================
# WEATHER CONDITIONS
# ============================================================================

class Condition(Enum):
    """Normalized weather conditions: (code, label, emoji, good for outdoors)."""
    CLEAR = ("clear", "Clear", "☀️", True)
    MOSTLY_CLEAR = ("mostly-clear", "Mostly Clear", "🌤️", True)
    PARTLY_CLOUDY = ("partly-cloudy", "Partly Cloudy", "⛅", True)
    CLOUDY = ("cloudy", "Cloudy", "☁️", True)
    OVERCAST = ("overcast", "Overcast", "🌥️", True)
    FOG = ("fog", "Foggy", "🌫️", False)
    LIGHT_RAIN = ("light-rain", "Light Rain", "🌦️", False)
    RAIN = ("rain", "Rain", "🌧️", False)
    HEAVY_RAIN = ("heavy-rain", "Heavy Rain", "⛈️", False)
    THUNDERSTORM = ("thunderstorm", "Thunderstorm", "⛈️", False)
    SNOW = ("snow", "Snow", "🌨️", False)
    SLEET = ("sleet", "Sleet", "🌨️", False)
    HAIL = ("hail", "Hail", "🌨️", False)
    WINDY = ("windy", "Windy", "💨", False)

    def __init__(self, code: str, label: str, emoji: str, is_good: bool):
        self.code = code
        self.label = label
        self.emoji = emoji
        self.is_good = is_good

    @property
    def is_wet(self) -> bool:
        return self in (Condition.LIGHT_RAIN, Condition.RAIN, Condition.HEAVY_RAIN, Condition.THUNDERSTORM)

    @classmethod
    def from_code(cls, code: str) -> "Condition":
        for condition in cls:
            if condition.code == code:
                return condition
        raise ValueError(f"Unknown condition code: {code!r}")


def map_condition(api_condition) -> Condition:
    """
    Map a provider condition string (e.g. "LIGHT_RAIN", "Partly cloudy")
    onto a ``Condition``.

    Rules are checked most-specific first; the order matters. Anything
    unrecognised becomes partly cloudy.
    """
    normalized = re.sub(r"[^A-Z]", "_", str(api_condition or "").upper())

    if "THUNDER" in normalized:
        return Condition.THUNDERSTORM
    if "HEAVY_RAIN" in normalized or "DOWNPOUR" in normalized:
        return Condition.HEAVY_RAIN
    if "RAIN" in normalized or "DRIZZLE" in normalized or "SHOWER" in normalized:
        return Condition.LIGHT_RAIN if "LIGHT" in normalized else Condition.RAIN
    if "SNOW" in normalized or "FLURR" in normalized:
        return Condition.SNOW
    if "SLEET" in normalized or "ICE" in normalized:
        return Condition.SLEET
    if "HAIL" in normalized:
        return Condition.HAIL
    if "FOG" in normalized or "MIST" in normalized:
        return Condition.FOG
    if "OVERCAST" in normalized:
        return Condition.OVERCAST
    if "CLOUD" in normalized:
        return Condition.PARTLY_CLOUDY if "PARTLY" in normalized else Condition.CLOUDY
    if "CLEAR" in normalized:
        return Condition.MOSTLY_CLEAR if "MOSTLY" in normalized else Condition.CLEAR
    if "SUNNY" in normalized or "FAIR" in normalized:
        return Condition.CLEAR

    return Condition.PARTLY_CLOUDY


# ============================================================================
# CLOTHING
# ============================================================================

class Layer(str, Enum):
    BASE = "base"
    MID = "mid"
    OUTER = "outer"
    FOOTWEAR = "footwear"
    ACCESSORY = "accessory"


class ClothingItem(Enum):
    """Clothing catalog: (id, display name, layer, emoji)."""
    ONESIE = ("onesie", "Onesie", Layer.BASE, "👶")
    TSHIRT = ("tshirt", "T-shirt", Layer.BASE, "👕")
    LONG_SLEEVE = ("long-sleeve", "Long sleeve shirt", Layer.BASE, "👔")
    TANK_TOP = ("tank", "Tank top", Layer.BASE, "🎽")

    SHORTS = ("shorts", "Shorts", Layer.BASE, "🩳")
    PANTS = ("pants", "Pants", Layer.BASE, "👖")
    LEGGINGS = ("leggings", "Leggings", Layer.BASE, "🦵")

    LIGHT_SWEATER = ("light-sweater", "Light sweater", Layer.MID, "🧥")
    FLEECE = ("fleece", "Fleece jacket", Layer.MID, "🧥")
    HOODIE = ("hoodie", "Hoodie", Layer.MID, "🧥")

    LIGHT_JACKET = ("light-jacket", "Light jacket", Layer.OUTER, "🧥")
    RAIN_JACKET = ("rain-jacket", "Rain jacket", Layer.OUTER, "🌧️")
    WINTER_COAT = ("winter-coat", "Winter coat", Layer.OUTER, "🧥")
    PUFFER = ("puffer", "Puffer jacket", Layer.OUTER, "🧥")

    SANDALS = ("sandals", "Sandals", Layer.FOOTWEAR, "🩴")
    SNEAKERS = ("sneakers", "Sneakers", Layer.FOOTWEAR, "👟")
    BOOTS = ("boots", "Boots", Layer.FOOTWEAR, "🥾")
    RAIN_BOOTS = ("rain-boots", "Rain boots", Layer.FOOTWEAR, "🥾")
    WINTER_BOOTS = ("winter-boots", "Winter boots", Layer.FOOTWEAR, "🥾")

    SUN_HAT = ("sun-hat", "Sun hat", Layer.ACCESSORY, "👒")
    WINTER_HAT = ("winter-hat", "Winter hat", Layer.ACCESSORY, "🧢")
    SUNGLASSES = ("sunglasses", "Sunglasses", Layer.ACCESSORY, "🕶️")
    SUNSCREEN = ("sunscreen", "Sunscreen", Layer.ACCESSORY, "🧴")
    MITTENS = ("mittens", "Mittens", Layer.ACCESSORY, "🧤")
    GLOVES = ("gloves", "Gloves", Layer.ACCESSORY, "🧤")
    SCARF = ("scarf", "Scarf", Layer.ACCESSORY, "🧣")
    UMBRELLA = ("umbrella", "Umbrella", Layer.ACCESSORY, "☂️")

    def __init__(self, item_id: str, display_name: str, layer: Layer, emoji: str):
        self.item_id = item_id
        self.display_name = display_name
        self.layer = layer
        self.emoji = emoji

    @property
    def is_bottom(self) -> bool:
        return self in (ClothingItem.SHORTS, ClothingItem.PANTS, ClothingItem.LEGGINGS)
