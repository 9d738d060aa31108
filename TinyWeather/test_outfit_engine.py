"""Tests for the outfit recommendation engine."""
import pytest

from child import Child
from outfit_engine import (
    DayTemperatures,
    OutfitItem,
    TempCategory,
    analyze_day_temperatures,
    dedupe_by_layer,
    generate_all_outfit_recommendations,
    generate_outfit_recommendation,
    get_footwear,
    get_mid_layers,
    get_temp_category,
)
from thresholds import AgeGroup, ClothingItem, Condition, Layer

BABY = Child(id="child-baby", name="Ava", age_months=8)
TODDLER = Child(id="child-toddler", name="Max", age_months=24)
KID = Child(id="child-kid", name="Sam", age_months=84)


@pytest.fixture
def day_weather(make_weather, make_hour, make_current):
    """Weather for 6am-6pm with separate morning and afternoon temperatures."""
    def _make(morning, afternoon=None, rain=5, uv=3, humidity=50, rain_hours=(),
              current_condition=Condition.CLEAR):
        afternoon = morning if afternoon is None else afternoon
        hourly = []
        for h in range(6, 19):
            temp = morning if h < 12 else afternoon
            hourly.append(make_hour(
                hour_of_day=h,
                temperature=temp,
                rain=rain if h in rain_hours or not rain_hours else 5,
                uv=uv,
                humidity=humidity,
            ))
        current = make_current(temperature=morning, humidity=humidity, condition=current_condition)
        return make_weather(current=current, hourly=hourly)
    return _make


def _ids(recommendation):
    return [i.id for i in recommendation.items]


def test_baby_on_a_cool_morning(day_weather, fixed_now):
    """8-month-old at 55°F gets a onesie plus the age-scaled optional sweater."""
    rec = generate_outfit_recommendation(BABY, day_weather(55), now=fixed_now)

    assert rec.age_group is AgeGroup.BABY
    assert rec.items[0].item is ClothingItem.ONESIE
    assert rec.items[0].reason == "Base layer for warmth"

    mid, = rec.items_for(Layer.MID)
    assert mid.item is ClothingItem.LIGHT_SWEATER
    assert mid.required is False
    assert mid.reason == "For cooler moments"

    assert rec.summary == "Onesie"
    assert "Babies can't regulate temperature well - check often" in rec.tips
    assert rec.temp_category is TempCategory.COOL


def test_age_scaling_decides_mid_layer(day_weather, fixed_now):
    """At 65°F the baby threshold (70°) still adds a layer, the school-age one (60°) does not."""
    weather = day_weather(65)

    baby = generate_outfit_recommendation(BABY, weather, now=fixed_now)
    kid = generate_outfit_recommendation(KID, weather, now=fixed_now)

    assert [i.item for i in baby.items_for(Layer.MID)] == [ClothingItem.LIGHT_SWEATER]
    assert kid.items_for(Layer.MID) == []


def test_hot_day(day_weather, fixed_now):
    rec = generate_outfit_recommendation(KID, day_weather(96), now=fixed_now)

    assert rec.temp_category is TempCategory.HOT
    assert _ids(rec)[:2] == ["tshirt", "sandals"]
    assert rec.items[0].reason == "Light, breathable fabric"


def test_baby_overheating_tip(day_weather, fixed_now):
    rec = generate_outfit_recommendation(BABY, day_weather(96), now=fixed_now)
    assert "Watch for overheating - keep in shade" in rec.tips


def test_freezing_morning(day_weather, fixed_now):
    rec = generate_outfit_recommendation(KID, day_weather(25), now=fixed_now)

    assert _ids(rec) == [
        "long-sleeve", "fleece", "winter-coat", "winter-boots",
        "winter-hat", "mittens", "scarf", "sunscreen",
    ]
    assert "Remove puffy jacket before car seat for safety" in rec.tips
    assert rec.temp_category is TempCategory.COLD


def test_big_swing(day_weather, fixed_now):
    rec = generate_outfit_recommendation(KID, day_weather(50, 72), now=fixed_now)

    assert rec.morning_temp == 50
    assert rec.afternoon_temp == 72
    assert rec.temp_swing == 22
    assert rec.tips[0] == "Big swing today: 50° to 72° - dress in removable layers"
    assert rec.summary == "Long sleeve shirt + layers for 22° swing"


def test_notable_swing_packs_a_layer(day_weather, fixed_now):
    """A 15° rise with no other mid layer packs a sweater for later."""
    rec = generate_outfit_recommendation(KID, day_weather(62, 77), now=fixed_now)

    mid, = rec.items_for(Layer.MID)
    assert mid.reason == "Pack for later - temp will rise significantly"
    assert rec.tips[0] == "Starts 62°, warms to 77° - have layers to shed"


def test_rain_at_pickup(day_weather, fixed_now):
    rec = generate_outfit_recommendation(KID, day_weather(68, rain=80, rain_hours=(15,)), now=fixed_now)

    assert rec.needs_rain_gear is True
    outer, = rec.items_for(Layer.OUTER)
    assert outer.item is ClothingItem.RAIN_JACKET
    assert outer.required is True
    footwear, = rec.items_for(Layer.FOOTWEAR)
    assert footwear.item is ClothingItem.RAIN_BOOTS
    assert footwear.reason == "Rain expected"
    assert "Rain likely during pickup time - have gear in car" in rec.tips
    assert rec.summary == "T-shirt + rain gear"


def test_rain_at_dropoff(day_weather, fixed_now):
    rec = generate_outfit_recommendation(KID, day_weather(68, rain=60, rain_hours=(8,)), now=fixed_now)
    assert "Morning rain - dress ready or plan to change" in rec.tips


def test_possible_rain_packs_umbrella(day_weather, fixed_now):
    rec = generate_outfit_recommendation(KID, day_weather(68, rain=40), now=fixed_now)

    assert "umbrella" in _ids(rec)
    assert rec.items_for(Layer.OUTER)[0].reason == "Pack in bag just in case"


def test_recent_rain_forces_rain_boots(day_weather, fixed_now):
    rec = generate_outfit_recommendation(KID, day_weather(68, current_condition=Condition.RAIN), now=fixed_now)

    footwear, = rec.items_for(Layer.FOOTWEAR)
    assert footwear.item is ClothingItem.RAIN_BOOTS
    assert footwear.reason == "Puddles likely"


def test_extreme_uv(day_weather, fixed_now):
    rec = generate_outfit_recommendation(KID, day_weather(70, uv=10), now=fixed_now)

    accessories = rec.items_for(Layer.ACCESSORY)
    assert [i.id for i in accessories] == ["sunscreen", "sun-hat", "sunglasses"]
    assert accessories[0].reason == "UV very high - reapply often!"
    assert rec.needs_sun_protection is True
    assert "Extreme UV - avoid 10am-2pm outdoors if possible" in rec.tips


def test_toddler_tips(day_weather, fixed_now):
    rec = generate_outfit_recommendation(TODDLER, day_weather(70, humidity=75), now=fixed_now)

    assert "Pack backup outfit - toddlers get messy!" in rec.tips
    assert "Sticky day - bring extra water" in rec.tips


@pytest.mark.parametrize("temp", [20, 35, 45, 55, 62, 70, 82, 96])
@pytest.mark.parametrize("child", [BABY, TODDLER, KID])
def test_no_duplicate_non_accessory_layers(day_weather, fixed_now, temp, child):
    rec = generate_outfit_recommendation(child, day_weather(temp, temp + 18, rain=75, uv=11), now=fixed_now)

    layers = [i.layer for i in rec.items if i.layer is not Layer.ACCESSORY]
    assert len(layers) == len(set(layers))


def test_dedupe_keeps_first_and_all_accessories():
    items = [
        OutfitItem(ClothingItem.ONESIE, True),
        OutfitItem(ClothingItem.TSHIRT, True),
        OutfitItem(ClothingItem.SUNSCREEN, True),
        OutfitItem(ClothingItem.SUN_HAT, True),
    ]
    assert [i.item for i in dedupe_by_layer(items)] == [
        ClothingItem.ONESIE, ClothingItem.SUNSCREEN, ClothingItem.SUN_HAT,
    ]


def test_analyze_day_temperatures(make_hour, fixed_now):
    hourly = [make_hour(hour_of_day=8, temperature=50), make_hour(hour_of_day=9, temperature=60),
              make_hour(hour_of_day=15, temperature=75)]

    assert analyze_day_temperatures(hourly, now=fixed_now) == DayTemperatures(55, 75)
    # Past the morning window the first sample stands in for the morning
    assert analyze_day_temperatures(hourly, now=fixed_now.replace(hour=12)) == DayTemperatures(50, 75)


def test_analyze_day_temperatures_fallbacks(make_hour, fixed_now):
    hourly = [make_hour(hour_of_day=20, temperature=58), make_hour(hour_of_day=21, temperature=54)]

    assert analyze_day_temperatures(hourly, now=fixed_now) == DayTemperatures(58, 54)
    assert analyze_day_temperatures([], now=fixed_now) == DayTemperatures(65, 70)
    assert DayTemperatures(58, 54).swing == 4


@pytest.mark.parametrize("temp,category", [
    (49, TempCategory.COLD),
    (50, TempCategory.COOL),
    (60, TempCategory.COMFORTABLE),
    (80, TempCategory.WARM),
    (85, TempCategory.HOT),
])
def test_get_temp_category(temp, category):
    assert get_temp_category(temp) is category


def test_footwear_priority():
    assert get_footwear(20, 90).item is ClothingItem.WINTER_BOOTS
    assert get_footwear(45, 90).item is ClothingItem.RAIN_BOOTS
    assert get_footwear(45, 0).item is ClothingItem.BOOTS
    assert get_footwear(90, 0).item is ClothingItem.SANDALS
    assert get_footwear(70, 0).item is ClothingItem.SNEAKERS


def test_mid_layers_pack_rise_threshold():
    assert get_mid_layers(62, 77, AgeGroup.SCHOOL_AGE)
    assert get_mid_layers(62, 76, AgeGroup.SCHOOL_AGE) == []


def test_generate_all_outfit_recommendations(day_weather, fixed_now):
    weather = day_weather(60)

    recs = generate_all_outfit_recommendations([BABY, KID], weather, now=fixed_now)

    assert [r.child_name for r in recs] == ["Ava", "Sam"]
    assert generate_all_outfit_recommendations([], weather) == []
    assert generate_all_outfit_recommendations([BABY], None) == []
