"""Tests for weather cache adapters."""
import pytest

from weather_cache import DEFAULT_CACHE_KEY, FileWeatherCache, MemoryWeatherCache


@pytest.fixture(params=["memory", "file"])
def cache(request, tmp_path):
    if request.param == "memory":
        return MemoryWeatherCache()
    return FileWeatherCache(tmp_path / "cache")


@pytest.fixture
def weather(make_weather, make_hour):
    return make_weather(hourly=[make_hour(hour_of_day=h) for h in range(7, 19)])


def test_cache_round_trip(cache, weather):
    """Stored data reads back field for field."""
    cache.put(DEFAULT_CACHE_KEY, weather)

    restored = cache.get(DEFAULT_CACHE_KEY)

    assert restored == weather
    assert restored is not weather


def test_cache_miss_and_clear(cache, weather):
    assert cache.get(DEFAULT_CACHE_KEY) is None

    cache.put(DEFAULT_CACHE_KEY, weather)
    cache.clear(DEFAULT_CACHE_KEY)

    assert cache.get(DEFAULT_CACHE_KEY) is None
    # Clearing an absent key is fine
    cache.clear(DEFAULT_CACHE_KEY)


def test_cache_keys_are_independent(cache, weather):
    cache.put("a", weather)
    assert cache.get("b") is None


def test_memory_cache_corrupt_payload_is_a_miss(caplog):
    cache = MemoryWeatherCache()
    cache._entries["broken"] = "{not json"

    assert cache.get("broken") is None
    assert "treating as miss" in caplog.text


def test_file_cache_corrupt_payload_is_a_miss(tmp_path, caplog):
    cache = FileWeatherCache(tmp_path)
    (tmp_path / "broken.json").write_text('{"current": {}}', encoding="utf-8")

    assert cache.get("broken") is None
    assert "treating as miss" in caplog.text


def test_file_cache_writes_json_file(tmp_path, weather):
    cache = FileWeatherCache(tmp_path / "nested" / "dir")
    cache.put("tinyweather_cache", weather)

    path = tmp_path / "nested" / "dir" / "tinyweather_cache.json"
    assert path.exists()
    assert '"fetched_at": "2024-05-15T07:00:00+00:00"' in path.read_text(encoding="utf-8")


def test_file_cache_write_error_is_logged(tmp_path, weather, caplog):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", encoding="utf-8")
    cache = FileWeatherCache(blocker)

    cache.put("key", weather)

    assert "Cache write error" in caplog.text
