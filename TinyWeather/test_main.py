"""Tests for the command line entry point."""
from unittest.mock import Mock, patch

import pytest

import main
from config import Settings
from mock_weather import get_mock_weather_data
from weather_cache import FileWeatherCache, MemoryWeatherCache
from weather_provider import WeatherProviderError


@pytest.fixture
def configured_env(monkeypatch):
    monkeypatch.setenv("WEATHER_API_KEY", "test_key")
    monkeypatch.setenv("WEATHER_LAT", "41.88")
    monkeypatch.setenv("WEATHER_LON", "-87.63")


def test_parse_args_children():
    args = main.parse_args(["--child", "Ava:8", "--child", "Sam:70", "--celsius"])

    assert [c.name for c in args.children] == ["Ava", "Sam"]
    assert args.children[0].age_months == 8
    assert args.celsius is True
    assert args.watch is None


def test_parse_args_rejects_bad_child():
    with pytest.raises(SystemExit):
        main.parse_args(["--child", "Ava"])


def test_mock_mode_prints_briefing(capsys):
    assert main.main(["--mock", "--seed", "1", "--child", "Ava:8"]) == 0

    out = capsys.readouterr().out
    assert "WHAT TO WEAR" in out
    assert "Ava (baby)" in out
    assert "OUTDOOR TIME" in out


def test_missing_api_key(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("WEATHER_API_KEY", raising=False)

    with pytest.raises(SystemExit, match="Missing WEATHER_API_KEY"):
        main.main([])


def test_missing_coordinates(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("WEATHER_API_KEY", "test_key")
    monkeypatch.delenv("WEATHER_LAT", raising=False)
    monkeypatch.delenv("WEATHER_LON", raising=False)

    with pytest.raises(SystemExit, match="WEATHER_LAT/WEATHER_LON"):
        main.main([])


def test_live_mode_uses_service(configured_env, capsys):
    service = Mock()
    service.load_weather.return_value = get_mock_weather_data(seed=2)

    with patch("main.build_weather_service", return_value=service):
        assert main.main(["--force-refresh"]) == 0

    service.load_weather.assert_called_once_with(41.88, -87.63, force_refresh=True)
    assert "NOW" in capsys.readouterr().out


def test_no_cache_bypasses_cache(configured_env):
    service = Mock()
    service.fetch_all_weather.return_value = get_mock_weather_data(seed=2)

    with patch("main.build_weather_service", return_value=service):
        assert main.main(["--no-cache"]) == 0

    service.fetch_all_weather.assert_called_once_with(41.88, -87.63, use_cache=False)
    service.load_weather.assert_not_called()


def test_provider_failure_exit_code(configured_env):
    service = Mock()
    service.load_weather.side_effect = WeatherProviderError("Network error: down")

    with patch("main.build_weather_service", return_value=service):
        assert main.main([]) == 1


def test_build_weather_service_picks_cache(tmp_path):
    settings = Settings(api_key="k", lat=1.0, lng=2.0, cache_dir=str(tmp_path), retry_attempts=5)

    service = main.build_weather_service(settings)

    assert isinstance(service.cache, FileWeatherCache)
    assert service.retry_policy.max_attempts == 5

    settings.cache_dir = None
    assert isinstance(main.build_weather_service(settings).cache, MemoryWeatherCache)


def test_weather_loop_refreshes_until_interrupted():
    args = main.parse_args(["--mock", "--watch", "0"])
    settings = Settings()

    with patch("main.time.sleep", side_effect=[None, KeyboardInterrupt]) as sleep, \
            patch("main.show_briefing") as show:
        with pytest.raises(KeyboardInterrupt):
            main.weather_loop(None, settings, args)

    assert show.call_count == 2
    sleep.assert_called_with(1.0)


def test_weather_loop_survives_provider_errors():
    args = main.parse_args(["--watch", "30"])
    service = Mock()
    service.load_weather.side_effect = WeatherProviderError("boom")
    settings = Settings(lat=1.0, lng=2.0)

    with patch("main.time.sleep", side_effect=[None, KeyboardInterrupt]):
        with pytest.raises(KeyboardInterrupt):
            main.weather_loop(service, settings, args)

    assert service.load_weather.call_count == 2
