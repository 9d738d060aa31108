"""Weather cache port and its in-memory and JSON-file adapters.

A cache holds one serialized ``WeatherData`` blob per key. Reads never
raise: a payload that cannot be decoded is logged and reported as a miss.
Expiry is the service's concern, not the cache's.
"""
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

from weather_data import WeatherData

DEFAULT_CACHE_KEY = "tinyweather_cache"


def _decode(key: str, blob: str) -> Optional[WeatherData]:
    try:
        return WeatherData.from_json(blob)
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        logging.warning(f"Cache read error for '{key}', treating as miss: {e}")
        return None


class WeatherCache(ABC):
    """Abstract key/value store for weather payloads."""

    @abstractmethod
    def get(self, key: str) -> Optional[WeatherData]:
        pass

    @abstractmethod
    def put(self, key: str, data: WeatherData) -> None:
        pass

    @abstractmethod
    def clear(self, key: str) -> None:
        pass


class MemoryWeatherCache(WeatherCache):
    """Process-local cache; entries are stored serialized so callers never share objects."""

    def __init__(self):
        self._entries: Dict[str, str] = {}

    def get(self, key: str) -> Optional[WeatherData]:
        blob = self._entries.get(key)
        if blob is None:
            return None
        return _decode(key, blob)

    def put(self, key: str, data: WeatherData) -> None:
        self._entries[key] = data.to_json()

    def clear(self, key: str) -> None:
        self._entries.pop(key, None)


class FileWeatherCache(WeatherCache):
    """Cache that keeps each key as ``<directory>/<key>.json``."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[WeatherData]:
        path = self._path(key)
        try:
            blob = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logging.warning(f"Could not read cache file {path}: {e}")
            return None
        return _decode(key, blob)

    def put(self, key: str, data: WeatherData) -> None:
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_text(data.to_json(), encoding="utf-8")
            logging.debug(f"Wrote weather cache to {path}")
        except OSError as e:
            logging.warning(f"Cache write error for {path}: {e}")

    def clear(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            logging.warning(f"Could not remove cache file for '{key}': {e}")
