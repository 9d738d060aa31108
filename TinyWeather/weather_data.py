"""Weather domain model - pure data structures independent of any API.

Units are fixed once data leaves the provider: °F, mph, percentages.
"""
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from thresholds import Condition


@dataclass
class CurrentConditions:
    temperature: float
    feels_like: float
    humidity: float
    wind_speed: float
    uv_index: float
    precipitation_probability: float
    condition: Condition
    observation_time: datetime
    icon: str = "clear"

    @property
    def condition_text(self) -> str:
        return self.condition.label

    def to_dict(self) -> dict:
        return {
            "temperature": self.temperature,
            "feels_like": self.feels_like,
            "humidity": self.humidity,
            "wind_speed": self.wind_speed,
            "uv_index": self.uv_index,
            "precipitation_probability": self.precipitation_probability,
            "condition": self.condition.code,
            "observation_time": self.observation_time.isoformat(),
            "icon": self.icon,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CurrentConditions":
        return cls(
            temperature=data["temperature"],
            feels_like=data["feels_like"],
            humidity=data["humidity"],
            wind_speed=data["wind_speed"],
            uv_index=data["uv_index"],
            precipitation_probability=data["precipitation_probability"],
            condition=Condition.from_code(data["condition"]),
            observation_time=datetime.fromisoformat(data["observation_time"]),
            icon=data.get("icon", "clear"),
        )


@dataclass
class HourlyForecast:
    time: datetime
    temperature: float
    feels_like: float
    humidity: float
    precipitation_probability: float
    uv_index: float
    wind_speed: float
    condition: Condition = Condition.PARTLY_CLOUDY

    @property
    def condition_text(self) -> str:
        return self.condition.label

    def to_dict(self) -> dict:
        return {
            "time": self.time.isoformat(),
            "temperature": self.temperature,
            "feels_like": self.feels_like,
            "humidity": self.humidity,
            "precipitation_probability": self.precipitation_probability,
            "uv_index": self.uv_index,
            "wind_speed": self.wind_speed,
            "condition": self.condition.code,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HourlyForecast":
        return cls(
            time=datetime.fromisoformat(data["time"]),
            temperature=data["temperature"],
            feels_like=data["feels_like"],
            humidity=data["humidity"],
            precipitation_probability=data["precipitation_probability"],
            uv_index=data["uv_index"],
            wind_speed=data["wind_speed"],
            condition=Condition.from_code(data["condition"]),
        )


@dataclass
class DailyForecast:
    date: datetime
    temp_high: float
    temp_low: float
    precipitation_probability: float
    condition: Condition = Condition.PARTLY_CLOUDY
    uv_index_max: float = 0
    sunrise: str = ""
    sunset: str = ""

    @property
    def condition_text(self) -> str:
        return self.condition.label

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "temp_high": self.temp_high,
            "temp_low": self.temp_low,
            "precipitation_probability": self.precipitation_probability,
            "condition": self.condition.code,
            "uv_index_max": self.uv_index_max,
            "sunrise": self.sunrise,
            "sunset": self.sunset,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DailyForecast":
        return cls(
            date=datetime.fromisoformat(data["date"]),
            temp_high=data["temp_high"],
            temp_low=data["temp_low"],
            precipitation_probability=data["precipitation_probability"],
            condition=Condition.from_code(data["condition"]),
            uv_index_max=data.get("uv_index_max", 0),
            sunrise=data.get("sunrise", ""),
            sunset=data.get("sunset", ""),
        )


@dataclass
class WeatherData:
    """Everything the analyzers need: current, hourly and daily forecasts."""
    current: CurrentConditions
    hourly: List[HourlyForecast] = field(default_factory=list)
    daily: List[DailyForecast] = field(default_factory=list)
    fetched_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Expired once ``now`` reaches ``expires_at``; data without an expiry never expires."""
        if self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        return now >= self.expires_at

    def to_dict(self) -> dict:
        return {
            "current": self.current.to_dict(),
            "hourly": [hour.to_dict() for hour in self.hourly],
            "daily": [day.to_dict() for day in self.daily],
            "fetched_at": self.fetched_at.isoformat() if self.fetched_at else None,
            "expires_at": self.expires_at.isoformat() if self.expires_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WeatherData":
        fetched_at = data.get("fetched_at")
        expires_at = data.get("expires_at")
        return cls(
            current=CurrentConditions.from_dict(data["current"]),
            hourly=[HourlyForecast.from_dict(hour) for hour in data["hourly"]],
            daily=[DailyForecast.from_dict(day) for day in data["daily"]],
            fetched_at=datetime.fromisoformat(fetched_at) if fetched_at else None,
            expires_at=datetime.fromisoformat(expires_at) if expires_at else None,
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, blob: str) -> "WeatherData":
        return cls.from_dict(json.loads(blob))
