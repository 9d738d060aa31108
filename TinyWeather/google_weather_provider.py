"""Google Weather API provider implementation.

Requests are sent in METRIC units and converted here to °F and mph. The API
has returned a few different field shapes over time, so every value is read
through ``first_present`` with the older shapes as fallbacks.
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional

import requests

from thresholds import map_condition
from units import celsius_to_fahrenheit, coerce_field, first_present, mps_to_mph, parse_timestamp
from weather_data import CurrentConditions, DailyForecast, HourlyForecast
from weather_provider import WeatherProviderBase, WeatherProviderError


class GoogleWeatherProvider(WeatherProviderBase):
    """
    Weather provider using the Google Maps Platform Weather API.

    Three lookup endpoints are used: current conditions, hourly forecast and
    daily forecast. Each call is a single POST; retrying is left to the
    service layer.
    """

    BASE_URL = "https://weather.googleapis.com/v1"
    CURRENT_PATH = "currentConditions:lookup"
    HOURLY_PATH = "forecast/hours:lookup"
    DAILY_PATH = "forecast/days:lookup"

    def __init__(self, api_key: str, base_url: Optional[str] = None, timeout: int = 10):
        """
        Initialize Google Weather provider.

        Args:
            api_key: Google Maps Platform API key
            base_url: Override the API root (tests, proxies)
            timeout: HTTP request timeout in seconds
        """
        self.api_key = api_key
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout

    def get_current(self, lat: float, lng: float) -> CurrentConditions:
        data = self._post(self.CURRENT_PATH, self._body(lat, lng))
        return parse_current_conditions(data)

    def get_hourly(self, lat: float, lng: float, hours: int) -> List[HourlyForecast]:
        data = self._post(self.HOURLY_PATH, self._body(lat, lng, hours=hours))
        forecasts = parse_hourly_forecast(data, hours)
        if not forecasts:
            raise WeatherProviderError("Empty hourly forecast")
        return forecasts

    def get_daily(self, lat: float, lng: float, days: int) -> List[DailyForecast]:
        data = self._post(self.DAILY_PATH, self._body(lat, lng, days=days))
        forecasts = parse_daily_forecast(data, days)
        if not forecasts:
            raise WeatherProviderError("Empty daily forecast")
        return forecasts

    @staticmethod
    def _body(lat: float, lng: float, **extra) -> dict:
        body = {
            "location": {"latitude": lat, "longitude": lng},
            "unitsSystem": "METRIC",
        }
        body.update(extra)
        return body

    def _post(self, path: str, body: dict) -> dict:
        url = f"{self.base_url}/{path}"
        try:
            logging.info(f"Making Google Weather API request: {url}")
            logging.debug(f"Request body: {body}")

            response = requests.post(url, params={"key": self.api_key}, json=body, timeout=self.timeout)

            logging.info(f"API response status: {response.status_code}")
            if not response.ok:
                logging.error(f"API request failed with status {response.status_code}")
                self._handle_error_response(response)

            data = response.json()
        # requests' JSONDecodeError is also a RequestException, so catch it first
        except ValueError as e:
            logging.error(f"Failed to parse API response: {e}", exc_info=True)
            raise WeatherProviderError(f"Failed to parse response: {str(e)}")
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise WeatherProviderError(f"Network error: {str(e)}")

        if not isinstance(data, dict):
            raise WeatherProviderError(f"Unexpected response type: {type(data).__name__}")
        logging.debug(f"API response data keys: {list(data.keys())}")
        return data

    def _handle_error_response(self, response: requests.Response) -> None:
        """Parse and raise error from a Google API error response."""
        try:
            error_data = response.json()
        except ValueError:
            logging.error(f"Non-JSON error response: HTTP {response.status_code}, body: {response.text[:500]}")
            raise WeatherProviderError(
                f"HTTP {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

        logging.error(f"Google Weather API error response: {error_data}")
        error = error_data.get("error", {}) if isinstance(error_data, dict) else {}
        message = error.get("message", "Unknown error") if isinstance(error, dict) else str(error)
        status = error.get("status") if isinstance(error, dict) else None

        error_msg = f"Google Weather API error {response.status_code}: {message}"
        if status:
            error_msg += f" ({status})"
        raise WeatherProviderError(error_msg, status_code=response.status_code)


def _condition_of(record: dict):
    raw = first_present(
        record,
        ("weatherCondition", "type"),
        ("weatherCondition", "description", "text"),
        ("weatherCondition",),
        ("condition",),
    )
    return map_condition(raw if isinstance(raw, str) else "CLEAR")


def parse_current_conditions(payload: dict, now: Optional[datetime] = None) -> CurrentConditions:
    current = payload.get("currentConditions") or payload
    now = now or datetime.now().astimezone()

    temperature = celsius_to_fahrenheit(first_present(current, ("temperature", "degrees"), ("temperature",)))
    feels_like = celsius_to_fahrenheit(first_present(
        current,
        ("feelsLikeTemperature", "degrees"),
        ("apparentTemperature", "degrees"),
        ("feelsLike",),
        ("temperature", "degrees"),
        ("temperature",),
    ))
    icon = first_present(current, ("iconCode",), ("weatherCondition", "iconBaseUri"))

    return CurrentConditions(
        temperature=temperature,
        feels_like=feels_like,
        humidity=coerce_field("humidity", first_present(
            current, ("relativeHumidity",), ("humidity", "percent"), ("humidity",))),
        wind_speed=mps_to_mph(first_present(current, ("wind", "speed", "value"), ("windSpeed",))),
        uv_index=coerce_field("uv_index", first_present(current, ("uvIndex", "index"), ("uvIndex",))),
        precipitation_probability=coerce_field("precipitation_probability", first_present(
            current,
            ("precipitation", "probability", "percent"),
            ("precipitationProbability", "percent"),
            ("precipitationProbability",),
        )),
        condition=_condition_of(current),
        observation_time=parse_timestamp(
            first_present(current, ("currentTime",), ("observationTime",), ("dateTime",)), now),
        icon=icon if isinstance(icon, str) else "clear",
    )


def parse_hourly_forecast(payload: dict, hours: int, now: Optional[datetime] = None) -> List[HourlyForecast]:
    records = payload.get("forecastHours") or payload.get("hourlyForecasts") or payload.get("hourly") or []
    now = now or datetime.now().astimezone()

    forecasts = []
    for index, hour in enumerate(records[:hours]):
        if not isinstance(hour, dict):
            logging.warning(f"Skipping malformed hourly record at index {index}")
            continue
        temperature = first_present(hour, ("temperature", "degrees"), ("temperature",))
        feels_like = first_present(
            hour, ("feelsLikeTemperature", "degrees"), ("apparentTemperature", "degrees"), ("feelsLike",))
        if feels_like is None:
            feels_like = temperature
        forecasts.append(HourlyForecast(
            time=parse_timestamp(
                first_present(hour, ("interval", "startTime"), ("dateTime",), ("time",)),
                now + timedelta(hours=index),
            ),
            temperature=celsius_to_fahrenheit(temperature),
            feels_like=celsius_to_fahrenheit(feels_like),
            humidity=coerce_field("humidity", first_present(
                hour, ("relativeHumidity",), ("humidity", "percent"), ("humidity",))),
            precipitation_probability=coerce_field("precipitation_probability", first_present(
                hour,
                ("precipitation", "probability", "percent"),
                ("precipitationProbability", "percent"),
                ("precipitationProbability",),
            )),
            uv_index=coerce_field("uv_index", first_present(hour, ("uvIndex", "index"), ("uvIndex",))),
            wind_speed=mps_to_mph(first_present(hour, ("wind", "speed", "value"), ("windSpeed",))),
            condition=_condition_of(hour),
        ))

    forecasts.sort(key=lambda h: h.time)
    logging.debug(f"Parsed {len(forecasts)} hourly records")
    return forecasts


def parse_daily_forecast(payload: dict, days: int, now: Optional[datetime] = None) -> List[DailyForecast]:
    records = payload.get("forecastDays") or payload.get("dailyForecasts") or payload.get("daily") or []
    now = now or datetime.now().astimezone()

    forecasts = []
    for index, day in enumerate(records[:days]):
        if not isinstance(day, dict):
            logging.warning(f"Skipping malformed daily record at index {index}")
            continue
        daytime = day.get("daytimeForecast") if isinstance(day.get("daytimeForecast"), dict) else {}
        uv_max = first_present(daytime, ("uvIndex",)) if daytime else None
        if uv_max is None:
            uv_max = first_present(day, ("uvIndex", "max", "index"), ("uvIndexMax",))
        sunrise = first_present(day, ("sunEvents", "sunriseTime"), ("sun", "rise"), ("sunrise",))
        sunset = first_present(day, ("sunEvents", "sunsetTime"), ("sun", "set"), ("sunset",))

        forecasts.append(DailyForecast(
            date=parse_timestamp(
                first_present(day, ("interval", "startTime"), ("displayDate",), ("dateTime",), ("date",)),
                now + timedelta(days=index),
            ),
            temp_high=celsius_to_fahrenheit(first_present(
                day, ("maxTemperature", "degrees"), ("temperature", "max", "degrees"),
                ("maxTemperature",), ("tempHigh",))),
            temp_low=celsius_to_fahrenheit(first_present(
                day, ("minTemperature", "degrees"), ("temperature", "min", "degrees"),
                ("minTemperature",), ("tempLow",))),
            precipitation_probability=coerce_field("precipitation_probability", first_present(
                day,
                ("daytimeForecast", "precipitation", "probability", "percent"),
                ("precipitationProbability", "percent"),
                ("precipitationProbability",),
            )),
            condition=_condition_of(daytime) if daytime.get("weatherCondition") else _condition_of(day),
            uv_index_max=coerce_field("uv_index", uv_max),
            sunrise=sunrise if isinstance(sunrise, str) else "",
            sunset=sunset if isinstance(sunset, str) else "",
        ))

    forecasts.sort(key=lambda d: d.date)
    logging.debug(f"Parsed {len(forecasts)} daily records")
    return forecasts
