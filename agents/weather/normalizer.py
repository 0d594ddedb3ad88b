# agents/weather/normalizer.py
"""
Canonicalize OpenWeatherMap samples into Measurement records.

The current, 5-day/3-hour forecast and history endpoints return slightly
different shapes; everything downstream only ever sees Measurement.
Calendar dates are the UTC date of the sample instant.
"""
import math
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from agents.weather.models import (
    CurrentConditions, CurrentLocation, CurrentWeather, HistoricalWeather,
    Location, Measurement, Period, WeatherCondition, WeatherForecast
)
from agents.base import format_utc
from core.exceptions import MalformedSampleError

FORECAST_PRECIPITATION_WINDOW = "3h"
HISTORY_PRECIPITATION_WINDOW = "1h"

def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a measurement; NaN and inf are not readings
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False

def _required_number(value: Any, field: str) -> float:
    if not _is_number(value):
        raise MalformedSampleError(field, value)
    return float(value)

def _optional_number(value: Any, default: float = 0.0) -> float:
    return float(value) if _is_number(value) else default

def _section(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    section = raw.get(key)
    return section if isinstance(section, dict) else {}

def _condition(raw: Dict[str, Any]) -> WeatherCondition:
    conditions = raw.get("weather")
    if not isinstance(conditions, list) or not conditions or not isinstance(conditions[0], dict):
        return WeatherCondition(main="Unknown", description="", icon="")

    first = conditions[0]
    return WeatherCondition(
        main=str(first.get("main") or "Unknown"),
        description=str(first.get("description") or ""),
        icon=str(first.get("icon") or "")
    )

def _instant(raw: Dict[str, Any], fallback: Optional[datetime] = None) -> Tuple[str, str]:
    """Return (date, iso instant) for a sample's epoch-seconds timestamp"""
    dt = raw.get("dt")
    if dt is None and fallback is not None:
        moment = fallback.astimezone(timezone.utc)
    else:
        try:
            moment = datetime.fromtimestamp(_required_number(dt, "dt"), tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise MalformedSampleError("dt", dt) from e

    return moment.date().isoformat(), format_utc(moment)

def _precipitation(raw: Dict[str, Any], window: str) -> float:
    value = _section(raw, "rain").get(window)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    if not _is_number(value) or value < 0:
        raise MalformedSampleError(f"rain.{window}", value)
    return float(value)

def _sample_fields(raw: Dict[str, Any], precipitation_window: str,
                   fallback: Optional[datetime] = None) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise MalformedSampleError("sample", raw)

    main = _section(raw, "main")
    wind = _section(raw, "wind")
    date, iso = _instant(raw, fallback)

    return {
        "date": date,
        "datetime": iso,
        "temperature": _required_number(main.get("temp"), "main.temp"),
        "humidity": _required_number(main.get("humidity"), "main.humidity"),
        "pressure": _required_number(main.get("pressure"), "main.pressure"),
        "windSpeed": _required_number(wind.get("speed"), "wind.speed"),
        "precipitation": _precipitation(raw, precipitation_window),
        "weather": _condition(raw),
    }

def normalize_sample(raw: Dict[str, Any], precipitation_window: str = FORECAST_PRECIPITATION_WINDOW) -> Measurement:
    """Normalize one forecast or history list item.

    Raises MalformedSampleError when temperature, humidity, pressure or wind
    speed is missing, not numeric or not finite, when the timestamp is out of
    range, and when precipitation is negative. Missing precipitation counts as 0.
    """
    return Measurement(**_sample_fields(raw, precipitation_window))

def normalize_current(payload: Dict[str, Any], fetched_at: Optional[datetime] = None) -> CurrentWeather:
    """Normalize a current-conditions payload."""
    fetched_at = fetched_at or datetime.now(timezone.utc)
    fields = _sample_fields(payload, HISTORY_PRECIPITATION_WINDOW, fallback=fetched_at)

    main = _section(payload, "main")
    wind = _section(payload, "wind")
    coord = _section(payload, "coord")

    current = CurrentConditions(
        **fields,
        feelsLike=_optional_number(main.get("feels_like"), fields["temperature"]),
        windDirection=_optional_number(wind.get("deg"), 0.0),
        visibility=_optional_number(payload.get("visibility"), 0.0) / 1000,
        uvIndex=0.0
    )

    location = CurrentLocation(
        name=str(payload.get("name") or ""),
        lat=_optional_number(coord.get("lat")),
        lon=_optional_number(coord.get("lon")),
        country=str(_section(payload, "sys").get("country") or "")
    )

    return CurrentWeather(location=location, current=current, timestamp=format_utc(fetched_at))

def normalize_forecast(payload: Dict[str, Any], fetched_at: Optional[datetime] = None) -> WeatherForecast:
    """Normalize a 5-day/3-hour forecast payload; any bad item fails the whole batch."""
    fetched_at = fetched_at or datetime.now(timezone.utc)
    city = _section(payload, "city")
    coord = _section(city, "coord")
    items = payload.get("list") or []

    return WeatherForecast(
        location=Location(
            name=str(city.get("name") or ""),
            lat=_optional_number(coord.get("lat")),
            lon=_optional_number(coord.get("lon"))
        ),
        forecast=[normalize_sample(item, FORECAST_PRECIPITATION_WINDOW) for item in items],
        timestamp=format_utc(fetched_at)
    )

def normalize_historical(payload: Dict[str, Any], lat: float, lon: float, period: Period,
                         fetched_at: Optional[datetime] = None) -> HistoricalWeather:
    """Normalize an hourly history payload; any bad item fails the whole batch."""
    fetched_at = fetched_at or datetime.now(timezone.utc)
    items = payload.get("list") or []

    return HistoricalWeather(
        location=Location(name=str(payload.get("city_name") or f"{lat}, {lon}"), lat=lat, lon=lon),
        data=[normalize_sample(item, HISTORY_PRECIPITATION_WINDOW) for item in items],
        period=period,
        timestamp=format_utc(fetched_at)
    )
