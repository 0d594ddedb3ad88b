# agents/weather/indices.py
"""
Agronomic index engine - GDD, evapotranspiration proxy, soil temperature
proxy and the boolean field indicators derived from current conditions and
the upcoming daily aggregates.

These are coarse heuristics; the constants are kept as-is because
downstream consumers depend on the exact values.
"""
import math
from typing import Callable, List, NamedTuple, Sequence

from agents.weather.models import AgronomicIndices, DailyAggregate, IrrigationNeed, Measurement

DEFAULT_BASE_TEMPERATURE = 10.0

# Hargreaves-style proxy
_HARGREAVES_COEFFICIENT = 0.0023
_HARGREAVES_OFFSET = 17.8
_KELVIN_OFFSET = 273.16
_LATENT_HEAT_FACTOR = 2.45
_FALLBACK_TEMPERATURE_RANGE = 10.0

SOIL_TEMPERATURE_FACTOR = 0.85
FROST_LOOKAHEAD_DAYS = 3
FROST_MIN_TEMPERATURE = 2.0
SPRAY_MAX_WIND_SPEED = 15.0

class IrrigationNeedRule(NamedTuple):
    matches: Callable[[float, float], bool]
    need: IrrigationNeed

# (temperature, humidity) -> need; first match wins
IRRIGATION_NEED_RULES: List[IrrigationNeedRule] = [
    IrrigationNeedRule(lambda t, h: h < 40 and t > 25, IrrigationNeed.HIGH),
    IrrigationNeedRule(lambda t, h: h < 60 and t > 20, IrrigationNeed.MODERATE),
    IrrigationNeedRule(lambda t, h: h > 80, IrrigationNeed.LOW),
    IrrigationNeedRule(lambda t, h: True, IrrigationNeed.MONITOR),
]

def growing_degree_days(temperature: float, base_temperature: float = DEFAULT_BASE_TEMPERATURE) -> float:
    """Instantaneous GDD for the current temperature"""
    return max(0.0, temperature - base_temperature)

def cumulative_growing_degree_days(days: Sequence[DailyAggregate],
                                   base_temperature: float = DEFAULT_BASE_TEMPERATURE) -> float:
    """GDD accumulated over a period, using each day's average temperature"""
    return sum(growing_degree_days(day.temperature.average, base_temperature) for day in days)

def evapotranspiration(temperature: float, upcoming: Sequence[DailyAggregate]) -> float:
    """
    Evapotranspiration proxy in mm/day.

    The temperature range comes from the first upcoming day; when there is no
    such day, or its range is zero, a range of 10 is used.
    """
    temperature_range = 0.0
    if upcoming:
        first = upcoming[0].temperature
        temperature_range = first.max - first.min
    if not temperature_range:
        temperature_range = _FALLBACK_TEMPERATURE_RANGE

    estimate = (
        _HARGREAVES_COEFFICIENT
        * (temperature + _HARGREAVES_OFFSET)
        * math.sqrt(abs(temperature_range))
        * (temperature + _KELVIN_OFFSET) / _KELVIN_OFFSET
        * _LATENT_HEAT_FACTOR
    )
    return max(0.0, estimate)

def soil_temperature(temperature: float) -> float:
    return temperature * SOIL_TEMPERATURE_FACTOR

def frost_risk(upcoming: Sequence[DailyAggregate]) -> bool:
    return any(day.temperature.min < FROST_MIN_TEMPERATURE for day in upcoming[:FROST_LOOKAHEAD_DAYS])

def irrigation_need(temperature: float, humidity: float) -> IrrigationNeed:
    for rule in IRRIGATION_NEED_RULES:
        if rule.matches(temperature, humidity):
            return rule.need
    return IrrigationNeed.MONITOR

def spraying_window(wind_speed: float, upcoming: Sequence[DailyAggregate]) -> bool:
    """Calm wind and no rain on the first upcoming day"""
    rain_today = any(day.precipitation > 0 for day in upcoming[:1])
    return wind_speed < SPRAY_MAX_WIND_SPEED and not rain_today

def heat_stress(temperature: float, humidity: float) -> bool:
    return temperature > 35 or (temperature > 30 and humidity > 70)

def calculate_agricultural_insights(current: Measurement, upcoming: Sequence[DailyAggregate],
                                    base_temperature: float = DEFAULT_BASE_TEMPERATURE) -> AgronomicIndices:
    """Derive the current-instant indices from the current sample and upcoming days"""
    temperature = current.temperature
    humidity = current.humidity

    return AgronomicIndices(
        growingDegreeDays=growing_degree_days(temperature, base_temperature),
        evapotranspiration=evapotranspiration(temperature, upcoming),
        soilTemperature=soil_temperature(temperature),
        frostRisk=frost_risk(upcoming),
        irrigationRecommendation=irrigation_need(temperature, humidity),
        sprayingWindow=spraying_window(current.windSpeed, upcoming),
        heatStress=heat_stress(temperature, humidity)
    )
