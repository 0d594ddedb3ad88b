# agents/advisory/classifier.py
"""
Advisory classifier - maps the current sample plus the near-term forecast
window onto discrete frost, irrigation, spraying and heat-stress states.

Every classifier is an ordered rule table evaluated first-match-wins. Each
table ends with a catch-all rule, so every input maps to exactly one state.
"""
from typing import Any, Callable, List, NamedTuple, Sequence

from agents.advisory.models import (
    FrostAlert, FrostRisk, HeatStressAlert, HeatStressRisk,
    IrrigationAdvice, IrrigationRecommendation, SprayingWindow
)
from agents.weather.models import Measurement

SAMPLE_INTERVAL_HOURS = 3
FROST_WINDOW = 8        # ~24h of 3-hour samples
RAIN_WINDOW = 16        # ~48h
SPRAY_WINDOW = 8        # ~24h
SIGNIFICANT_RAIN_MM = 5.0

class Rule(NamedTuple):
    matches: Callable[..., bool]
    outcome: Any

def always(*_args) -> bool:
    return True

def first_match(rules: Sequence[Rule], *args) -> Any:
    """Outcome of the first rule whose predicate accepts args"""
    for rule in rules:
        if rule.matches(*args):
            return rule.outcome
    raise LookupError("No rule matched; rule tables must end with a catch-all")

def format_number(value: float) -> str:
    """38.0 -> '38', 38.5 -> '38.5'"""
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)

# ---------- FROST ----------

class FrostTier(NamedTuple):
    risk: FrostRisk
    message: str
    action: str
    timeframe: str

# lowest temperature (°C) in the window
FROST_RULES: List[Rule] = [
    Rule(lambda t: t <= -2, FrostTier(
        FrostRisk.CRITICAL,
        "Severe frost expected - immediate action required",
        "Cover all sensitive crops, use frost protection methods, move potted plants indoors",
        "Within next 6-12 hours")),
    Rule(lambda t: t <= 0, FrostTier(
        FrostRisk.HIGH,
        "Hard frost likely - protect vulnerable crops",
        "Cover young plants, drain irrigation lines, harvest sensitive crops",
        "Within next 12-24 hours")),
    Rule(lambda t: t <= 2, FrostTier(
        FrostRisk.MODERATE,
        "Light frost possible - monitor closely",
        "Prepare frost protection materials, monitor weather updates",
        "Within next 24-48 hours")),
    Rule(lambda t: t <= 5, FrostTier(
        FrostRisk.LOW,
        "Cool temperatures ahead - minimal frost risk",
        "Normal operations, keep frost protection ready",
        "Next 2-3 days")),
    Rule(always, FrostTier(
        FrostRisk.NONE,
        "No frost risk detected",
        "Continue normal farming activities",
        "Next 5 days")),
]

def classify_frost(current: Measurement, forecast: Sequence[Measurement]) -> FrostAlert:
    """Frost tier from the lowest temperature over the next 8 samples.

    With no forecast samples the current temperature stands in.
    """
    window = forecast[:FROST_WINDOW]
    lowest = min((sample.temperature for sample in window), default=current.temperature)
    tier = first_match(FROST_RULES, lowest)

    return FrostAlert(
        risk=tier.risk,
        message=tier.message,
        action=tier.action,
        timeframe=tier.timeframe,
        temperature=lowest
    )

# ---------- IRRIGATION ----------

class IrrigationTier(NamedTuple):
    recommendation: IrrigationRecommendation
    message: str
    reason: str
    next_check: str
    water_amount: str

# (temperature, humidity, rainfall over 48h)
IRRIGATION_RULES: List[Rule] = [
    Rule(lambda t, h, rain: rain > SIGNIFICANT_RAIN_MM, IrrigationTier(
        IrrigationRecommendation.SKIP,
        "Skip irrigation - adequate rainfall expected",
        "{rain:.1f}mm rain forecast in next 48 hours",
        "Check again after rainfall",
        "")),
    Rule(lambda t, h, rain: t > 35 and h < 35, IrrigationTier(
        IrrigationRecommendation.IMMEDIATE,
        "Immediate irrigation required - extreme heat stress conditions",
        "Very high temperature ({temperature}°C) with low humidity ({humidity}%)",
        "Monitor every 6 hours",
        "Deep watering recommended - 25-30mm equivalent")),
    Rule(lambda t, h, rain: t > 30 and h < 40, IrrigationTier(
        IrrigationRecommendation.WITHIN_24H,
        "Irrigation needed within 24 hours - high stress conditions",
        "High temperature ({temperature}°C) with low humidity ({humidity}%)",
        "Check again in 12 hours",
        "Regular watering - 15-20mm equivalent")),
    Rule(lambda t, h, rain: t > 25 and h < 50, IrrigationTier(
        IrrigationRecommendation.WITHIN_48H,
        "Plan irrigation within 48 hours - moderate stress detected",
        "Moderate temperature ({temperature}°C) with moderate humidity ({humidity}%)",
        "Check again in 24 hours",
        "Light watering - 10-15mm equivalent")),
    Rule(always, IrrigationTier(
        IrrigationRecommendation.MONITOR,
        "Continue monitoring - current conditions adequate",
        "Acceptable temperature ({temperature}°C) and humidity ({humidity}%)",
        "Check again in 24 hours",
        "")),
]

def classify_irrigation(current: Measurement, forecast: Sequence[Measurement]) -> IrrigationAdvice:
    """Irrigation timing; more than 5mm of rain in the next 16 samples always means skip."""
    rainfall = sum(sample.precipitation for sample in forecast[:RAIN_WINDOW])
    tier = first_match(IRRIGATION_RULES, current.temperature, current.humidity, rainfall)

    return IrrigationAdvice(
        recommendation=tier.recommendation,
        message=tier.message,
        reason=tier.reason.format(
            temperature=format_number(current.temperature),
            humidity=format_number(current.humidity),
            rain=rainfall
        ),
        nextCheck=tier.next_check,
        waterAmount=tier.water_amount,
        rainfall=rainfall
    )

# ---------- SPRAYING ----------

class SprayConditions(NamedTuple):
    wind_speed: float
    temperature: float
    good_offsets: List[int]  # positions of good-window samples in the next 8
    current_hour: int

def is_good_spray_sample(sample: Measurement) -> bool:
    return (
        sample.windSpeed < 15
        and sample.precipitation == 0
        and 10 < sample.temperature < 30
    )

def _wall_clock_hour(current_hour: int, offset: int) -> int:
    return (current_hour + offset * SAMPLE_INTERVAL_HOURS) % 24

def _too_windy(c: SprayConditions) -> SprayingWindow:
    if c.good_offsets:
        hours = c.good_offsets[0] * SAMPLE_INTERVAL_HOURS
        next_opportunity = f"Next opportunity in {hours} hours"
    else:
        next_opportunity = "Check forecast tomorrow"

    return SprayingWindow(
        suitable=False,
        message="Spraying not recommended - wind too strong",
        reason=f"Current wind speed: {format_number(c.wind_speed)} km/h (safe limit: <15 km/h)",
        nextOpportunity=next_opportunity,
        goodWindows=len(c.good_offsets)
    )

def _too_hot(c: SprayConditions) -> SprayingWindow:
    return SprayingWindow(
        suitable=False,
        message="Spraying not recommended - temperature too high",
        reason=f"Current temperature: {format_number(c.temperature)}°C (avoid spraying above 30°C)",
        nextOpportunity="Wait for cooler conditions (early morning/evening)",
        goodWindows=len(c.good_offsets)
    )

def _suitable(c: SprayConditions) -> SprayingWindow:
    morning = any(6 <= _wall_clock_hour(c.current_hour, offset) <= 10 for offset in c.good_offsets)
    if morning:
        best_time = "Early morning (6-10 AM) recommended for optimal results"
    else:
        best_time = "Current conditions suitable - spray when convenient"

    return SprayingWindow(
        suitable=True,
        message="Good spraying conditions available",
        reason=f"Low wind ({format_number(c.wind_speed)} km/h), suitable temperature ({format_number(c.temperature)}°C)",
        bestTime=best_time,
        goodWindows=len(c.good_offsets)
    )

def _poor(c: SprayConditions) -> SprayingWindow:
    return SprayingWindow(
        suitable=False,
        message="Poor spraying conditions - wait for better weather",
        reason="High wind or rain forecast in next 24 hours",
        nextOpportunity="Check forecast again in 12 hours",
        goodWindows=0
    )

SPRAY_RULES: List[Rule] = [
    Rule(lambda c: c.wind_speed > 20, _too_windy),
    Rule(lambda c: c.temperature > 30, _too_hot),
    Rule(lambda c: bool(c.good_offsets), _suitable),
    Rule(always, _poor),
]

def classify_spraying(current: Measurement, forecast: Sequence[Measurement], current_hour: int) -> SprayingWindow:
    """Spraying suitability from current wind/temperature and good samples in the next 8.

    current_hour is the local wall-clock hour the forecast window starts at.
    """
    good_offsets = [
        offset for offset, sample in enumerate(forecast[:SPRAY_WINDOW])
        if is_good_spray_sample(sample)
    ]
    conditions = SprayConditions(
        wind_speed=current.windSpeed,
        temperature=current.temperature,
        good_offsets=good_offsets,
        current_hour=current_hour
    )
    build = first_match(SPRAY_RULES, conditions)
    return build(conditions)

# ---------- HEAT STRESS ----------

class HeatTier(NamedTuple):
    risk: HeatStressRisk
    message: str
    action: str

# (temperature, humidity)
HEAT_STRESS_RULES: List[Rule] = [
    Rule(lambda t, h: t > 40 or (t > 35 and h > 70), HeatTier(
        HeatStressRisk.EXTREME,
        "Extreme heat stress - immediate action required",
        "Increase irrigation frequency, provide shade, harvest heat-sensitive crops immediately")),
    Rule(lambda t, h: t > 35 or (t > 30 and h > 80), HeatTier(
        HeatStressRisk.HIGH,
        "High heat stress - crops need protection",
        "Increase irrigation, apply mulch, avoid field work during peak heat")),
    Rule(lambda t, h: t > 30 or (t > 25 and h > 85), HeatTier(
        HeatStressRisk.MODERATE,
        "Moderate heat stress - monitor crops closely",
        "Ensure adequate water supply, consider morning/evening irrigation")),
    Rule(lambda t, h: t > 25, HeatTier(
        HeatStressRisk.LOW,
        "Mild heat stress possible - maintain normal care",
        "Continue regular irrigation schedule, monitor plant health")),
    Rule(always, HeatTier(
        HeatStressRisk.NONE,
        "No heat stress detected",
        "Normal growing conditions - continue standard practices")),
]

def classify_heat_stress(current: Measurement, forecast: Sequence[Measurement]) -> HeatStressAlert:
    """Heat-stress tier; duration counts every forecast sample above 30°C."""
    hot_samples = sum(1 for sample in forecast if sample.temperature > 30)
    tier = first_match(HEAT_STRESS_RULES, current.temperature, current.humidity)

    return HeatStressAlert(
        risk=tier.risk,
        message=tier.message,
        action=tier.action,
        duration=f"{hot_samples * SAMPLE_INTERVAL_HOURS} hours of elevated temperatures expected",
        temperature=current.temperature
    )
