# agents/advisory/synthesizer.py
"""
Priority synthesis - combine the four classified alerts into one overall
priority plus a list of general advice
"""
from datetime import datetime
from typing import List, NamedTuple, Sequence, Tuple

from agents.advisory.classifier import (
    Rule, always, classify_frost, classify_heat_stress, classify_irrigation,
    classify_spraying, first_match
)
from agents.advisory.models import (
    AdvisoryLocation, CropAdvisory, FrostAlert, FrostRisk, HeatStressAlert, HeatStressRisk,
    IrrigationAdvice, IrrigationRecommendation, Priority, SprayingWindow
)
from agents.base import format_utc
from agents.weather.models import Measurement

class Alerts(NamedTuple):
    frost: FrostAlert
    irrigation: IrrigationAdvice
    spraying: SprayingWindow
    heat: HeatStressAlert

class PriorityTier(NamedTuple):
    priority: Priority
    headline: str

PRIORITY_RULES: List[Rule] = [
    Rule(lambda a: (a.frost.risk == FrostRisk.CRITICAL
                    or a.heat.risk == HeatStressRisk.EXTREME
                    or a.irrigation.recommendation == IrrigationRecommendation.IMMEDIATE),
         PriorityTier(Priority.URGENT, "⚠️ Urgent action required - check all alerts immediately")),
    Rule(lambda a: (a.frost.risk == FrostRisk.HIGH
                    or a.heat.risk == HeatStressRisk.HIGH
                    or a.irrigation.recommendation == IrrigationRecommendation.WITHIN_24H),
         PriorityTier(Priority.HIGH, "⚡ High priority - address within 24 hours")),
    Rule(lambda a: (a.frost.risk == FrostRisk.MODERATE
                    or a.heat.risk == HeatStressRisk.MODERATE
                    or a.irrigation.recommendation == IrrigationRecommendation.WITHIN_48H),
         PriorityTier(Priority.MEDIUM, "📋 Medium priority - plan accordingly")),
    Rule(always, PriorityTier(Priority.LOW, "")),
]

# independent of priority; every matching line is added, in this order
ADVICE_RULES: List[Rule] = [
    Rule(lambda a: a.spraying.suitable,
         "✅ Good conditions for pesticide/herbicide application"),
    Rule(lambda a: a.irrigation.recommendation == IrrigationRecommendation.SKIP,
         "💧 Rain expected - save on irrigation costs"),
    Rule(lambda a: a.frost.risk == FrostRisk.NONE and a.heat.risk == HeatStressRisk.NONE,
         "🌿 Optimal growing conditions - ideal for field work"),
    Rule(always,
         "📱 Check updates every 12-24 hours for changing conditions"),
]

def determine_priority(alerts: Alerts) -> PriorityTier:
    return first_match(PRIORITY_RULES, alerts)

def general_advice(alerts: Alerts) -> List[str]:
    return [rule.outcome for rule in ADVICE_RULES if rule.matches(alerts)]

def synthesize(frost: FrostAlert, irrigation: IrrigationAdvice, spraying: SprayingWindow,
               heat_stress: HeatStressAlert) -> Tuple[Priority, List[str]]:
    """Overall priority and the general advice list"""
    alerts = Alerts(frost, irrigation, spraying, heat_stress)
    tier = determine_priority(alerts)

    advice = [tier.headline] if tier.headline else []
    advice.extend(general_advice(alerts))
    return tier.priority, advice

def build_crop_advisory(location: AdvisoryLocation, current: Measurement, forecast: Sequence[Measurement],
                        current_hour: int, generated_at: datetime) -> CropAdvisory:
    """Classify all four alerts for one location and combine them"""
    frost = classify_frost(current, forecast)
    irrigation = classify_irrigation(current, forecast)
    spraying = classify_spraying(current, forecast, current_hour)
    heat_stress = classify_heat_stress(current, forecast)

    priority, advice = synthesize(frost, irrigation, spraying, heat_stress)

    return CropAdvisory(
        location=location,
        frost=frost,
        irrigation=irrigation,
        spraying=spraying,
        heatStress=heat_stress,
        generalAdvice=advice,
        priority=priority,
        lastUpdated=format_utc(generated_at)
    )
