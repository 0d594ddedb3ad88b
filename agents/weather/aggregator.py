# agents/weather/aggregator.py
"""
Temporal aggregation - bucket sub-daily samples into daily summaries
"""
import math
from typing import Dict, List, Sequence

from agents.weather.models import DailyAggregate, Measurement, TemperatureSummary

def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up (2.5 -> 3, -2.5 -> -2), unlike the builtin round()"""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor

def group_by_day(samples: Sequence[Measurement]) -> Dict[str, List[Measurement]]:
    """Stable group-by on the sample date; order inside a group is preserved"""
    groups: Dict[str, List[Measurement]] = {}
    for sample in samples:
        groups.setdefault(sample.date, []).append(sample)
    return groups

def summarize_day(date: str, items: Sequence[Measurement]) -> DailyAggregate:
    """Reduce one non-empty day group to a DailyAggregate"""
    if not items:
        raise ValueError(f"Cannot summarize empty day group for {date}")

    count = len(items)
    temperatures = [item.temperature for item in items]

    return DailyAggregate(
        date=date,
        temperature=TemperatureSummary(
            min=min(temperatures),
            max=max(temperatures),
            average=sum(temperatures) / count
        ),
        humidity=int(round_half_up(sum(item.humidity for item in items) / count)),
        pressure=int(round_half_up(sum(item.pressure for item in items) / count)),
        windSpeed=round_half_up(sum(item.windSpeed for item in items) / count, 2),
        precipitation=round_half_up(sum(item.precipitation for item in items), 2),
        # temporally central sample, not a majority vote
        weather=items[count // 2].weather,
        sampleCount=count
    )

def aggregate_by_day(samples: Sequence[Measurement]) -> List[DailyAggregate]:
    """
    Group samples by calendar date and summarize each day.

    Returns aggregates ordered by ascending date. Empty input gives an empty
    list. Only present samples contribute; missing hours are not filled in.
    """
    groups = group_by_day(samples)
    return [summarize_day(date, groups[date]) for date in sorted(groups)]
