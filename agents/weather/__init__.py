# agents/weather/__init__.py
"""
Weather agent package
"""

from .agent import WeatherAgent
from .models import AgronomicIndices, DailyAggregate, Measurement

__all__ = ["WeatherAgent", "AgronomicIndices", "DailyAggregate", "Measurement"]
