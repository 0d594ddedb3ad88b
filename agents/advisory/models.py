# agents/advisory/models.py
"""
Pydantic models for advisory agent
"""
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import List

class FrostRisk(str, Enum):
    NONE = "none"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"

class IrrigationRecommendation(str, Enum):
    IMMEDIATE = "immediate"
    WITHIN_24H = "within_24h"
    WITHIN_48H = "within_48h"
    SKIP = "skip"
    MONITOR = "monitor"

class HeatStressRisk(str, Enum):
    NONE = "none"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    EXTREME = "extreme"

class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

class FrostAlert(BaseModel):
    model_config = ConfigDict(frozen=True)

    risk: FrostRisk
    message: str
    action: str
    timeframe: str
    temperature: float = Field(..., description="Lowest forecast temperature in the window (°C)")

class IrrigationAdvice(BaseModel):
    model_config = ConfigDict(frozen=True)

    recommendation: IrrigationRecommendation
    message: str
    reason: str
    nextCheck: str
    waterAmount: str = ""
    rainfall: float = Field(0.0, description="Forecast rainfall over the next 48 hours (mm)")

class SprayingWindow(BaseModel):
    model_config = ConfigDict(frozen=True)

    suitable: bool
    message: str
    bestTime: str = ""
    nextOpportunity: str = ""
    reason: str
    goodWindows: int = Field(0, description="Suitable samples in the next 24 hours")

class HeatStressAlert(BaseModel):
    model_config = ConfigDict(frozen=True)

    risk: HeatStressRisk
    message: str
    action: str
    duration: str
    temperature: float

class AdvisoryLocation(BaseModel):
    name: str
    lat: float
    lon: float

class CropAdvisory(BaseModel):
    location: AdvisoryLocation
    frost: FrostAlert
    irrigation: IrrigationAdvice
    spraying: SprayingWindow
    heatStress: HeatStressAlert
    generalAdvice: List[str]
    priority: Priority
    lastUpdated: str
