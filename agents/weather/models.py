# agents/weather/models.py
"""
Pydantic models for weather agent
"""
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import List

class WeatherCondition(BaseModel):
    model_config = ConfigDict(frozen=True)

    main: str = Field(..., description="Main weather category (e.g., Rain, Clouds)")
    description: str = Field("", description="Human readable description")
    icon: str = Field("", description="Provider icon code")

class Measurement(BaseModel):
    """One point-in-time or point-in-interval sample"""
    model_config = ConfigDict(frozen=True)

    date: str = Field(..., description="UTC calendar date (YYYY-MM-DD)")
    datetime: str = Field(..., description="ISO-8601 UTC instant")
    temperature: float = Field(..., description="Air temperature (°C)")
    humidity: float = Field(..., description="Relative humidity (%)")
    pressure: float = Field(..., description="Pressure (hPa)")
    windSpeed: float = Field(..., description="Wind speed")
    precipitation: float = Field(0.0, ge=0, description="Precipitation over the sample interval (mm)")
    weather: WeatherCondition

class CurrentConditions(Measurement):
    feelsLike: float
    windDirection: float = 0.0
    visibility: float = Field(0.0, description="Visibility (km)")
    uvIndex: float = 0.0

class Location(BaseModel):
    name: str
    lat: float
    lon: float

class CurrentLocation(Location):
    country: str = ""

class Period(BaseModel):
    start: str
    end: str

class CurrentWeather(BaseModel):
    location: CurrentLocation
    current: CurrentConditions
    timestamp: str

class WeatherForecast(BaseModel):
    location: Location
    forecast: List[Measurement]
    timestamp: str

class TemperatureSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: float
    max: float
    average: float

class DailyAggregate(BaseModel):
    """Summary of all samples sharing one calendar date"""
    model_config = ConfigDict(frozen=True)

    date: str
    temperature: TemperatureSummary
    humidity: int
    pressure: int
    windSpeed: float
    precipitation: float
    weather: WeatherCondition
    sampleCount: int = Field(..., ge=1, description="Number of samples in the day")

class DailyForecast(BaseModel):
    location: Location
    forecast: List[DailyAggregate]
    timestamp: str

class HistoricalWeather(BaseModel):
    location: Location
    data: List[Measurement]
    period: Period
    timestamp: str

class HistoricalDailyWeather(BaseModel):
    location: Location
    data: List[DailyAggregate]
    period: Period
    timestamp: str

class IrrigationNeed(str, Enum):
    HIGH = "High need"
    MODERATE = "Moderate need"
    LOW = "Low need"
    MONITOR = "Monitor"

class AgronomicIndices(BaseModel):
    growingDegreeDays: float = Field(..., ge=0)
    evapotranspiration: float = Field(..., ge=0, description="mm/day")
    soilTemperature: float
    frostRisk: bool
    irrigationRecommendation: IrrigationNeed
    sprayingWindow: bool
    heatStress: bool

class AgriculturalWeather(BaseModel):
    current: CurrentWeather
    forecast: WeatherForecast
    dailyForecast: DailyForecast
    insights: AgronomicIndices

class GrowingDegreeDaysSummary(BaseModel):
    location: Location
    period: Period
    baseTemperature: float
    growingDegreeDays: float = Field(..., ge=0)
    days: int
