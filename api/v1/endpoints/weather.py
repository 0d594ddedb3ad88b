# api/v1/endpoints/weather.py
from fastapi import APIRouter, Query
from typing import Optional
from datetime import date
import logging

from .common import get_agent, internal_error, missing_coordinates

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/current")
async def get_current_weather(
    lat: Optional[float] = Query(None, description="Latitude of the location"),
    lon: Optional[float] = Query(None, description="Longitude of the location")
):
    """Current weather conditions"""
    if lat is None or lon is None:
        return missing_coordinates()

    weather_agent = get_agent("weather")
    try:
        return await weather_agent.get_current_weather(lat, lon)
    except Exception as e:
        logger.error(f"Error in current weather endpoint: {e}", exc_info=True)
        return internal_error("Failed to fetch current weather")

@router.get("/forecast")
async def get_daily_forecast(
    lat: Optional[float] = Query(None, description="Latitude of the location"),
    lon: Optional[float] = Query(None, description="Longitude of the location")
):
    """Daily forecast aggregated from the 3-hour forecast"""
    if lat is None or lon is None:
        return missing_coordinates()

    weather_agent = get_agent("weather")
    try:
        return await weather_agent.get_daily_forecast(lat, lon)
    except Exception as e:
        logger.error(f"Error in forecast endpoint: {e}", exc_info=True)
        return internal_error("Failed to fetch weather forecast")

@router.get("/hourly")
async def get_hourly_forecast(
    lat: Optional[float] = Query(None, description="Latitude of the location"),
    lon: Optional[float] = Query(None, description="Longitude of the location")
):
    """5-day forecast in 3-hour steps"""
    if lat is None or lon is None:
        return missing_coordinates()

    weather_agent = get_agent("weather")
    try:
        return await weather_agent.get_hourly_forecast(lat, lon)
    except Exception as e:
        logger.error(f"Error in hourly forecast endpoint: {e}", exc_info=True)
        return internal_error("Failed to fetch hourly forecast")

@router.get("/agricultural")
async def get_agricultural_weather(
    lat: Optional[float] = Query(None, description="Latitude of the location"),
    lon: Optional[float] = Query(None, description="Longitude of the location")
):
    """
    Current weather, forecasts and agronomic insights

    Insights include growing degree days, an evapotranspiration estimate,
    soil temperature, frost risk, irrigation need, spraying window and heat stress.
    """
    if lat is None or lon is None:
        return missing_coordinates()

    weather_agent = get_agent("weather")
    try:
        return await weather_agent.get_agricultural_weather(lat, lon)
    except Exception as e:
        logger.error(f"Error in agricultural weather endpoint: {e}", exc_info=True)
        return internal_error("Failed to fetch agricultural weather data")

@router.get("/historical")
async def get_historical_weather(
    lat: Optional[float] = Query(None, description="Latitude of the location"),
    lon: Optional[float] = Query(None, description="Longitude of the location"),
    start: Optional[date] = Query(None, description="Start date (YYYY-MM-DD), defaults to 7 days before end"),
    end: Optional[date] = Query(None, description="End date (YYYY-MM-DD), defaults to today")
):
    """Hourly historical weather"""
    if lat is None or lon is None:
        return missing_coordinates()

    weather_agent = get_agent("weather")
    try:
        return await weather_agent.get_historical_weather(lat, lon, start, end)
    except Exception as e:
        logger.error(f"Error in historical weather endpoint: {e}", exc_info=True)
        return internal_error("Failed to fetch historical weather data")

@router.get("/historical-days")
async def get_historical_weather_by_days(
    lat: Optional[float] = Query(None, description="Latitude of the location"),
    lon: Optional[float] = Query(None, description="Longitude of the location"),
    days: int = Query(7, ge=1, le=365, description="Number of days to look back")
):
    """Hourly historical weather for the last N days"""
    if lat is None or lon is None:
        return missing_coordinates()

    weather_agent = get_agent("weather")
    try:
        return await weather_agent.get_historical_weather_by_days(lat, lon, days)
    except Exception as e:
        logger.error(f"Error in historical weather by days endpoint: {e}", exc_info=True)
        return internal_error("Failed to fetch historical weather data")

@router.get("/historical-daily")
async def get_historical_daily_weather(
    lat: Optional[float] = Query(None, description="Latitude of the location"),
    lon: Optional[float] = Query(None, description="Longitude of the location"),
    start: Optional[date] = Query(None, description="Start date (YYYY-MM-DD)"),
    end: Optional[date] = Query(None, description="End date (YYYY-MM-DD)")
):
    """Historical weather aggregated per day"""
    if lat is None or lon is None:
        return missing_coordinates()

    weather_agent = get_agent("weather")
    try:
        return await weather_agent.get_historical_daily_weather(lat, lon, start, end)
    except Exception as e:
        logger.error(f"Error in historical daily weather endpoint: {e}", exc_info=True)
        return internal_error("Failed to fetch historical daily weather data")

@router.get("/growing-degree-days")
async def get_growing_degree_days(
    lat: Optional[float] = Query(None, description="Latitude of the location"),
    lon: Optional[float] = Query(None, description="Longitude of the location"),
    start: Optional[date] = Query(None, description="Start date (YYYY-MM-DD)"),
    end: Optional[date] = Query(None, description="End date (YYYY-MM-DD)"),
    base_temp: Optional[float] = Query(None, ge=-10, le=30, description="Base temperature (°C), default 10")
):
    """Growing degree days accumulated over a historical period"""
    if lat is None or lon is None:
        return missing_coordinates()

    weather_agent = get_agent("weather")
    try:
        return await weather_agent.get_growing_degree_days(lat, lon, start, end, base_temp)
    except Exception as e:
        logger.error(f"Error in growing degree days endpoint: {e}", exc_info=True)
        return internal_error("Failed to calculate growing degree days")
