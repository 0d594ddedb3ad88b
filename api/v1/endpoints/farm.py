# api/v1/endpoints/farm.py
from fastapi import APIRouter, Query
from typing import Optional
import logging

from .common import get_agent, internal_error, missing_coordinates

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/advisory")
async def get_farm_advisory(
    lat: Optional[float] = Query(None, description="Latitude of the farm"),
    lon: Optional[float] = Query(None, description="Longitude of the farm")
):
    """
    Comprehensive crop advisory

    Combines frost, irrigation, spraying and heat-stress alerts into one
    overall priority (low, medium, high, urgent) with general advice.
    """
    if lat is None or lon is None:
        return missing_coordinates()

    advisory_agent = get_agent("advisory")
    try:
        return await advisory_agent.get_crop_advisory(lat, lon)
    except Exception as e:
        logger.error(f"Error in farm advisory endpoint: {e}", exc_info=True)
        return internal_error("Failed to generate farm advisory")

@router.get("/frost-alert")
async def get_frost_alert(
    lat: Optional[float] = Query(None, description="Latitude of the farm"),
    lon: Optional[float] = Query(None, description="Longitude of the farm")
):
    """Frost risk for the next 24 hours"""
    if lat is None or lon is None:
        return missing_coordinates()

    advisory_agent = get_agent("advisory")
    try:
        return await advisory_agent.get_frost_alert(lat, lon)
    except Exception as e:
        logger.error(f"Error in frost alert endpoint: {e}", exc_info=True)
        return internal_error("Failed to generate frost alert")

@router.get("/irrigation-advice")
async def get_irrigation_advice(
    lat: Optional[float] = Query(None, description="Latitude of the farm"),
    lon: Optional[float] = Query(None, description="Longitude of the farm")
):
    """Irrigation timing for the next 48 hours"""
    if lat is None or lon is None:
        return missing_coordinates()

    advisory_agent = get_agent("advisory")
    try:
        return await advisory_agent.get_irrigation_advice(lat, lon)
    except Exception as e:
        logger.error(f"Error in irrigation advice endpoint: {e}", exc_info=True)
        return internal_error("Failed to generate irrigation advice")
