# api/v1/endpoints/market.py
from fastapi import APIRouter
import logging

from .common import get_agent, internal_error

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/prices")
async def get_market_prices():
    """
    Latest AGMARKNET commodity prices

    Served from the most recent snapshot when one exists.
    """
    market_agent = get_agent("market")
    try:
        return await market_agent.get_latest_market_prices()
    except Exception as e:
        logger.error(f"Error in market prices endpoint: {e}", exc_info=True)
        return internal_error("Failed to fetch market prices")

@router.post("/prices/update")
async def update_market_prices():
    """Refresh the market price snapshot now"""
    market_agent = get_agent("market")
    try:
        return await market_agent.trigger_update()
    except Exception as e:
        logger.error(f"Error in manual update endpoint: {e}", exc_info=True)
        return internal_error("Failed to update market prices")
