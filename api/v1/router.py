# api/v1/router.py
from fastapi import APIRouter
from .endpoints import health, weather, farm, market

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(weather.router, prefix="/weather", tags=["weather"])
api_router.include_router(farm.router, prefix="/farm", tags=["farm"])
api_router.include_router(market.router, prefix="/market", tags=["market"])
