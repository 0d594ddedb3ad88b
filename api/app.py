# api/app.py
"""
FastAPI application factory
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from api.v1.router import api_router
from api.v1.endpoints.common import get_agent, internal_error
from core.config import get_settings

logger = logging.getLogger(__name__)

def create_app(lifespan=None) -> FastAPI:
    """Create FastAPI application"""
    settings = get_settings()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Include routers
    app.include_router(api_router, prefix="/api")

    @app.get("/")
    async def root():
        return {
            "message": "FarmAssist Backend is running",
            "service": settings.api_title,
            "version": settings.api_version,
            "status": "healthy"
        }

    @app.get("/api/market-prices", tags=["market"])
    async def market_prices():
        """Fresh market price scrape, sorted by commodity"""
        market_agent = get_agent("market")
        try:
            return await market_agent.get_market_prices()
        except Exception as e:
            logger.error(f"Error in market prices endpoint: {e}", exc_info=True)
            return internal_error("Failed to fetch market prices")

    return app
