# run.py
"""
Main entry point for FarmAssist Backend
"""

import uvicorn
import logging
from contextlib import asynccontextmanager

from api.app import create_app
from core.config import get_settings, validate_api_keys
from core.logging import setup_logging
from agents.weather.agent import WeatherAgent
from agents.advisory.agent import AdvisoryAgent
from agents.market.agent import MarketAgent
from agents.market.scheduler import MarketPriceScheduler
from agents.base import agent_registry

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app):
    """Application lifespan management"""
    settings = get_settings()
    scheduler = None

    # Startup
    logger.info("🚀 Starting FarmAssist Backend")
    validate_api_keys(settings)

    # Initialize and register agents
    logger.info("Initializing agents...")
    try:
        weather_agent = WeatherAgent(settings=settings)
        agent_registry.register(weather_agent)
        logger.info("✅ Weather agent registered")

        advisory_agent = AdvisoryAgent(weather_agent=weather_agent, settings=settings)
        agent_registry.register(advisory_agent)
        logger.info("✅ Advisory agent registered")

        market_agent = MarketAgent(settings=settings)
        agent_registry.register(market_agent)
        logger.info("✅ Market agent registered")

        # Test agent health
        health_results = await agent_registry.health_check_all()
        for agent_name, health in health_results.items():
            status = "✅" if health["status"] == "healthy" else "❌"
            logger.info(f"{status} {agent_name}: {health['status']}")

        if settings.market_config.get("scheduler_enabled", True):
            scheduler = MarketPriceScheduler(
                market_agent,
                interval_minutes=settings.market_config.get("refresh_interval_minutes", 60)
            )
            scheduler.start()

        logger.info("🎯 All agents initialized successfully")

    except Exception as e:
        logger.error(f"❌ Failed to initialize agents: {e}")
        raise

    yield

    # Shutdown
    if scheduler is not None:
        await scheduler.stop()
    logger.info("🛑 Shutting down FarmAssist Backend")

def create_application():
    """Create FastAPI application with all configurations"""
    return create_app(lifespan=lifespan)

def main():
    """Main entry point"""
    settings = get_settings()

    logger.info(f"Starting server on {settings.api_host}:{settings.api_port}")
    logger.info(f"Environment: {settings.environment.value}")
    logger.info(f"Debug mode: {settings.debug}")

    if settings.debug:
        # Use import string for reload to work
        uvicorn.run(
            "run:create_application",
            factory=True,
            host=settings.api_host,
            port=settings.api_port,
            reload=True,
            log_level=settings.log_level.value.lower(),
            access_log=True
        )
    else:
        app = create_application()
        uvicorn.run(
            app,
            host=settings.api_host,
            port=settings.api_port,
            reload=False,
            log_level=settings.log_level.value.lower(),
            access_log=True
        )

if __name__ == "__main__":
    main()
