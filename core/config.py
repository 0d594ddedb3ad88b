# core/config.py
"""
Configuration management for the FarmAssist backend
"""

from pydantic_settings import BaseSettings
from typing import List, Optional, Dict, Any
from functools import lru_cache
from enum import Enum
import logging
from dotenv import load_dotenv
load_dotenv()

logger = logging.getLogger(__name__)

class Environment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"

class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

class Settings(BaseSettings):
    """Application settings with validation"""

    # Environment
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = True

    # API Configuration
    api_title: str = "FarmAssist Backend"
    api_version: str = "1.0.0"
    api_host: str = "0.0.0.0"
    api_port: int = 3000

    # Logging
    log_level: LogLevel = LogLevel.INFO
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # CORS
    cors_origins: List[str] = ["*"]
    cors_allow_credentials: bool = False
    cors_allow_methods: List[str] = ["*"]
    cors_allow_headers: List[str] = ["*"]

    # External API Keys
    openweather_api_key: Optional[str] = None

    # Agent Configurations
    weather_config: Dict[str, Any] = {
        "base_url": "https://api.openweathermap.org/data/2.5",
        "history_url": "https://history.openweathermap.org/data/2.5/history/city",
        "units": "metric",
        "request_timeout": 10,
        "default_history_days": 7
    }

    advisory_config: Dict[str, Any] = {
        "base_temperature": 10.0
    }

    market_config: Dict[str, Any] = {
        "ticker_url": "https://agmarknet.gov.in/agnew/namticker.aspx",
        "user_agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36",
        "request_timeout": 10,
        "refresh_interval_minutes": 60,
        "snapshot_ttl": 86400,  # 24 hours
        "scheduler_enabled": True
    }

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    def get_agent_config(self, agent_name: str) -> Dict[str, Any]:
        """Get configuration for specific agent"""
        config_map = {
            "weather": self.weather_config,
            "advisory": self.advisory_config,
            "market": self.market_config
        }
        return config_map.get(agent_name, {})

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()

# Validation functions
def validate_api_keys(settings: Settings) -> None:
    """Validate required API keys based on environment"""
    required_keys = []

    logger.info(f"🔑 OPENWEATHER_API_KEY: {'Set' if settings.openweather_api_key else 'NOT SET'}")

    if not settings.openweather_api_key:
        required_keys.append("OPENWEATHER_API_KEY")

    if required_keys and settings.is_production:
        raise ValueError(f"Missing required API keys in production: {', '.join(required_keys)}")

    if required_keys:
        logger.warning(f"⚠️  Missing API keys ({settings.environment.value} mode): {', '.join(required_keys)}")
        logger.warning("⚠️  Weather and advisory requests will fail until the key is configured")
    else:
        logger.info("✅ All required API keys are present")
