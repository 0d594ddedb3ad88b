# agents/advisory/agent.py
"""
Crop advisory agent - frost, irrigation, spraying and heat-stress advice
"""

from typing import Optional
from datetime import datetime, timezone

from agents.base import AgentResponse, BaseAgent, gather_upstream
from agents.advisory.classifier import classify_frost, classify_irrigation
from agents.advisory.models import AdvisoryLocation, CropAdvisory, FrostAlert, IrrigationAdvice
from agents.advisory.synthesizer import build_crop_advisory
from agents.weather.agent import WeatherAgent
from core.config import Settings

class AdvisoryAgent(BaseAgent):
    """
    Crop advisory agent

    Features:
    - Frost alerts from the next 24 hours of forecast
    - Irrigation timing with rain pre-emption over 48 hours
    - Spraying windows (wind, rain, temperature)
    - Heat-stress tiers
    - One overall priority with general advice

    Every request is computed from freshly fetched data; nothing is cached.
    """

    def __init__(self, weather_agent: WeatherAgent, settings: Optional[Settings] = None):
        super().__init__("advisory", settings)
        self.weather_agent = weather_agent
        self.logger.info("Advisory agent initialized")

    def _validate_config(self) -> None:
        """Validate advisory agent configuration"""
        if "base_temperature" not in self.config:
            self.logger.warning("Missing advisory config (using defaults): ['base_temperature']")

    async def _fetch_current_and_forecast(self, lat: float, lon: float, message: str):
        return await gather_upstream(
            self.weather_agent.fetch_current_weather(lat, lon),
            self.weather_agent.fetch_hourly_forecast(lat, lon),
            message=message
        )

    async def get_crop_advisory(self, lat: float, lon: float) -> AgentResponse:
        """Comprehensive advisory for one location"""

        async def operation() -> CropAdvisory:
            current, hourly = await self._fetch_current_and_forecast(
                lat, lon, "Failed to fetch weather data for analysis"
            )
            location = AdvisoryLocation(
                name=current.location.name,
                lat=current.location.lat,
                lon=current.location.lon
            )
            advisory = build_crop_advisory(
                location=location,
                current=current.current,
                forecast=hourly.forecast,
                current_hour=datetime.now().hour,
                generated_at=datetime.now(timezone.utc)
            )
            self.logger.info(
                f"Advisory for {location.name or (lat, lon)}: priority={advisory.priority.value}, "
                f"frost={advisory.frost.risk.value}, irrigation={advisory.irrigation.recommendation.value}, "
                f"heat={advisory.heatStress.risk.value}, spraying={advisory.spraying.suitable}"
            )
            return advisory

        return await self.execute(operation, f"crop advisory ({lat}, {lon})")

    async def get_frost_alert(self, lat: float, lon: float) -> AgentResponse:
        async def operation() -> FrostAlert:
            current, hourly = await self._fetch_current_and_forecast(lat, lon, "Weather data unavailable")
            return classify_frost(current.current, hourly.forecast)

        return await self.execute(operation, f"frost alert ({lat}, {lon})")

    async def get_irrigation_advice(self, lat: float, lon: float) -> AgentResponse:
        async def operation() -> IrrigationAdvice:
            current, hourly = await self._fetch_current_and_forecast(lat, lon, "Weather data unavailable")
            return classify_irrigation(current.current, hourly.forecast)

        return await self.execute(operation, f"irrigation advice ({lat}, {lon})")
