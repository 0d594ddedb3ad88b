# agents/weather/agent.py
"""
Weather agent - current conditions, forecasts, history and agronomic insights
"""

import asyncio
from functools import partial
from typing import Any, Callable, Optional, Tuple
from datetime import date, datetime, time, timedelta, timezone

from agents.base import AgentResponse, BaseAgent, gather_upstream
from agents.weather.aggregator import aggregate_by_day
from agents.weather.indices import (
    DEFAULT_BASE_TEMPERATURE, calculate_agricultural_insights, cumulative_growing_degree_days
)
from agents.weather.models import (
    AgriculturalWeather, CurrentWeather, DailyForecast, GrowingDegreeDaysSummary,
    HistoricalDailyWeather, HistoricalWeather, Period, WeatherForecast
)
from agents.weather.normalizer import normalize_current, normalize_forecast, normalize_historical
from agents.weather.service import WeatherProviderClient
from core.config import Settings

DEFAULT_HISTORY_DAYS = 7

def _as_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))

def resolve_period(start: Any = None, end: Any = None, today: Optional[date] = None,
                   default_days: int = DEFAULT_HISTORY_DAYS) -> Tuple[date, date]:
    """
    Fill in a history window the way the API always has:
    no dates -> the last `default_days` days; only an end -> the
    `default_days` days before it; only a start -> until today.
    """
    today = today or datetime.now(timezone.utc).date()
    start_date, end_date = _as_date(start), _as_date(end)

    if start_date is None and end_date is None:
        end_date = today
        start_date = today - timedelta(days=default_days)
    elif start_date is None:
        start_date = end_date - timedelta(days=default_days)
    elif end_date is None:
        end_date = today

    if start_date > end_date:
        raise ValueError(f"Start date {start_date} is after end date {end_date}")

    return start_date, end_date

def _epoch_seconds(day: date) -> int:
    return int(datetime.combine(day, time.min, tzinfo=timezone.utc).timestamp())

class WeatherAgent(BaseAgent):
    """
    Weather agent backed by OpenWeatherMap

    Features:
    - Current conditions and 5-day/3-hour forecast
    - Daily forecast aggregated from the 3-hour samples
    - Hourly and daily history, cumulative growing degree days
    - Agronomic insights (GDD, evapotranspiration, soil temperature, field indicators)
    """

    def __init__(self, settings: Optional[Settings] = None, client: Optional[WeatherProviderClient] = None):
        super().__init__("weather", settings)
        self.client = client or WeatherProviderClient(
            api_key=self.settings.openweather_api_key,
            config=self.config
        )
        self.base_temperature = float(
            self.settings.advisory_config.get("base_temperature", DEFAULT_BASE_TEMPERATURE)
        )
        self.default_history_days = int(self.config.get("default_history_days", DEFAULT_HISTORY_DAYS))
        self.logger.info("Weather agent initialized")

    def _validate_config(self) -> None:
        """Validate weather agent configuration"""
        required_config = ["base_url", "history_url", "units"]

        missing = [key for key in required_config if key not in self.config]
        if missing:
            self.logger.warning(f"Missing weather config (using defaults): {missing}")

        if not self.settings.openweather_api_key:
            self.logger.warning("No OpenWeatherMap API key provided - provider requests will fail")

    async def _call_provider(self, func: Callable, *args) -> Any:
        """Run a blocking provider call in the default executor"""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(func, *args))

    # ---------- FETCH (raise on failure) ----------

    async def fetch_current_weather(self, lat: float, lon: float) -> CurrentWeather:
        payload = await self._call_provider(self.client.fetch_current, lat, lon)
        return normalize_current(payload)

    async def fetch_hourly_forecast(self, lat: float, lon: float) -> WeatherForecast:
        payload = await self._call_provider(self.client.fetch_forecast, lat, lon)
        return normalize_forecast(payload)

    async def fetch_daily_forecast(self, lat: float, lon: float) -> DailyForecast:
        hourly = await self.fetch_hourly_forecast(lat, lon)
        return DailyForecast(
            location=hourly.location,
            forecast=aggregate_by_day(hourly.forecast),
            timestamp=hourly.timestamp
        )

    async def fetch_historical_weather(self, lat: float, lon: float, start: Any = None, end: Any = None) -> HistoricalWeather:
        start_date, end_date = resolve_period(start, end, default_days=self.default_history_days)
        payload = await self._call_provider(
            self.client.fetch_historical, lat, lon, _epoch_seconds(start_date), _epoch_seconds(end_date)
        )
        period = Period(start=start_date.isoformat(), end=end_date.isoformat())
        return normalize_historical(payload, lat, lon, period)

    async def fetch_historical_weather_by_days(self, lat: float, lon: float, days: Optional[int] = None) -> HistoricalWeather:
        days = self.default_history_days if days is None else days
        if days < 1:
            raise ValueError("days must be at least 1")

        end_moment = datetime.now(timezone.utc)
        start_moment = end_moment - timedelta(days=days)
        payload = await self._call_provider(
            self.client.fetch_historical_count, lat, lon, int(start_moment.timestamp()), days * 24
        )
        period = Period(start=start_moment.date().isoformat(), end=end_moment.date().isoformat())
        return normalize_historical(payload, lat, lon, period)

    async def fetch_historical_daily_weather(self, lat: float, lon: float, start: Any = None, end: Any = None) -> HistoricalDailyWeather:
        historical = await self.fetch_historical_weather(lat, lon, start, end)
        return HistoricalDailyWeather(
            location=historical.location,
            data=aggregate_by_day(historical.data),
            period=historical.period,
            timestamp=historical.timestamp
        )

    # ---------- ENTRY POINTS (envelopes) ----------

    async def get_current_weather(self, lat: float, lon: float) -> AgentResponse:
        return await self.execute(lambda: self.fetch_current_weather(lat, lon), f"current weather ({lat}, {lon})")

    async def get_hourly_forecast(self, lat: float, lon: float) -> AgentResponse:
        return await self.execute(lambda: self.fetch_hourly_forecast(lat, lon), f"hourly forecast ({lat}, {lon})")

    async def get_daily_forecast(self, lat: float, lon: float) -> AgentResponse:
        return await self.execute(lambda: self.fetch_daily_forecast(lat, lon), f"daily forecast ({lat}, {lon})")

    async def get_historical_weather(self, lat: float, lon: float, start: Any = None, end: Any = None) -> AgentResponse:
        return await self.execute(
            lambda: self.fetch_historical_weather(lat, lon, start, end),
            f"historical weather ({lat}, {lon})"
        )

    async def get_historical_weather_by_days(self, lat: float, lon: float, days: Optional[int] = None) -> AgentResponse:
        return await self.execute(
            lambda: self.fetch_historical_weather_by_days(lat, lon, days),
            f"historical weather by days ({lat}, {lon})"
        )

    async def get_historical_daily_weather(self, lat: float, lon: float, start: Any = None, end: Any = None) -> AgentResponse:
        return await self.execute(
            lambda: self.fetch_historical_daily_weather(lat, lon, start, end),
            f"historical daily weather ({lat}, {lon})"
        )

    async def get_growing_degree_days(self, lat: float, lon: float, start: Any = None, end: Any = None,
                                      base_temperature: Optional[float] = None) -> AgentResponse:
        base = self.base_temperature if base_temperature is None else base_temperature

        async def operation() -> GrowingDegreeDaysSummary:
            daily = await self.fetch_historical_daily_weather(lat, lon, start, end)
            return GrowingDegreeDaysSummary(
                location=daily.location,
                period=daily.period,
                baseTemperature=base,
                growingDegreeDays=cumulative_growing_degree_days(daily.data, base),
                days=len(daily.data)
            )

        return await self.execute(operation, f"growing degree days ({lat}, {lon})")

    async def get_agricultural_weather(self, lat: float, lon: float) -> AgentResponse:
        async def operation() -> AgriculturalWeather:
            current, forecast, daily = await gather_upstream(
                self.fetch_current_weather(lat, lon),
                self.fetch_hourly_forecast(lat, lon),
                self.fetch_daily_forecast(lat, lon),
                message="Failed to fetch complete weather data"
            )
            insights = calculate_agricultural_insights(current.current, daily.forecast, self.base_temperature)
            self.logger.info(
                f"Insights for ({lat}, {lon}): frost={insights.frostRisk}, "
                f"irrigation={insights.irrigationRecommendation.value}, heat={insights.heatStress}"
            )
            return AgriculturalWeather(current=current, forecast=forecast, dailyForecast=daily, insights=insights)

        return await self.execute(operation, f"agricultural weather ({lat}, {lon})")
