# agents/weather/service.py
"""
Weather provider client - raw OpenWeatherMap payloads
"""
import requests
from typing import Dict, Any, Optional
import logging

from core.exceptions import ProviderUnavailableError

logger = logging.getLogger(__name__)

class WeatherProviderClient:
    """Single-attempt client for the current, forecast and history endpoints.

    Returns the provider JSON untouched; normalization happens elsewhere.
    Every transport, HTTP or decoding failure is raised as
    ProviderUnavailableError.
    """

    DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"
    DEFAULT_HISTORY_URL = "https://history.openweathermap.org/data/2.5/history/city"

    def __init__(self, api_key: Optional[str], config: Dict[str, Any], http: Any = requests):
        self.api_key = api_key
        self.base_url = config.get("base_url", self.DEFAULT_BASE_URL)
        self.history_url = config.get("history_url", self.DEFAULT_HISTORY_URL)
        self.units = config.get("units", "metric")
        self.timeout = config.get("request_timeout", 10)
        # module-level requests.get by default; no Session shared across executor threads
        self.http = http

    def _get(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        if not self.api_key:
            raise ProviderUnavailableError("OpenWeatherMap API key not configured")

        query = dict(params, appid=self.api_key, units=self.units)
        try:
            resp = self.http.get(url, params=query, timeout=self.timeout)
            resp.raise_for_status()
            payload = resp.json()
        except requests.RequestException as e:
            logger.error(f"OpenWeatherMap request failed: {e}")
            raise ProviderUnavailableError(f"Weather provider unavailable: {e}") from e
        except ValueError as e:
            logger.error(f"OpenWeatherMap returned invalid JSON: {e}")
            raise ProviderUnavailableError("Weather provider returned an invalid response") from e

        if not isinstance(payload, dict):
            raise ProviderUnavailableError("Weather provider returned an unexpected payload")

        return payload

    def fetch_current(self, lat: float, lon: float) -> Dict[str, Any]:
        """Current conditions"""
        payload = self._get(f"{self.base_url}/weather", {"lat": lat, "lon": lon})
        logger.info(f"Current weather fetched for lat={lat}, lon={lon}")
        return payload

    def fetch_forecast(self, lat: float, lon: float) -> Dict[str, Any]:
        """5-day forecast in 3-hour steps"""
        payload = self._get(f"{self.base_url}/forecast", {"lat": lat, "lon": lon})
        logger.info(f"Forecast fetched for lat={lat}, lon={lon}: {len(payload.get('list') or [])} samples")
        return payload

    def fetch_historical(self, lat: float, lon: float, start: int, end: int) -> Dict[str, Any]:
        """Hourly history between two epoch-second timestamps"""
        payload = self._get(self.history_url, {
            "lat": lat,
            "lon": lon,
            "type": "hour",
            "start": start,
            "end": end,
        })
        logger.info(f"History fetched for lat={lat}, lon={lon}: {len(payload.get('list') or [])} samples")
        return payload

    def fetch_historical_count(self, lat: float, lon: float, start: int, count: int) -> Dict[str, Any]:
        """Hourly history: `count` samples starting at an epoch-second timestamp"""
        payload = self._get(self.history_url, {
            "lat": lat,
            "lon": lon,
            "type": "hour",
            "start": start,
            "cnt": count,
        })
        logger.info(f"History fetched for lat={lat}, lon={lon}: {len(payload.get('list') or [])} samples")
        return payload
