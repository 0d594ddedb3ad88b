"""
Pytest configuration and shared fixtures for all tests.
"""

import sys
from pathlib import Path

import pytest

# Add the project root to sys.path so the top-level packages import without installing
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from agents.weather.models import DailyAggregate, Measurement, TemperatureSummary, WeatherCondition
from core.config import Settings

BASE_EPOCH = 1717200000  # 2024-06-01T00:00:00Z
HOUR = 3600


class FakeWeatherClient:
    """Stands in for WeatherProviderClient; records every call."""

    def __init__(self, current=None, forecast=None, history=None, errors=None):
        self.current = current
        self.forecast = forecast
        self.history = history
        self.errors = errors or {}
        self.calls = []

    def _respond(self, name, payload, *args):
        self.calls.append((name,) + args)
        if name in self.errors:
            raise self.errors[name]
        return payload

    def fetch_current(self, lat, lon):
        return self._respond("current", self.current, lat, lon)

    def fetch_forecast(self, lat, lon):
        return self._respond("forecast", self.forecast, lat, lon)

    def fetch_historical(self, lat, lon, start, end):
        return self._respond("historical", self.history, lat, lon, start, end)

    def fetch_historical_count(self, lat, lon, start, count):
        return self._respond("historical_count", self.history, lat, lon, start, count)

    def count(self, name):
        return sum(1 for call in self.calls if call[0] == name)


class FakeMarketService:
    """Stands in for MarketPriceService."""

    def __init__(self, prices=None, error=None):
        self.prices = prices or []
        self.error = error
        self.calls = 0

    async def get_market_prices(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.prices)


def raw_sample(dt=BASE_EPOCH, temp=20.0, humidity=60, pressure=1012, wind=3.0,
               rain=None, window="3h", main="Clear", description="clear sky", icon="01d"):
    """One provider list item in OpenWeatherMap shape."""
    sample = {
        "dt": dt,
        "main": {"temp": temp, "humidity": humidity, "pressure": pressure},
        "wind": {"speed": wind},
        "weather": [{"main": main, "description": description, "icon": icon}],
    }
    if rain is not None:
        sample["rain"] = {window: rain}
    return sample


def forecast_payload(items, name="Ludhiana", lat=30.9, lon=75.85):
    return {"city": {"name": name, "coord": {"lat": lat, "lon": lon}}, "list": items}


def current_payload(temp=20.0, humidity=60, wind=5.0, dt=BASE_EPOCH, name="Ludhiana",
                    lat=30.9, lon=75.85):
    return {
        "coord": {"lat": lat, "lon": lon},
        "name": name,
        "sys": {"country": "IN"},
        "dt": dt,
        "main": {"temp": temp, "feels_like": temp - 1, "humidity": humidity, "pressure": 1010},
        "wind": {"speed": wind, "deg": 180},
        "visibility": 10000,
        "weather": [{"main": "Clear", "description": "clear sky", "icon": "01d"}],
    }


def measurement(temperature=20.0, humidity=60.0, wind_speed=5.0, precipitation=0.0,
                date="2024-06-01", hour=0, pressure=1012.0, main="Clear"):
    return Measurement(
        date=date,
        datetime=f"{date}T{hour:02d}:00:00.000Z",
        temperature=temperature,
        humidity=humidity,
        pressure=pressure,
        windSpeed=wind_speed,
        precipitation=precipitation,
        weather=WeatherCondition(main=main, description=main.lower(), icon="01d"),
    )


def daily(date="2024-06-01", t_min=15.0, t_max=25.0, average=None, precipitation=0.0):
    return DailyAggregate(
        date=date,
        temperature=TemperatureSummary(
            min=t_min,
            max=t_max,
            average=(t_min + t_max) / 2 if average is None else average,
        ),
        humidity=60,
        pressure=1012,
        windSpeed=3.0,
        precipitation=precipitation,
        weather=WeatherCondition(main="Clear", description="clear sky", icon="01d"),
        sampleCount=8,
    )


@pytest.fixture
def settings():
    """Settings with a dummy API key and no background scheduler."""
    return Settings(
        openweather_api_key="test-key",
        market_config={
            "ticker_url": "https://example.test/namticker.aspx",
            "request_timeout": 5,
            "refresh_interval_minutes": 60,
            "snapshot_ttl": 3600,
            "scheduler_enabled": False,
        },
    )


@pytest.fixture
def two_day_forecast():
    """16 three-hourly samples covering 2024-06-01 and 2024-06-02."""
    items = []
    for i in range(16):
        items.append(raw_sample(dt=BASE_EPOCH + i * 3 * HOUR, temp=10.0 + i, humidity=50 + i, wind=4.0))
    return forecast_payload(items)


@pytest.fixture(scope="session")
def fixtures_dir():
    """Get the fixtures directory path."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def ticker_html(fixtures_dir):
    """Saved AGMARKNET ticker page."""
    return (fixtures_dir / "namticker.html").read_text(encoding="utf-8")


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as unit test (no external dependencies)"
    )
