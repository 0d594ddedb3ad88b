"""
Tests for the OpenWeatherMap client, with a fake HTTP transport.
"""

import pytest
import requests

from agents.weather.service import WeatherProviderClient
from core.exceptions import ProviderUnavailableError


class FakeResponse:

    def __init__(self, payload=None, status_code=200, invalid_json=False):
        self.payload = payload
        self.status_code = status_code
        self.invalid_json = invalid_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self.invalid_json:
            raise ValueError("Expecting value")
        return self.payload


class FakeHttp:

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def get(self, url, params=None, timeout=None):
        self.requests.append((url, params, timeout))
        if self.error is not None:
            raise self.error
        return self.response


CONFIG = {
    "base_url": "https://weather.example.test/data/2.5",
    "history_url": "https://history.example.test/history/city",
    "units": "metric",
    "request_timeout": 7,
}


def test_current_request_parameters():
    http = FakeHttp(FakeResponse({"main": {}}))
    client = WeatherProviderClient("key", CONFIG, http=http)

    assert client.fetch_current(30.9, 75.85) == {"main": {}}

    [(url, params, timeout)] = http.requests
    assert url == "https://weather.example.test/data/2.5/weather"
    assert params == {"lat": 30.9, "lon": 75.85, "appid": "key", "units": "metric"}
    assert timeout == 7


def test_history_requests():
    http = FakeHttp(FakeResponse({"list": []}))
    client = WeatherProviderClient("key", CONFIG, http=http)

    client.fetch_historical(30.9, 75.85, 1717200000, 1717372800)
    client.fetch_historical_count(30.9, 75.85, 1717200000, 48)

    (url, ranged, _), (_, counted, _) = http.requests
    assert url == "https://history.example.test/history/city"
    assert ranged["type"] == "hour"
    assert (ranged["start"], ranged["end"]) == (1717200000, 1717372800)
    assert counted["cnt"] == 48


def test_missing_api_key():
    http = FakeHttp(FakeResponse({}))
    client = WeatherProviderClient(None, CONFIG, http=http)

    with pytest.raises(ProviderUnavailableError):
        client.fetch_forecast(30.9, 75.85)
    assert http.requests == []


@pytest.mark.parametrize("http", [
    FakeHttp(error=requests.ConnectionError("refused")),
    FakeHttp(error=requests.Timeout("timed out")),
    FakeHttp(FakeResponse(status_code=401)),
    FakeHttp(FakeResponse(invalid_json=True)),
    FakeHttp(FakeResponse(["not", "an", "object"])),
])
def test_failures_are_provider_unavailable(http):
    client = WeatherProviderClient("key", CONFIG, http=http)

    with pytest.raises(ProviderUnavailableError):
        client.fetch_forecast(30.9, 75.85)


def test_default_transport_is_module_level_get(monkeypatch):
    calls = []

    def fake_get(url, params=None, timeout=None):
        calls.append(url)
        return FakeResponse({"list": []})

    monkeypatch.setattr(requests, "get", fake_get)
    client = WeatherProviderClient("key", CONFIG)

    client.fetch_forecast(30.9, 75.85)
    client.fetch_current(30.9, 75.85)

    assert calls == [
        "https://weather.example.test/data/2.5/forecast",
        "https://weather.example.test/data/2.5/weather",
    ]
