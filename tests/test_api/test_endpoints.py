"""End-to-end tests for the HTTP API."""

from datetime import timedelta

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from payloads import (
    CURRENT_URL, FORECAST_URL, GEO_RESULT, GEOCODE_URL,
    epoch, make_current, make_forecast
)
from weather_by_day import config
from weather_by_day.api.endpoints import get_weather_service
from weather_by_day.config import ConfigurationError
from weather_by_day.main import create_app
from weather_by_day.weather.dates import format_date


@pytest.fixture
def upstream(today_utc):
    with respx.mock(assert_all_called=False) as router:
        router.get(CURRENT_URL, name="current").mock(
            return_value=httpx.Response(200, json=make_current(epoch(today_utc, 15), visibility=None))
        )
        router.get(GEOCODE_URL, name="geocode").mock(
            return_value=httpx.Response(200, json=GEO_RESULT)
        )
        router.get(FORECAST_URL, name="forecast").mock(
            return_value=httpx.Response(200, json=make_forecast(today_utc))
        )
        yield router


@pytest.fixture
def api(settings):
    with TestClient(create_app(settings)) as client:
        yield client


class TestGetWeather:
    def test_tomorrow(self, api, upstream, today_utc):
        response = api.get("/weather", params={"city": "São Paulo", "date": "tomorrow"})

        assert response.status_code == 200
        body = response.json()
        assert body["date"] == format_date(today_utc + timedelta(days=1))
        assert body["city"] == "São Paulo"
        assert body["country"] == "BR"
        assert body["precipitationProbability"] == 73
        assert body["visibility"] == 10.0
        assert set(body["temperature"]) == {"min", "max", "current", "feelsLike"}
        assert body["wind"] == {"speed": 3.6, "direction": 140}
        assert upstream["geocode"].call_count == 1
        assert upstream["forecast"].call_count == 1
        assert not upstream["current"].called

    def test_current_weather_omits_missing_visibility(self, api, upstream):
        response = api.get("/weather", params={"city": "São Paulo"})

        assert response.status_code == 200
        body = response.json()
        assert "visibility" not in body
        assert body["precipitationProbability"] == 0
        assert upstream["current"].call_count == 1

    def test_missing_city(self, api, upstream):
        response = api.get("/weather", params={"date": "tomorrow"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Missing required parameter"
        assert "city" in body["message"]
        assert "code" not in body
        assert not upstream.calls

    def test_past_date(self, api, upstream):
        response = api.get("/weather", params={"city": "São Paulo", "date": "2020-01-01"})

        assert response.status_code == 400
        assert "2020-01-01" in response.json()["message"]
        assert not upstream.calls

    def test_beyond_forecast_window(self, api, upstream, today_utc):
        far = format_date(today_utc + timedelta(days=10))
        response = api.get("/weather", params={"city": "São Paulo", "date": far})

        assert response.status_code == 400
        assert not upstream.calls

    def test_invalid_date(self, api, upstream):
        response = api.get("/weather", params={"city": "São Paulo", "date": "20/10/2026"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid date"
        assert not upstream.calls

    def test_invalid_units(self, api, upstream):
        response = api.get("/weather", params={"city": "São Paulo", "units": "rankine"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid parameter"
        assert not upstream.calls

    def test_upstream_status_passthrough(self, api, upstream):
        upstream["current"].mock(
            return_value=httpx.Response(404, json={"cod": "404", "message": "city not found"})
        )

        response = api.get("/weather", params={"city": "Atlantis"})

        assert response.status_code == 404
        assert response.json() == {
            "error": "Error fetching weather data",
            "message": "city not found",
            "code": 404,
        }

    def test_city_not_found_on_forecast_path(self, api, upstream):
        upstream["geocode"].mock(return_value=httpx.Response(200, json=[]))

        response = api.get("/weather", params={"city": "Atlantis", "date": "tomorrow"})

        assert response.status_code == 500
        assert response.json()["error"] == "City not found"
        assert not upstream["forecast"].called


class TestServiceEndpoints:
    def test_health(self, api):
        response = api.get("/weather/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["service"] == "weather-api"
        assert body["timestamp"].endswith("Z")

    def test_root_descriptor(self, api):
        response = api.get("/")

        assert response.status_code == 200
        endpoints = response.json()["endpoints"]
        assert endpoints["weather"] == "/weather"
        assert endpoints["health"] == "/weather/health"
        assert set(endpoints["documentation"]["queryParams"]) == {"city", "date", "units", "lang"}


class FailingWeatherService:
    async def get_weather_by_day(self, **kwargs):
        raise RuntimeError("forecast store exploded")


class TestUnexpectedErrors:
    def test_structured_500(self, settings):
        app = create_app(settings)
        app.dependency_overrides[get_weather_service] = lambda: FailingWeatherService()

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/weather", params={"city": "São Paulo"})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error", "message": "forecast store exploded"}
        assert "Traceback" not in response.text


def test_missing_api_key_prevents_startup(monkeypatch):
    monkeypatch.setattr(config, "OPENWEATHER_API_KEY", None)

    with pytest.raises(ConfigurationError):
        create_app()
