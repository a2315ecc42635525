import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from app.core.errors import UpstreamError
from app.services.weather import (
    WeatherClient,
    build_forecast,
    get_weather_icon,
    query_history,
    record_observation,
)

CURRENT = {
    "coord": {"lat": 48.85, "lon": 2.35},
    "main": {"temp": 21.6, "feels_like": 20.4, "humidity": 60, "pressure": 1012},
    "wind": {"speed": 3.1},
    "weather": [{"description": "light rain", "icon": "10d"}],
    "name": "Paris",
    "sys": {"country": "FR"},
    "rain": {"1h": 0.4},
}


def forecast_item(when: datetime, temp: float, humidity: int = 50, icon: str = "01d"):
    return {
        "dt": int(when.timestamp()),
        "main": {"temp": temp, "humidity": humidity},
        "weather": [{"description": "clear sky", "icon": icon}],
    }


def test_weather_icon_mapping():
    assert get_weather_icon("01d") == "sun"
    assert get_weather_icon("10n") == "cloud-rain"
    assert get_weather_icon("13d") == "cloud-snow"
    assert get_weather_icon("99x") == "cloud"
    assert get_weather_icon(None) == "cloud"


def test_build_forecast_groups_by_day():
    items = [
        forecast_item(datetime(2025, 6, 2, 0, tzinfo=timezone.utc), 14.2, 40, "02d"),
        forecast_item(datetime(2025, 6, 2, 12, tzinfo=timezone.utc), 22.7, 60, "10d"),
        forecast_item(datetime(2025, 6, 3, 9, tzinfo=timezone.utc), 18.0, 70),
    ]

    forecast = build_forecast(items)

    assert len(forecast) == 2
    first = forecast[0]
    assert first["date"] == "Mon, Jun 2"
    assert first["temp_max"] == 23
    assert first["temp_min"] == 14
    assert first["humidity"] == 50
    # Taken from the first entry of the day
    assert first["icon"] == "cloud-sun"


def test_build_forecast_keeps_seven_days():
    items = [
        forecast_item(datetime(2025, 6, day, 12, tzinfo=timezone.utc), 20)
        for day in range(1, 11)
    ]
    assert len(build_forecast(items)) == 7


def test_fetch_by_location():
    client = WeatherClient("key")

    async def fake_get_json(path, params):
        if path == "/weather":
            return CURRENT
        if path == "/forecast":
            return {
                "list": [forecast_item(datetime(2025, 6, 2, 12, tzinfo=timezone.utc), 20)]
            }
        return {"list": [{"main": {"aqi": 2}}]}

    with patch.object(WeatherClient, "_get_json", new=AsyncMock(side_effect=fake_get_json)):
        result = asyncio.run(client.fetch_current_and_forecast(location="Paris"))

    current = result["current"]
    assert current["temp"] == 22
    assert current["feels_like"] == 20
    assert current["location"] == "Paris, FR"
    assert current["icon"] == "cloud-rain"
    assert current["air_quality"] == 2
    assert current["uv_index"] is None
    assert result["coords"] == {"lat": 48.85, "lon": 2.35}
    assert result["precipitation"] == 0.4
    assert len(result["forecast"]) == 1


def test_air_quality_failure_is_not_fatal():
    client = WeatherClient("key")

    async def fake_get_json(path, params):
        if path == "/air_pollution":
            raise aiohttp.ClientError("not on free tier")
        if path == "/forecast":
            return {"list": []}
        return CURRENT

    with patch.object(WeatherClient, "_get_json", new=AsyncMock(side_effect=fake_get_json)):
        result = asyncio.run(client.fetch_current_and_forecast(lat=48.85, lon=2.35))

    assert result["current"]["air_quality"] is None
    assert result["forecast"] == []


def test_upstream_failure_maps_to_upstream_error():
    client = WeatherClient("key")
    failing = AsyncMock(side_effect=aiohttp.ClientError("404 city not found"))

    with patch.object(WeatherClient, "_get_json", new=failing):
        with pytest.raises(UpstreamError) as exc:
            asyncio.run(client.fetch_current_and_forecast(location="Atlantis"))
    assert exc.value.message == "Location not found"

    with patch.object(WeatherClient, "_get_json", new=failing):
        with pytest.raises(UpstreamError) as exc:
            asyncio.run(client.fetch_current_and_forecast(lat=0, lon=0))
    assert exc.value.message == "Failed to fetch weather data"


def test_missing_api_key():
    with pytest.raises(UpstreamError) as exc:
        asyncio.run(WeatherClient(None).fetch_current_and_forecast(location="Paris"))
    assert exc.value.message == "WEATHER_API_KEY not configured"


def test_record_observation_swallows_errors():
    broken = MagicMock()
    broken.session.side_effect = RuntimeError("database is down")

    # Must not raise
    record_observation(broken, "Paris, FR", 21, "clear sky")


def test_history_filters_by_location(database, db):
    record_observation(database, "Paris, FR", 21, "clear sky")
    record_observation(database, "Rome, IT", 28, "sunny", 0.2)

    assert [h.location for h in query_history(db, location="paris")] == ["Paris, FR"]
    assert len(query_history(db)) == 2


FAKE_RESULT = {
    "current": {
        "temp": 22,
        "feels_like": 20,
        "humidity": 60,
        "wind_speed": 3.1,
        "pressure": 1012,
        "description": "light rain",
        "icon": "cloud-rain",
        "location": "Paris, FR",
        "uv_index": None,
        "air_quality": None,
    },
    "forecast": [],
    "coords": {"lat": 48.85, "lon": 2.35},
    "precipitation": 0.4,
}


def test_weather_endpoint_records_history(client):
    with patch.object(
        WeatherClient,
        "fetch_current_and_forecast",
        new=AsyncMock(return_value=FAKE_RESULT),
    ):
        response = client.get("/api/weather/location", params={"location": "Paris"})

    assert response.status_code == 200
    assert response.json()["current"]["location"] == "Paris, FR"

    history = client.get("/api/weather/history", params={"location": "paris"}).json()
    assert len(history["history"]) == 1
    assert history["history"][0]["temperature"] == 22
    assert history["history"][0]["precipitation"] == 0.4


def test_weather_endpoint_survives_history_failure(client):
    with patch.object(
        WeatherClient,
        "fetch_current_and_forecast",
        new=AsyncMock(return_value=FAKE_RESULT),
    ), patch.object(
        client.app.state.db, "session", side_effect=RuntimeError("disk full")
    ):
        response = client.get("/api/weather/coords", params={"lat": 48.85, "lon": 2.35})

    assert response.status_code == 200
    assert response.json()["coords"] == {"lat": 48.85, "lon": 2.35}


def test_weather_endpoint_validation_and_upstream_errors(client):
    missing = client.get("/api/weather/coords", params={"lat": 1})
    assert missing.status_code == 400
    assert missing.json() == {"error": "lat and lon query params are required"}

    with patch.object(
        WeatherClient,
        "fetch_current_and_forecast",
        new=AsyncMock(side_effect=UpstreamError("Location not found")),
    ):
        response = client.get("/api/weather/location", params={"location": "Atlantis"})
    assert response.status_code == 500
    assert response.json() == {"error": "Location not found"}
