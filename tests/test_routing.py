import asyncio
from unittest.mock import AsyncMock, patch

import aiohttp
import pytest

from app.core.errors import UpstreamError, ValidationError
from app.services.routing import RouteClient, format_distance, format_duration
from app.services.weather import WeatherClient

DIRECTIONS = {
    "features": [
        {
            "geometry": {"coordinates": [[2.35, 48.85], [4.83, 45.76]]},
            "properties": {"summary": {"distance": 465123.0, "duration": 16260.0}},
        }
    ]
}

COORDS = {
    "Paris": {"lat": 48.85, "lon": 2.35},
    "Lyon": {"lat": 45.76, "lon": 4.83},
}


def make_client(route_key="route-key", weather_key="weather-key"):
    return RouteClient(route_key, geocoder=WeatherClient(weather_key))


def test_formatting():
    assert format_distance(12345) == "12.35 km"
    assert format_distance(0) == "0.00 km"
    assert format_duration(1030) == "17 minutes"


def test_fetch_route_by_place_names():
    client = make_client()

    async def fake_geocode(place):
        return COORDS[place]

    post = AsyncMock(return_value=DIRECTIONS)
    with patch.object(WeatherClient, "geocode", new=AsyncMock(side_effect=fake_geocode)), \
            patch.object(RouteClient, "_post_directions", new=post):
        result = asyncio.run(client.fetch_route("Lyon", source="Paris"))

    assert result["distance"] == "465.12 km"
    assert result["duration"] == "271 minutes"
    assert result["source"] == COORDS["Paris"]
    assert result["destination"] == COORDS["Lyon"]
    assert result["coordinates"][0] == [2.35, 48.85]
    # OpenRouteService takes [lon, lat]
    post.assert_called_once_with([[2.35, 48.85], [4.83, 45.76]])


def test_fetch_route_with_source_coordinates_skips_geocoding():
    client = make_client()
    geocode = AsyncMock(return_value=COORDS["Lyon"])

    with patch.object(WeatherClient, "geocode", new=geocode), \
            patch.object(RouteClient, "_post_directions", new=AsyncMock(return_value=DIRECTIONS)):
        result = asyncio.run(
            client.fetch_route("Lyon", source_lat=48.85, source_lon=2.35)
        )

    geocode.assert_called_once_with("Lyon")
    assert result["source"] == {"lat": 48.85, "lon": 2.35}


def test_fetch_route_validation():
    client = make_client()

    with pytest.raises(ValidationError):
        asyncio.run(client.fetch_route(None, source="Paris"))
    with pytest.raises(ValidationError):
        asyncio.run(client.fetch_route("Lyon"))
    with pytest.raises(ValidationError):
        asyncio.run(client.fetch_route("Lyon", source_lat=48.85))


def test_fetch_route_missing_keys():
    with pytest.raises(UpstreamError) as exc:
        asyncio.run(make_client(route_key=None).fetch_route("Lyon", source="Paris"))
    assert exc.value.message == "ROUTE_API_KEY not configured"

    with pytest.raises(UpstreamError) as exc:
        asyncio.run(make_client(weather_key=None).fetch_route("Lyon", source="Paris"))
    assert exc.value.message == "WEATHER_API_KEY not configured"


def test_fetch_route_upstream_failure():
    client = make_client()

    with patch.object(
        WeatherClient, "geocode", new=AsyncMock(side_effect=aiohttp.ClientError("boom"))
    ):
        with pytest.raises(UpstreamError) as exc:
            asyncio.run(client.fetch_route("Lyon", source="Paris"))
    assert exc.value.message == "Failed to calculate route"


def test_route_endpoint(client):
    result = {
        "coordinates": [[2.35, 48.85], [4.83, 45.76]],
        "distance": "465.12 km",
        "duration": "271 minutes",
        "source": COORDS["Paris"],
        "destination": COORDS["Lyon"],
    }
    with patch.object(RouteClient, "fetch_route", new=AsyncMock(return_value=result)) as mock_route:
        response = client.get(
            "/api/route",
            params={"destination": "Lyon", "sourceLat": 48.85, "sourceLon": 2.35},
        )

    assert response.status_code == 200
    assert response.json() == result
    mock_route.assert_called_once_with(
        "Lyon", source=None, source_lat=48.85, source_lon=2.35
    )


def test_route_endpoint_requires_destination(client):
    response = client.get("/api/route", params={"source": "Paris"})
    assert response.status_code == 400
    assert response.json() == {"error": "destination is required"}
