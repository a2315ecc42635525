import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp

from app.core.errors import UpstreamError, ValidationError
from app.services.weather import REQUEST_TIMEOUT, WeatherClient

logger = logging.getLogger("skycast_server.routing")

ROUTE_BASE_URL = "https://api.openrouteservice.org"
ROUTE_PROFILE = "driving-car"


def format_distance(meters: float) -> str:
    return f"{meters / 1000:.2f} km"


def format_duration(seconds: float) -> str:
    return f"{round(seconds / 60)} minutes"


class RouteClient:
    """Driving directions from OpenRouteService, geocoding place names via OpenWeather."""

    def __init__(
        self,
        api_key: Optional[str],
        geocoder: WeatherClient,
        base_url: str = ROUTE_BASE_URL,
    ):
        self.api_key = api_key
        self.geocoder = geocoder
        self.base_url = base_url

    async def _post_directions(self, coordinates) -> Dict[str, Any]:
        headers = {"Authorization": self.api_key, "Content-Type": "application/json"}
        async with aiohttp.ClientSession(timeout=REQUEST_TIMEOUT) as session:
            async with session.post(
                f"{self.base_url}/v2/directions/{ROUTE_PROFILE}/geojson",
                json={"coordinates": coordinates},
                headers=headers,
            ) as resp:
                if resp.status != 200:
                    body = await resp.text()
                    raise aiohttp.ClientResponseError(
                        resp.request_info,
                        resp.history,
                        status=resp.status,
                        message=body[:200],
                    )
                return await resp.json()

    async def fetch_route(
        self,
        destination: Optional[str],
        source: Optional[str] = None,
        source_lat: Optional[float] = None,
        source_lon: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Returns ``{"coordinates", "distance", "duration", "source", "destination"}``.

        The origin is either explicit coordinates or a place name to geocode.
        """
        if not destination:
            raise ValidationError("destination is required")
        if (source_lat is None or source_lon is None) and not source:
            raise ValidationError(
                "Either source or sourceLat & sourceLon must be provided"
            )
        if not self.geocoder.api_key:
            raise UpstreamError("WEATHER_API_KEY not configured")
        if not self.api_key:
            raise UpstreamError("ROUTE_API_KEY not configured")

        try:
            if source_lat is not None and source_lon is not None:
                source_coords = {"lat": float(source_lat), "lon": float(source_lon)}
            else:
                source_coords = await self.geocoder.geocode(source)
            dest_coords = await self.geocoder.geocode(destination)

            # OpenRouteService expects [lon, lat] pairs
            data = await self._post_directions(
                [
                    [source_coords["lon"], source_coords["lat"]],
                    [dest_coords["lon"], dest_coords["lat"]],
                ]
            )
            route = data["features"][0]
            summary = route["properties"]["summary"]
            return {
                "coordinates": route["geometry"]["coordinates"],
                "distance": format_distance(summary["distance"]),
                "duration": format_duration(summary["duration"]),
                "source": source_coords,
                "destination": dest_coords,
            }
        except (
            aiohttp.ClientError,
            asyncio.TimeoutError,
            KeyError,
            IndexError,
            TypeError,
        ) as e:
            logger.error(f"Route API Error: {e}")
            raise UpstreamError("Failed to calculate route")
