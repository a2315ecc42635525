import asyncio
import logging
from collections import OrderedDict
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import aiohttp
from sqlalchemy.orm import Session

from app.core.database import Database
from app.core.errors import UpstreamError
from app.models.sql import WeatherHistory

logger = logging.getLogger("skycast_server.weather")

WEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"
REQUEST_TIMEOUT = aiohttp.ClientTimeout(total=15)
FORECAST_DAYS = 7
HISTORY_LIMIT = 100

# First two chars of an OpenWeather icon code (e.g. "01d", "10n") -> UI icon name
ICON_MAP = {
    "01": "sun",
    "02": "cloud-sun",
    "03": "cloud",
    "04": "cloud",
    "09": "cloud-rain",
    "10": "cloud-rain",
    "11": "cloud-lightning",
    "13": "cloud-snow",
    "50": "cloud-fog",
}


def get_weather_icon(icon: Optional[str] = "") -> str:
    return ICON_MAP.get((icon or "")[:2], "cloud")


def _first_condition(item: Dict[str, Any]) -> Dict[str, Any]:
    conditions = item.get("weather") or [{}]
    return conditions[0] or {}


def build_current(
    data: Dict[str, Any], fallback_name: str = "Unknown", air_quality: Optional[int] = None
) -> Dict[str, Any]:
    """Reshapes an OpenWeather /weather payload into the `current` block."""
    main = data["main"]
    condition = _first_condition(data)
    return {
        "temp": round(main["temp"]),
        "feels_like": round(main["feels_like"]),
        "humidity": main.get("humidity"),
        "wind_speed": (data.get("wind") or {}).get("speed") or 0,
        "pressure": main.get("pressure"),
        "description": condition.get("description", ""),
        "icon": get_weather_icon(condition.get("icon", "")),
        "location": f"{data.get('name') or fallback_name}, {(data.get('sys') or {}).get('country', '')}",
        # Not available on the free tier
        "uv_index": None,
        "air_quality": air_quality,
    }


def build_forecast(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Groups 3-hourly forecast entries per calendar day (UTC) and keeps the first
    FORECAST_DAYS days. Description and icon come from the first entry of each
    day; humidity is averaged.
    """
    daily: "OrderedDict[Any, Dict[str, Any]]" = OrderedDict()
    for item in items:
        day = datetime.fromtimestamp(item["dt"], tz=timezone.utc).date()
        if day not in daily:
            condition = _first_condition(item)
            daily[day] = {
                "temps": [],
                "humidity": [],
                "description": condition.get("description", ""),
                "icon": get_weather_icon(condition.get("icon", "")),
            }
        daily[day]["temps"].append(item["main"]["temp"])
        daily[day]["humidity"].append(item["main"].get("humidity", 0))

    forecast = []
    for day, data in list(daily.items())[:FORECAST_DAYS]:
        forecast.append(
            {
                "date": f"{day:%a}, {day:%b} {day.day}",
                "temp_max": round(max(data["temps"])),
                "temp_min": round(min(data["temps"])),
                "description": data["description"],
                "icon": data["icon"],
                "humidity": round(sum(data["humidity"]) / len(data["humidity"])),
            }
        )
    return forecast


class WeatherClient:
    """
    Thin async wrapper around the OpenWeatherMap API.

    Also used for geocoding place names by the route service.
    """

    def __init__(self, api_key: Optional[str], base_url: str = WEATHER_BASE_URL):
        self.api_key = api_key
        self.base_url = base_url

    def _require_key(self):
        if not self.api_key:
            raise UpstreamError("WEATHER_API_KEY not configured")

    async def _get_json(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        query = {**params, "appid": self.api_key}
        async with aiohttp.ClientSession(timeout=REQUEST_TIMEOUT) as session:
            async with session.get(f"{self.base_url}{path}", params=query) as resp:
                if resp.status != 200:
                    body = await resp.text()
                    raise aiohttp.ClientResponseError(
                        resp.request_info,
                        resp.history,
                        status=resp.status,
                        message=body[:200],
                    )
                return await resp.json()

    async def _air_quality(self, lat: float, lon: float) -> Optional[int]:
        # Not critical, and may fail on the free tier
        try:
            data = await self._get_json("/air_pollution", {"lat": lat, "lon": lon})
            return data["list"][0]["main"]["aqi"]
        except Exception as e:
            logger.info(f"Air quality unavailable for {lat},{lon}: {e}")
            return None

    async def geocode(self, place: str) -> Dict[str, float]:
        """Resolves a place name to ``{"lat", "lon"}``."""
        self._require_key()
        data = await self._get_json("/weather", {"q": place})
        return {"lat": data["coord"]["lat"], "lon": data["coord"]["lon"]}

    async def fetch_current_and_forecast(
        self,
        location: Optional[str] = None,
        lat: Optional[float] = None,
        lon: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Returns ``{"current", "forecast", "coords", "precipitation"}`` for either
        a place name or a coordinate pair. ``precipitation`` is the last hour's
        rain in mm and is only used for the history record.
        """
        self._require_key()
        error_message = "Location not found" if location else "Failed to fetch weather data"
        try:
            if location:
                current_data = await self._get_json(
                    "/weather", {"q": location, "units": "metric"}
                )
                lat = current_data["coord"]["lat"]
                lon = current_data["coord"]["lon"]
            else:
                current_data = await self._get_json(
                    "/weather", {"lat": lat, "lon": lon, "units": "metric"}
                )
            forecast_data = await self._get_json(
                "/forecast", {"lat": lat, "lon": lon, "units": "metric"}
            )
            air_quality = await self._air_quality(lat, lon)

            current = build_current(
                current_data, fallback_name=location or "Unknown", air_quality=air_quality
            )
            forecast = build_forecast(forecast_data.get("list", []))
        except (aiohttp.ClientError, asyncio.TimeoutError, KeyError, TypeError, ValueError) as e:
            logger.error(f"Weather API Error: {e}")
            raise UpstreamError(error_message)

        return {
            "current": current,
            "forecast": forecast,
            "coords": {"lat": lat, "lon": lon},
            "precipitation": (current_data.get("rain") or {}).get("1h", 0),
        }


def record_observation(
    database: Database,
    location: str,
    temperature: float,
    conditions: str,
    precipitation: float = 0,
) -> None:
    """
    Appends a WeatherHistory row. Runs as a background task: failures are
    logged and never reach the caller.
    """
    try:
        with database.session() as db:
            db.add(
                WeatherHistory(
                    location=location,
                    date=datetime.now(timezone.utc),
                    temperature=temperature,
                    conditions=conditions,
                    precipitation=precipitation or 0,
                )
            )
            db.commit()
    except Exception as e:
        logger.warning(f"WeatherHistory save failed: {e}")


def query_history(db: Session, location: str = "", days: int = 30) -> List[WeatherHistory]:
    since = datetime.now(timezone.utc) - timedelta(days=days)
    query = db.query(WeatherHistory).filter(WeatherHistory.date >= since)
    if location:
        query = query.filter(WeatherHistory.location.ilike(f"%{location}%"))
    return query.order_by(WeatherHistory.date.desc()).limit(HISTORY_LIMIT).all()
