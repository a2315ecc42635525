from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from app.core.config import Settings
from app.core.database import Database
from app.core.errors import AuthError
from app.services.auth import resolve_session
from app.services.routing import RouteClient
from app.services.weather import WeatherClient

# auto_error=False so a missing header maps to our own AuthError message
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.db


def get_db(database: Database = Depends(get_database)):
    db = database.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_current_user_id(
    token: Optional[str] = Depends(oauth2_scheme),
    settings: Settings = Depends(get_settings),
) -> str:
    return resolve_session(token, settings.jwt_secret)


def get_optional_user_id(
    token: Optional[str] = Depends(oauth2_scheme),
    settings: Settings = Depends(get_settings),
) -> Optional[str]:
    """Like get_current_user_id, but callers without a valid token are guests."""
    if not token or token == "guest":
        return None
    try:
        return resolve_session(token, settings.jwt_secret)
    except AuthError:
        return None


def get_weather_client(settings: Settings = Depends(get_settings)) -> WeatherClient:
    return WeatherClient(settings.weather_api_key)


def get_route_client(
    settings: Settings = Depends(get_settings),
    weather: WeatherClient = Depends(get_weather_client),
) -> RouteClient:
    return RouteClient(settings.route_api_key, geocoder=weather)
