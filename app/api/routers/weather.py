from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import get_database, get_db, get_weather_client
from app.core.database import Database
from app.core.errors import ValidationError
from app.models.domain import WeatherHistoryResponse, WeatherRecord, WeatherResponse
from app.services.weather import WeatherClient, query_history, record_observation

router = APIRouter(prefix="/api/weather", tags=["Weather"])


def _respond(result, background_tasks: BackgroundTasks, database: Database):
    current = result["current"]
    # Runs after the response is sent; never affects it
    background_tasks.add_task(
        record_observation,
        database,
        current["location"],
        current["temp"],
        current["description"],
        result["precipitation"],
    )
    return WeatherResponse(
        current=current, forecast=result["forecast"], coords=result["coords"]
    )


@router.get("/coords", response_model=WeatherResponse)
async def weather_by_coords(
    background_tasks: BackgroundTasks,
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    client: WeatherClient = Depends(get_weather_client),
    database: Database = Depends(get_database),
):
    if lat is None or lon is None:
        raise ValidationError("lat and lon query params are required")
    result = await client.fetch_current_and_forecast(lat=lat, lon=lon)
    return _respond(result, background_tasks, database)


@router.get("/location", response_model=WeatherResponse)
async def weather_by_location(
    background_tasks: BackgroundTasks,
    location: Optional[str] = None,
    client: WeatherClient = Depends(get_weather_client),
    database: Database = Depends(get_database),
):
    if not location:
        raise ValidationError("location query param is required")
    result = await client.fetch_current_and_forecast(location=location)
    return _respond(result, background_tasks, database)


@router.get("/history", response_model=WeatherHistoryResponse)
def weather_history(
    location: str = "",
    days: int = Query(default=30, ge=0),
    db: Session = Depends(get_db),
):
    records = query_history(db, location=location, days=days)
    return WeatherHistoryResponse(
        history=[WeatherRecord.model_validate(r) for r in records]
    )
