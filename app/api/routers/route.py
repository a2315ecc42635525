from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_route_client
from app.models.domain import RouteResponse
from app.services.routing import RouteClient

router = APIRouter(prefix="/api", tags=["Route"])


@router.get("/route", response_model=RouteResponse)
async def calculate_route(
    destination: Optional[str] = None,
    source: Optional[str] = None,
    source_lat: Optional[float] = Query(default=None, alias="sourceLat"),
    source_lon: Optional[float] = Query(default=None, alias="sourceLon"),
    client: RouteClient = Depends(get_route_client),
):
    return await client.fetch_route(
        destination, source=source, source_lat=source_lat, source_lon=source_lon
    )
