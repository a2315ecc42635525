from fastapi import APIRouter

from app.services import places

router = APIRouter(prefix="/api/places", tags=["Places"])


@router.get("/accommodation")
def list_accommodation(location: str = "Unknown"):
    return {"accommodations": places.accommodations(location)}


@router.get("/restaurants")
def list_restaurants(location: str = "Unknown"):
    return {"restaurants": places.restaurants(location)}


@router.get("/events")
def list_events(location: str = "Unknown", date: str | None = None):
    # date is accepted for API compatibility; listings are not filtered yet
    return {"events": places.events(location)}
