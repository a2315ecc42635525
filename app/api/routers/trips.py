import logging
import re
from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.api.deps import get_current_user_id, get_db
from app.models.domain import (
    MessageResponse,
    TripCreate,
    TripListResponse,
    TripOut,
    TripResponse,
    TripUpdate,
)
from app.services import trips as trip_service
from app.services.calendar import generate_trip_ics

logger = logging.getLogger("skycast_server")

router = APIRouter(prefix="/api/trips", tags=["Trips"])


@router.post("", response_model=TripResponse)
def create_trip(
    body: TripCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    trip = trip_service.create_trip(db, user_id, body)
    return TripResponse(trip=TripOut.model_validate(trip))


@router.get("", response_model=TripListResponse)
def list_trips(
    db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)
):
    trips = trip_service.list_trips(db, user_id)
    return TripListResponse(trips=[TripOut.model_validate(t) for t in trips])


@router.get("/{trip_id}", response_model=TripResponse)
def get_trip(
    trip_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    trip = trip_service.get_trip(db, user_id, trip_id)
    return TripResponse(trip=TripOut.model_validate(trip))


@router.put("/{trip_id}", response_model=TripResponse)
def update_trip(
    trip_id: str,
    body: TripUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    trip = trip_service.update_trip(db, user_id, trip_id, body)
    return TripResponse(trip=TripOut.model_validate(trip))


@router.delete("/{trip_id}", response_model=MessageResponse)
def delete_trip(
    trip_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    trip_service.delete_trip(db, user_id, trip_id)
    return MessageResponse(message="Trip deleted")


@router.get("/{trip_id}/calendar")
def export_calendar(
    trip_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    trip = TripOut.model_validate(trip_service.get_trip(db, user_id, trip_id))
    logger.info(f"Exporting calendar for trip {trip_id}")
    ics_bytes = generate_trip_ics(trip)

    filename = f"Trip_to_{trip.destination.replace(' ', '_')}.ics"
    # Header values must be latin-1; non-ASCII names go in the RFC 5987 parameter
    ascii_name = re.sub(r"[^A-Za-z0-9._-]", "_", filename)
    disposition = f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"
    return Response(
        content=ics_bytes,
        media_type="text/calendar",
        headers={"Content-Disposition": disposition},
    )
