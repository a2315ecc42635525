import logging
from typing import List

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ValidationError
from app.models.domain import TripCreate, TripUpdate
from app.models.sql import Trip

logger = logging.getLogger("skycast_server.trips")

# Columns that reads validate as non-null; accommodation may be cleared
NON_NULLABLE_FIELDS = {
    "destination",
    "start_date",
    "end_date",
    "itinerary",
    "packing_list",
    "restaurants",
    "events",
}


def _owned_trip(db: Session, user_id: str, trip_id: str) -> Trip:
    # Filtering on both columns keeps "missing" and "someone else's" identical
    trip = (
        db.query(Trip)
        .filter(Trip.id == trip_id, Trip.user_id == user_id)
        .first()
    )
    if not trip:
        logger.warning(f"Trip {trip_id} not found for user {user_id}")
        raise NotFoundError("Trip not found")
    return trip


def create_trip(db: Session, user_id: str, data: TripCreate) -> Trip:
    trip = Trip(user_id=user_id, **data.model_dump())
    db.add(trip)
    db.commit()
    db.refresh(trip)
    logger.info(f"Created trip {trip.id} to {trip.destination} for user {user_id}")
    return trip


def list_trips(db: Session, user_id: str) -> List[Trip]:
    return (
        db.query(Trip)
        .filter(Trip.user_id == user_id)
        .order_by(Trip.created_at.desc())
        .all()
    )


def get_trip(db: Session, user_id: str, trip_id: str) -> Trip:
    return _owned_trip(db, user_id, trip_id)


def update_trip(db: Session, user_id: str, trip_id: str, patch: TripUpdate) -> Trip:
    """Applies only the fields present in ``patch``; last write wins."""
    trip = _owned_trip(db, user_id, trip_id)
    changes = patch.model_dump(exclude_unset=True)
    for field, value in changes.items():
        if value is None and field in NON_NULLABLE_FIELDS:
            raise ValidationError(f"{field} cannot be empty")
    for field, value in changes.items():
        setattr(trip, field, value)
    db.commit()
    db.refresh(trip)
    logger.info(f"Updated trip {trip_id} for user {user_id}")
    return trip


def delete_trip(db: Session, user_id: str, trip_id: str) -> None:
    trip = _owned_trip(db, user_id, trip_id)
    db.delete(trip)
    db.commit()
    logger.info(f"Deleted trip {trip_id} for user {user_id}")
