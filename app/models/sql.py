from sqlalchemy import Column, Integer, String, DateTime, Date, Float, ForeignKey, JSON
from sqlalchemy.orm import relationship
from app.core.database import Base
import datetime
import uuid
from datetime import timezone


def _utcnow():
    return datetime.datetime.now(timezone.utc)


def _new_id():
    return uuid.uuid4().hex


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime, default=_utcnow)

    trips = relationship("Trip", back_populates="owner", cascade="all, delete-orphan")


class Trip(Base):
    __tablename__ = "trips"

    id = Column(String(32), primary_key=True, default=_new_id)
    user_id = Column(String(32), ForeignKey("users.id"), index=True, nullable=False)
    destination = Column(String, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    # Nested documents, stored as JSON
    itinerary = Column(JSON, default=list)
    packing_list = Column(JSON, default=list)
    accommodation = Column(JSON, nullable=True)
    restaurants = Column(JSON, default=list)
    events = Column(JSON, default=list)
    created_at = Column(DateTime, default=_utcnow, index=True)

    owner = relationship("User", back_populates="trips")


class WeatherHistory(Base):
    __tablename__ = "weather_history"

    id = Column(Integer, primary_key=True, index=True)
    location = Column(String, index=True)
    date = Column(DateTime, default=_utcnow, index=True)
    temperature = Column(Float)
    conditions = Column(String)
    precipitation = Column(Float, default=0.0)
