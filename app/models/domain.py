import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts both snake_case and camelCase input; serializes as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------- Auth ----------------


class SignupRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserOut(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: str
    name: str
    email: str


class UserProfile(UserOut):
    created_at: Optional[datetime.datetime] = None


class AuthResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserOut


class MeResponse(BaseModel):
    user: UserProfile


# ---------------- Trips ----------------


class Activity(CamelModel):
    time: Optional[str] = None
    activity: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None


class DayPlan(CamelModel):
    day: Optional[int] = None
    date: Optional[str] = None
    activities: List[Activity] = Field(default_factory=list)


class PackingItem(CamelModel):
    item: str
    packed: bool = False
    category: Optional[str] = None


class Accommodation(CamelModel):
    name: Optional[str] = None
    address: Optional[str] = None
    check_in: Optional[str] = None
    check_out: Optional[str] = None


class Restaurant(CamelModel):
    name: Optional[str] = None
    cuisine: Optional[str] = None
    location: Optional[str] = None


class Event(CamelModel):
    name: Optional[str] = None
    date: Optional[str] = None
    location: Optional[str] = None


class TripCreate(CamelModel):
    destination: str = Field(min_length=1)
    start_date: datetime.date
    end_date: datetime.date
    itinerary: List[DayPlan] = Field(default_factory=list)
    packing_list: List[PackingItem] = Field(default_factory=list)
    accommodation: Optional[Accommodation] = None
    restaurants: List[Restaurant] = Field(default_factory=list)
    events: List[Event] = Field(default_factory=list)


class TripUpdate(CamelModel):
    """Partial update; only the fields sent by the client are applied."""

    destination: Optional[str] = Field(default=None, min_length=1)
    start_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None
    itinerary: Optional[List[DayPlan]] = None
    packing_list: Optional[List[PackingItem]] = None
    accommodation: Optional[Accommodation] = None
    restaurants: Optional[List[Restaurant]] = None
    events: Optional[List[Event]] = None


class TripOut(TripCreate):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: str
    user_id: str
    created_at: datetime.datetime


class TripResponse(BaseModel):
    trip: TripOut


class TripListResponse(BaseModel):
    trips: List[TripOut]


class MessageResponse(BaseModel):
    message: str


# ---------------- Weather ----------------


class Coords(BaseModel):
    lat: float
    lon: float


class CurrentWeather(BaseModel):
    temp: int
    feels_like: int
    humidity: Optional[float] = None
    wind_speed: float = 0
    pressure: Optional[float] = None
    description: str = ""
    icon: str = "cloud"
    location: str
    uv_index: Optional[float] = None
    air_quality: Optional[int] = None


class ForecastDay(BaseModel):
    date: str
    temp_max: int
    temp_min: int
    description: str
    icon: str
    humidity: int


class WeatherResponse(BaseModel):
    current: CurrentWeather
    forecast: List[ForecastDay]
    coords: Coords


class WeatherRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    location: Optional[str] = None
    date: datetime.datetime
    temperature: Optional[float] = None
    conditions: Optional[str] = None
    precipitation: Optional[float] = None


class WeatherHistoryResponse(BaseModel):
    history: List[WeatherRecord]


# ---------------- Route ----------------


class RouteResponse(BaseModel):
    coordinates: List[List[float]]
    distance: str
    duration: str
    source: Coords
    destination: Coords


# ---------------- Assistant ----------------


class WeatherHint(BaseModel):
    temp: Optional[float] = None
    description: Optional[str] = None
    location: Optional[str] = None


class PackingListRequest(CamelModel):
    destination: Optional[str] = None
    start_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None
    weather: Optional[WeatherHint] = None


class WeatherFlags(CamelModel):
    temp: float
    is_rainy: bool
    is_cold: bool
    is_hot: bool


class PackingListResponse(CamelModel):
    packing_list: List[PackingItem]
    weather_info: WeatherFlags


class SuggestRequest(CamelModel):
    destination: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    # Free-text conditions, e.g. "light rain"
    weather: Optional[str] = None


class Suggestion(CamelModel):
    title: str
    description: str
    time: str
    weather_suitability: str


class SuggestResponse(BaseModel):
    suggestions: List[Suggestion]


class ChatContext(BaseModel):
    weather: Optional[WeatherHint] = None


class ChatRequest(BaseModel):
    message: Optional[str] = None
    context: Optional[ChatContext] = None


class ChatResponse(CamelModel):
    response: str
    user_id: Optional[str] = None
