from typing import Optional

from fastapi import APIRouter, Depends

from app.api.deps import get_optional_user_id
from app.models.domain import (
    ChatRequest,
    ChatResponse,
    PackingListRequest,
    PackingListResponse,
    SuggestRequest,
    SuggestResponse,
)
from app.services import assistant

router = APIRouter(prefix="/api/ai", tags=["Assistant"])


@router.post("/packing-list", response_model=PackingListResponse)
def packing_list(body: PackingListRequest):
    weather = body.weather
    items, flags = assistant.build_packing_list(
        body.destination,
        body.start_date,
        body.end_date,
        temp=weather.temp if weather else None,
        description=weather.description if weather else None,
    )
    return PackingListResponse(packing_list=items, weather_info=flags)


@router.post("/suggest", response_model=SuggestResponse)
def suggest(body: SuggestRequest):
    return SuggestResponse(
        suggestions=assistant.suggest_activities(body.destination, body.weather)
    )


@router.post("/chat", response_model=ChatResponse)
def chat(body: ChatRequest, user_id: Optional[str] = Depends(get_optional_user_id)):
    weather = body.context.weather if body.context else None
    reply = assistant.chat_reply(
        body.message,
        weather_temp=weather.temp if weather else None,
        weather_location=weather.location if weather else None,
    )
    return ChatResponse(response=reply, user_id=user_id)
