import logging
from datetime import timedelta

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_current_user_id, get_db, get_settings
from app.core.config import Settings
from app.models.domain import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    SignupRequest,
    UserOut,
    UserProfile,
)
from app.services import auth as auth_service

logger = logging.getLogger("skycast_server")

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _token_ttl(settings: Settings) -> timedelta:
    return timedelta(minutes=settings.access_token_expire_minutes)


@router.post("/signup", response_model=AuthResponse)
def signup(
    body: SignupRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    token, user = auth_service.register_user(
        db,
        body.name,
        body.email,
        body.password,
        settings.jwt_secret,
        _token_ttl(settings),
    )
    return AuthResponse(token=token, user=UserOut.model_validate(user))


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    token, user = auth_service.authenticate_user(
        db, body.email, body.password, settings.jwt_secret, _token_ttl(settings)
    )
    logger.info(f"User {user.id} logged in")
    return AuthResponse(token=token, user=UserOut.model_validate(user))


@router.get("/me", response_model=MeResponse)
def me(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    user = auth_service.get_user(db, user_id)
    return MeResponse(user=UserProfile.model_validate(user))
