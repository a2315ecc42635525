from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError, InvalidHashError
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt, JWTError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import logging

from app.core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from app.models.sql import User

logger = logging.getLogger("skycast_server.auth")

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 24 * 30  # 30 days

ph = PasswordHasher()


def verify_password(plain_password, hashed_password):
    try:
        ph.verify(hashed_password, plain_password)
        return True
    except (VerifyMismatchError, InvalidHashError):
        return False


def get_password_hash(password):
    return ph.hash(password)


def create_access_token(
    user_id: str, secret_key: str, expires_delta: Optional[timedelta] = None
):
    if expires_delta is None:
        expires_delta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(timezone.utc) + expires_delta
    # The identity reference is the only claim besides expiry
    to_encode = {"sub": user_id, "exp": expire}
    return jwt.encode(to_encode, secret_key, algorithm=ALGORITHM)


def resolve_session(token: Optional[str], secret_key: str) -> str:
    """
    Verifies a bearer token and returns the user id it was issued for.

    Raises AuthError when the token is missing, malformed, tampered with or expired.
    """
    if not token:
        raise AuthError("No token provided")
    try:
        payload = jwt.decode(token, secret_key, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.info(f"Rejected token: {e}")
        raise AuthError("Invalid token")

    user_id = payload.get("sub")
    if not user_id or not isinstance(user_id, str):
        raise AuthError("Invalid token")
    return user_id


def register_user(
    db: Session,
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
    secret_key: str,
    expires_delta: Optional[timedelta] = None,
):
    """Creates a user and returns ``(token, user)``."""
    if not name or not email or not password:
        raise ValidationError("All fields required")

    if db.query(User).filter(User.email == email).first():
        raise ConflictError("Email already registered")

    user = User(name=name, email=email, hashed_password=get_password_hash(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Email already registered")
    db.refresh(user)
    logger.info(f"Registered user {user.id}")

    return create_access_token(user.id, secret_key, expires_delta), user


def authenticate_user(
    db: Session,
    email: Optional[str],
    password: Optional[str],
    secret_key: str,
    expires_delta: Optional[timedelta] = None,
):
    """Checks credentials and returns ``(token, user)``."""
    if not email or not password:
        raise ValidationError("Email and password required")

    user = db.query(User).filter(User.email == email).first()
    # Unknown email and wrong password must look identical to the caller
    if not user or not verify_password(password, user.hashed_password):
        logger.info("Failed login attempt")
        raise AuthError("Invalid credentials")

    return create_access_token(user.id, secret_key, expires_delta), user


def get_user(db: Session, user_id: str) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user
