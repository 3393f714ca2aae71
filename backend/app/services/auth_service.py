# auth service — jwt tokens and bcrypt password hashing for emoti accounts

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from app.config import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def _encode(data: dict, token_type: str, lifetime: timedelta) -> str:
    to_encode = data.copy()
    to_encode.update({"exp": datetime.now(timezone.utc) + lifetime, "type": token_type})
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """short-lived token sent as the bearer on every api call"""
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _encode(data, "access", lifetime)


def create_refresh_token(data: dict) -> str:
    return _encode(data, "refresh", timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS))


def create_token_pair(user_id: str) -> dict:
    """access + refresh tokens for a user, keyed the way TokenResponse expects"""
    claims = {"sub": user_id}
    return {
        "accessToken": create_access_token(claims),
        "refreshToken": create_refresh_token(claims),
    }


def decode_token(token: str) -> Optional[dict]:
    """decode and validate a jwt token, returns payload or none"""
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"Token decode failed: {e}")
        return None
