# auth router — signup, login, token refresh, and current user

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status

from app.models.user import UserCreate, UserLogin, TokenResponse, RefreshRequest, UserResponse
from app.services.auth_service import hash_password, verify_password, create_token_pair, decode_token
from app.services.db import Database, get_db
from app.dependencies import get_current_user

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


def _doc_to_user(doc: dict) -> UserResponse:
    return UserResponse(
        id=doc.get("id") or str(doc.get("_id", "")),
        email=doc.get("email", ""),
        name=doc.get("name", ""),
        isPremium=doc.get("is_premium", False),
        avatarUrl=doc.get("avatar_url"),
        createdAt=doc.get("created_at", ""),
    )


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def signup(body: UserCreate, db: Database = Depends(get_db)):
    """register a new account and return a token pair"""
    email = body.email.strip().lower()
    if await db.users.find_one({"email": email}):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="An account with this email already exists",
        )

    result = await db.users.insert_one({
        "email": email,
        "hashed_password": hash_password(body.password),
        "name": body.name,
        "is_premium": False,
        "avatar_url": None,
        "created_at": datetime.now(timezone.utc).isoformat(),
    })
    user_id = str(result.inserted_id)
    logger.info(f"Created user {user_id}")
    return TokenResponse(**create_token_pair(user_id))


@router.post("/login", response_model=TokenResponse)
async def login(body: UserLogin, db: Database = Depends(get_db)):
    user = await db.users.find_one({"email": body.email.strip().lower()})
    hashed = user.get("hashed_password") if user else None
    if not hashed or not verify_password(body.password, hashed):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    return TokenResponse(**create_token_pair(str(user["_id"])))


@router.post("/refresh", response_model=TokenResponse)
async def refresh(body: RefreshRequest):
    """exchange a refresh token for a new token pair"""
    payload = decode_token(body.refresh_token)
    if payload is None or payload.get("type") != "refresh" or not payload.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token",
        )
    return TokenResponse(**create_token_pair(payload["sub"]))


@router.get("/me", response_model=UserResponse)
async def me(current_user: dict = Depends(get_current_user)):
    return _doc_to_user(current_user)
