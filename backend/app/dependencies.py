# fastapi dependency injection
# current user from the jwt bearer, plus the mood log, clock, table and time zone

import logging
from datetime import tzinfo
from functools import lru_cache

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.config import settings
from app.services.auth_service import decode_token
from app.services.db import Database, get_db
from app.services.day_utils import resolve_timezone
from app.services.emotion_table import EmotionTable, load_emotion_table
from app.services.mood_engine import Clock, system_clock
from app.services.mood_log import MongoMoodEventRepository, MoodEventRepository
from app.services.stats_publisher import StatsPublisher, mongo_stats_sink

logger = logging.getLogger(__name__)

security = HTTPBearer()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Database = Depends(get_db),
) -> dict:
    """extract and validate the current user from the jwt bearer token"""
    payload = decode_token(credentials.credentials)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    if payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type",
        )

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing subject",
        )

    try:
        user = await db.users.find_one({"_id": ObjectId(user_id)})
    except InvalidId:
        user = None

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    user["id"] = str(user["_id"])
    del user["_id"]
    return user


# mood collaborators

def get_clock() -> Clock:
    return system_clock


@lru_cache
def get_emotion_table() -> EmotionTable:
    return load_emotion_table()


@lru_cache
def get_timezone() -> tzinfo:
    return resolve_timezone(settings.MOOD_TIMEZONE)


async def get_mood_repository(db: Database = Depends(get_db)) -> MoodEventRepository:
    return MongoMoodEventRepository(db, limit=settings.MOOD_LOG_LIMIT)


async def get_stats_publisher(
    db: Database = Depends(get_db),
    repository: MoodEventRepository = Depends(get_mood_repository),
    clock: Clock = Depends(get_clock),
    table: EmotionTable = Depends(get_emotion_table),
    tz: tzinfo = Depends(get_timezone),
) -> StatsPublisher:
    return StatsPublisher(repository, mongo_stats_sink(db), table=table, tz=tz, clock=clock)
