# mood event log — per-user, append-only, capped at the most recent N events
# repository interface plus mongodb and in-memory implementations

import logging
from datetime import datetime, timezone
from typing import Protocol

from pydantic import ValidationError
from pymongo import ReturnDocument

from app.config import settings
from app.models.mood import EmotionEvent
from app.services.db import Database

logger = logging.getLogger(__name__)


def truncate_log(events: list, limit: int) -> list:
    """keep the most recent `limit` events in their original order"""
    if limit <= 0:
        return []
    return list(events[-limit:])


class MoodEventRepository(Protocol):
    """storage the dashboard reads from; the engine never talks to it directly"""

    async def get(self, user_id: str) -> list[EmotionEvent]:
        ...

    async def append(self, user_id: str, event: EmotionEvent) -> int:
        """append an event, drop the oldest beyond the limit, return the new size"""
        ...


class InMemoryMoodEventRepository:
    """dict-backed log for tests and local runs"""

    def __init__(self, limit: int = settings.MOOD_LOG_LIMIT):
        self.limit = limit
        self._logs: dict[str, list[EmotionEvent]] = {}

    async def get(self, user_id: str) -> list[EmotionEvent]:
        return list(self._logs.get(user_id, []))

    async def append(self, user_id: str, event: EmotionEvent) -> int:
        log = self._logs.get(user_id, []) + [event]
        self._logs[user_id] = truncate_log(log, self.limit)
        return len(self._logs[user_id])


class MongoMoodEventRepository:
    """one document per user in the mood_events collection: {user_id, events: [...]}.
    appends use $push with $slice so mongo does the truncation atomically."""

    def __init__(self, db: Database, limit: int = settings.MOOD_LOG_LIMIT):
        self.db = db
        self.limit = limit

    async def get(self, user_id: str) -> list[EmotionEvent]:
        doc = await self.db.mood_events.find_one({"user_id": user_id}, {"events": 1})
        if not doc:
            return []

        events = []
        for raw in doc.get("events", []):
            try:
                events.append(EmotionEvent.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"Skipping malformed mood event for {user_id}: {e}")
        return events

    async def append(self, user_id: str, event: EmotionEvent) -> int:
        now = datetime.now(timezone.utc).isoformat()
        doc = await self.db.mood_events.find_one_and_update(
            {"user_id": user_id},
            {
                "$push": {"events": {"$each": [event.model_dump()], "$slice": -self.limit}},
                "$set": {"updated_at": now},
                "$setOnInsert": {"created_at": now},
            },
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        size = len(doc.get("events", [])) if doc else 0
        logger.info(f"Mood event '{event.emotion}' logged for {user_id} ({size} in log)")
        return size
