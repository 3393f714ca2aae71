# seed script — creates a demo user with two weeks of mood events and a few journal entries
# run once: python -m app.seed

import asyncio
import logging
import os
import random

from app.config import settings
from app.models.mood import EmotionEvent
from app.services.db import db
from app.services.auth_service import hash_password
from app.services.day_utils import MS_PER_DAY
from app.services.emotion_classifier import classify_text
from app.services.mood_engine import system_clock
from app.services.mood_log import MongoMoodEventRepository
from app.services.stats_publisher import StatsPublisher, mongo_stats_sink

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

# seed password from env
DEFAULT_PASSWORD = os.getenv("SEED_PASSWORD", "emoti-demo-123")
DEMO_EMAIL = "demo@emoti.app"
SEED_DAYS = 14

SAMPLE_EMOTIONS = ["low", "sad", "stressed", "anxious", "okay", "mixed", "neutral", "high", "happy", "hopeful"]

SAMPLE_JOURNALS = [
    "Felt anxious before the meeting but it went fine.",
    "Quiet evening, grateful for a long walk.",
    "Tired and a bit lonely today.",
]


async def seed():
    """create the demo user and a mood log ending today, skips if the user exists"""
    await db.connect()

    existing = await db.users.find_one({"email": DEMO_EMAIL})
    if existing:
        logger.info(f"Demo user already exists: {DEMO_EMAIL} (id: {existing['_id']})")
        await db.close()
        return

    result = await db.users.insert_one({
        "email": DEMO_EMAIL,
        "hashed_password": hash_password(DEFAULT_PASSWORD),
        "name": "Demo User",
        "is_premium": True,
        "avatar_url": None,
        "created_at": "2025-01-01T00:00:00Z",
    })
    user_id = str(result.inserted_id)
    logger.info(f"Created demo user: {DEMO_EMAIL} (id: {user_id})")

    repository = MongoMoodEventRepository(db, limit=settings.MOOD_LOG_LIMIT)
    now = system_clock()
    rng = random.Random(42)
    for offset in range(SEED_DAYS - 1, -1, -1):
        # skip a couple of days so the streak is not the whole history
        if offset in (9, 10):
            continue
        for _ in range(rng.randint(1, 3)):
            ts = now - offset * MS_PER_DAY - rng.randint(0, 6 * 3600 * 1000)
            await repository.append(user_id, EmotionEvent(timestamp=ts, emotion=rng.choice(SAMPLE_EMOTIONS)))

    await StatsPublisher(repository, mongo_stats_sink(db)).publish(user_id)

    # a journal entry for each of the last few nights
    for offset, text in enumerate(SAMPLE_JOURNALS):
        ts = now - offset * MS_PER_DAY
        sentiment = classify_text(text)
        await db.journals.insert_one({
            "journal_id": f"seed{offset:08d}",
            "user_id": user_id,
            "text": text,
            "mood": sentiment,
            "sentiment": sentiment,
            "pinned": offset == 0,
            "word_count": len(text.split()),
            "created_at": ts,
            "updated_at": ts,
        })
    logger.info(f"Seeded {len(SAMPLE_JOURNALS)} journal entries")

    await db.users.create_index("email", unique=True)
    await db.mood_events.create_index("user_id", unique=True)
    await db.dashboard_stats.create_index("user_id", unique=True)
    await db.journals.create_index("journal_id", unique=True)
    await db.journals.create_index([("user_id", 1), ("created_at", -1)])
    logger.info("Created indexes on users, mood_events, dashboard_stats, journals")

    logger.info("Seed complete!")
    await db.close()


if __name__ == "__main__":
    asyncio.run(seed())
