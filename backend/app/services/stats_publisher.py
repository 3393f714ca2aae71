# publish stats — recompute dashboard stats after an append and hand them to a sink
# runs downstream of the request (background task); the engine never depends on it

import logging
from datetime import datetime, timezone, tzinfo
from typing import Awaitable, Callable

from app.models.mood import DashboardStats
from app.services.db import Database
from app.services.emotion_table import DEFAULT_EMOTION_TABLE, EmotionTable
from app.services.mood_engine import Clock, compute_dashboard_stats, system_clock
from app.services.mood_log import MoodEventRepository

logger = logging.getLogger(__name__)

StatsSink = Callable[[str, DashboardStats], Awaitable[None]]


def mongo_stats_sink(db: Database) -> StatsSink:
    """sink that upserts the latest snapshot into the dashboard_stats collection"""

    async def _sink(user_id: str, stats: DashboardStats) -> None:
        await db.dashboard_stats.update_one(
            {"user_id": user_id},
            {"$set": {
                "stats": stats.model_dump(by_alias=True),
                "published_at": datetime.now(timezone.utc).isoformat(),
            }},
            upsert=True,
        )

    return _sink


class StatsPublisher:

    def __init__(
        self,
        repository: MoodEventRepository,
        sink: StatsSink,
        *,
        table: EmotionTable = DEFAULT_EMOTION_TABLE,
        tz: tzinfo = timezone.utc,
        clock: Clock = system_clock,
    ):
        self.repository = repository
        self.sink = sink
        self.table = table
        self.tz = tz
        self.clock = clock

    async def publish(self, user_id: str) -> bool:
        """recompute from the current log snapshot and publish. returns False on failure.
        failures are logged, not raised — the next append publishes again."""
        try:
            events = await self.repository.get(user_id)
            stats = compute_dashboard_stats(events, clock=self.clock, table=self.table, tz=self.tz)
            await self.sink(user_id, stats)
        except Exception as e:
            logger.warning(f"Could not publish dashboard stats for {user_id}: {e}")
            return False

        logger.info(
            f"Dashboard stats published for {user_id}: "
            f"{stats.weekly_active_days} active days, {stats.streak_days} day streak"
        )
        return True
