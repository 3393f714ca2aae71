# journal stats — night streak and entry totals
# pure functions over stored entry documents; "now" is passed in

from collections import Counter
from datetime import timezone, tzinfo
from typing import Iterable

from app.models.journal import JournalStats
from app.models.mood import MoodCounts
from app.services.day_utils import day_key, previous_day_key


def night_streak(timestamps: Iterable[int], *, now_ms: int, tz: tzinfo = timezone.utc) -> int:
    """consecutive days with an entry, counting back from today.
    unlike the mood streak this is 0 as soon as today has no entry."""
    days = {day_key(ts, tz) for ts in timestamps}
    key = day_key(now_ms, tz)
    streak = 0
    while key in days:
        streak += 1
        key = previous_day_key(key)
    return streak


def journal_stats(entries: list[dict], *, now_ms: int, tz: tzinfo = timezone.utc) -> JournalStats:
    sentiments = Counter(e.get("sentiment", "okay") for e in entries)
    return JournalStats(
        totalEntries=len(entries),
        nightStreak=night_streak((e["created_at"] for e in entries if "created_at" in e), now_ms=now_ms, tz=tz),
        pinnedCount=sum(1 for e in entries if e.get("pinned")),
        sentimentCounts=MoodCounts(
            high=sentiments["high"],
            okay=sentiments["okay"],
            low=sentiments["low"],
        ),
    )
