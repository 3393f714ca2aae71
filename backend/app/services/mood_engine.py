# mood aggregation engine — dashboard stats, calendar week views and reflection cards
# pure computation over an in-memory event log: no io, never mutates its input.
# "now" comes from now_ms or an injected clock so results are reproducible.

import math
import time
from collections import Counter, defaultdict
from datetime import date, timedelta, timezone, tzinfo
from typing import Callable, Iterable, Optional

from app.models.mood import (
    DashboardStats,
    EmotionEvent,
    MoodCard,
    MoodCounts,
    MoodPreviewDay,
    WeekDay,
    WeekSummary,
    WeekView,
)
from app.services.day_utils import (
    DAY_IDS,
    DAY_LABELS,
    MS_PER_DAY,
    bucket_for_score,
    day_key,
    mean,
    previous_day_key,
    to_date,
    week_start,
    weekday_label,
)
from app.services.emotion_classifier import CARD_MOOD_LABELS, CARD_MOODS, card_mood, normalize_mood
from app.services.emotion_table import DEFAULT_EMOTION_TABLE, EmotionTable

Clock = Callable[[], int]

PREVIEW_DAYS = 7

# bucket scores used by the calendar week view
BUCKET_SCORES = {"high": 4.5, "okay": 3.0, "low": 2.0}

DAY_NOTES = {
    "high": "Felt comparatively lighter today.",
    "low": "Felt heavier or more emotionally loaded today.",
    "okay": "Mixed / neutral day overall.",
}
EMPTY_DAY_NOTE = "No mood logged this day."

MOOD_CARD_DAYS = 6


def system_clock() -> int:
    """wall-clock time in milliseconds since epoch"""
    return int(time.time() * 1000)


# dashboard stats

def compute_dashboard_stats(
    events: Iterable[EmotionEvent],
    *,
    now_ms: Optional[int] = None,
    clock: Clock = system_clock,
    table: EmotionTable = DEFAULT_EMOTION_TABLE,
    tz: tzinfo = timezone.utc,
) -> DashboardStats:
    """turn an append-ordered emotion log into dashboard stats.

    total for any well-typed input: an empty log gives zero counts, the
    table's default mood, and seven zero-score placeholder days ending today.
    """
    now_ms = clock() if now_ms is None else now_ms
    events = list(events or [])

    day_scores: dict[str, list[int]] = defaultdict(list)
    for event in events:
        day_scores[day_key(event.timestamp, tz)].append(table.score(event.emotion))

    label, description = table.describe(events[-1].emotion if events else None)

    return DashboardStats(
        weeklyActiveDays=weekly_active_days(events, now_ms=now_ms, tz=tz),
        streakDays=streak_days(day_scores.keys()),
        currentMoodLabel=label,
        currentMoodDescription=description,
        moodPreviewSeries=_preview_series(day_scores, now_ms, tz),
    )


def weekly_active_days(events: list[EmotionEvent], *, now_ms: int, tz: tzinfo = timezone.utc) -> int:
    """distinct days with an event in the trailing 7x24h window (not calendar-week aligned)"""
    cutoff = now_ms - (PREVIEW_DAYS - 1) * MS_PER_DAY
    return len({
        day_key(e.timestamp, tz)
        for e in events
        if cutoff <= e.timestamp <= now_ms
    })


def streak_days(keys: Iterable[str]) -> int:
    """consecutive days ending at the most recent day key present"""
    days = set(keys)
    if not days:
        return 0

    streak = 0
    current = max(days)
    while current in days:
        streak += 1
        current = previous_day_key(current)
    return streak


def _preview_series(day_scores: dict[str, list[int]], now_ms: int, tz: tzinfo) -> list[MoodPreviewDay]:
    today = to_date(now_ms, tz)
    series = []
    for offset in range(PREVIEW_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        scores = day_scores.get(day.isoformat(), [])
        if scores:
            score = mean(scores)
            mood = bucket_for_score(score)
        else:
            score, mood = 0.0, "okay"
        series.append(MoodPreviewDay(
            date=day.isoformat(),
            label=weekday_label(day),
            mood=mood,
            score=score,
        ))
    return series


# calendar week view

def _dominant(counts: Counter) -> str:
    """most frequent bucket; ties go to high, then low"""
    high, okay, low = counts["high"], counts["okay"], counts["low"]
    if high >= okay and high >= low:
        return "high"
    if low >= okay and low >= high:
        return "low"
    return "okay"


def _week_meta(week_offset: int) -> tuple[str, str]:
    if week_offset == 0:
        return "this-week", "This week"
    if week_offset == -1:
        return "last-week", "Last week"
    if week_offset < 0:
        return f"week{week_offset}", f"{-week_offset} weeks ago"
    return f"week+{week_offset}", f"In {week_offset} weeks"


def build_week_view(
    events: Iterable[EmotionEvent],
    week_offset: int = 0,
    *,
    now_ms: Optional[int] = None,
    clock: Clock = system_clock,
    tz: tzinfo = timezone.utc,
) -> WeekView:
    """mon–sun view of one calendar week (0 = current, -1 = last week).
    each day takes its dominant bucket and the rounded mean bucket score."""
    now_ms = clock() if now_ms is None else now_ms
    start = week_start(now_ms, week_offset, tz)
    end = start + timedelta(days=7)

    by_day: dict[date, list[str]] = defaultdict(list)
    for event in events or []:
        day = to_date(event.timestamp, tz)
        if start <= day < end:
            by_day[day].append(normalize_mood(event.emotion))

    days = []
    for index, (day_id, label) in enumerate(zip(DAY_IDS, DAY_LABELS)):
        day = start + timedelta(days=index)
        moods = by_day.get(day)
        if not moods:
            days.append(WeekDay(id=day_id, label=label, date=day.isoformat(), note=EMPTY_DAY_NOTE))
            continue

        mood = _dominant(Counter(moods))
        avg_score = mean(BUCKET_SCORES[m] for m in moods)
        days.append(WeekDay(
            id=day_id,
            label=label,
            date=day.isoformat(),
            mood=mood,
            # half-up rounding, 1–5 for the ui
            score=math.floor(avg_score + 0.5),
            note=DAY_NOTES[mood],
        ))

    week_id, week_label = _week_meta(week_offset)
    return WeekView(id=week_id, label=week_label, days=days)


def summarize_week(week: WeekView) -> WeekSummary:
    """bucket counts, dominant mood and average score over days with data"""
    logged = [d for d in week.days if d.score > 0]
    if not logged:
        return WeekSummary()

    counts = Counter(d.mood for d in logged)
    return WeekSummary(
        counts=MoodCounts(high=counts["high"], okay=counts["okay"], low=counts["low"]),
        dominantMood=_dominant(counts),
        avgScore=round(mean(d.score for d in logged), 1),
        total=len(logged),
    )


# reflection cards

def build_mood_cards(
    events: Iterable[EmotionEvent],
    *,
    limit: int = MOOD_CARD_DAYS,
    tz: tzinfo = timezone.utc,
) -> list[MoodCard]:
    """one card per day that has events, newest day first, at most `limit` days.
    the card mood is the most frequent one; ties keep calm, hopeful, heavy, mixed order."""
    by_day: dict[date, Counter] = defaultdict(Counter)
    for event in events or []:
        if not event.emotion:
            continue
        by_day[to_date(event.timestamp, tz)][card_mood(event.emotion)] += 1

    cards = []
    for day in sorted(by_day, reverse=True)[:limit]:
        counts = by_day[day]
        mood = max(CARD_MOODS, key=lambda m: (counts[m], -CARD_MOODS.index(m)))
        cards.append(MoodCard(
            date=day.isoformat(),
            label=weekday_label(day),
            mood=mood,
            moodLabel=CARD_MOOD_LABELS[mood],
            counts={m: counts[m] for m in CARD_MOODS},
            eventCount=sum(counts.values()),
        ))
    return cards
