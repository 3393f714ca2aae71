# date and score helpers shared by the mood engine
# day keys are iso dates in one configured time zone; labels come from the same date

from datetime import date, datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo

MS_PER_DAY = 86_400_000

DAY_IDS = ["mon", "tue", "wed", "thu", "fri", "sat", "sun"]
DAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

# preview buckets — boundaries are exclusive, ties resolve to okay
LOW_THRESHOLD = 2.5
HIGH_THRESHOLD = 3.5


def resolve_timezone(name: str | None) -> tzinfo:
    """map a zone name from settings to a tzinfo, utc when empty"""
    if not name or name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def to_datetime(ts_ms: int, tz: tzinfo = timezone.utc) -> datetime:
    return datetime.fromtimestamp(ts_ms / 1000, tz)


def to_date(ts_ms: int, tz: tzinfo = timezone.utc) -> date:
    return to_datetime(ts_ms, tz).date()


def day_key(ts_ms: int, tz: tzinfo = timezone.utc) -> str:
    """calendar-day key (YYYY-MM-DD); keys sort lexicographically"""
    return to_date(ts_ms, tz).isoformat()


def previous_day_key(key: str) -> str:
    return (date.fromisoformat(key) - timedelta(days=1)).isoformat()


def weekday_label(day: date) -> str:
    return DAY_LABELS[day.weekday()]


def week_start(ts_ms: int, week_offset: int = 0, tz: tzinfo = timezone.utc) -> date:
    """monday of the calendar week containing ts_ms, shifted by week_offset weeks"""
    day = to_date(ts_ms, tz)
    return day - timedelta(days=day.weekday()) + timedelta(weeks=week_offset)


def mean(values) -> float:
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)


def bucket_for_score(score: float) -> str:
    if score < LOW_THRESHOLD:
        return "low"
    if score > HIGH_THRESHOLD:
        return "high"
    return "okay"
