# mood models — emotion events, dashboard stats, and calendar week views
# mirrors the frontend dashboard shapes (camelCase over the wire)

from typing import Literal, Optional
from pydantic import BaseModel, Field

MoodBucket = Literal["low", "okay", "high"]

# 9999-12-30 — keeps day bucketing inside the datetime range
MAX_TIMESTAMP_MS = 253_402_214_400_000


class EmotionEvent(BaseModel):
    """a single emotion-tagged interaction in a user's log"""
    timestamp: int = Field(..., ge=0, le=MAX_TIMESTAMP_MS, description="milliseconds since epoch")
    emotion: str = ""


class EmotionEventCreate(BaseModel):
    """payload for logging a mood event — emotion tag, or free text to classify"""
    emotion: Optional[str] = Field(None, max_length=64, description="emotion tag, e.g. 'sad' or 'hopeful'")
    text: Optional[str] = Field(None, max_length=10000, description="free text used when no tag is given")
    timestamp: Optional[int] = Field(None, ge=0, le=MAX_TIMESTAMP_MS, description="milliseconds since epoch, defaults to now")


class EmotionEventAppendResponse(BaseModel):
    """response after an event is appended to the log"""
    event: EmotionEvent
    log_size: int = Field(..., alias="logSize")

    model_config = {"populate_by_name": True}


class MoodPreviewDay(BaseModel):
    """one day in the trailing 7-day preview chart"""
    date: str
    label: str
    mood: MoodBucket = "okay"
    score: float = 0.0


class DashboardStats(BaseModel):
    """aggregated dashboard summary derived from the emotion event log"""
    weekly_active_days: int = Field(0, alias="weeklyActiveDays")
    streak_days: int = Field(0, alias="streakDays")
    current_mood_label: str = Field("Okay", alias="currentMoodLabel")
    current_mood_description: str = Field("", alias="currentMoodDescription")
    mood_preview_series: list[MoodPreviewDay] = Field(default_factory=list, alias="moodPreviewSeries")

    model_config = {"populate_by_name": True}


class WeekDay(BaseModel):
    """a single mon–sun day in the calendar week view"""
    id: str
    label: str
    date: str
    mood: MoodBucket = "okay"
    score: int = 0
    note: str = ""


class WeekView(BaseModel):
    id: str
    label: str
    range: str = "Mon – Sun"
    days: list[WeekDay] = Field(default_factory=list)


class MoodCounts(BaseModel):
    high: int = 0
    okay: int = 0
    low: int = 0


class WeekSummary(BaseModel):
    """highs and lows for a calendar week, over days that have data"""
    counts: MoodCounts = Field(default_factory=MoodCounts)
    dominant_mood: MoodBucket = Field("okay", alias="dominantMood")
    avg_score: Optional[float] = Field(None, alias="avgScore")
    total: int = 0

    model_config = {"populate_by_name": True}


class WeekResponse(BaseModel):
    week: WeekView
    summary: WeekSummary


class EmotionTableEntry(BaseModel):
    emotion: str
    score: int
    label: str
    description: str


CardMood = Literal["calm", "hopeful", "heavy", "mixed"]


class MoodCard(BaseModel):
    """one reflection card per recent day with events, newest first"""
    date: str
    label: str
    mood: CardMood = "mixed"
    mood_label: str = Field("Mixed / unsure", alias="moodLabel")
    counts: dict[str, int] = Field(default_factory=dict)
    event_count: int = Field(0, alias="eventCount")

    model_config = {"populate_by_name": True}
