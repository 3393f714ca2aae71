# journal models — entry creation, edits, responses and streak stats
# mirrors the frontend journal entry shape

from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator

from app.models.mood import MoodCounts

JournalMood = Literal["low", "okay", "high", "grateful"]


def _clean_text(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("text must not be blank")
    return v


class JournalCreate(BaseModel):
    """payload for a new journal entry; mood falls back to the text's sentiment"""
    text: str = Field(..., min_length=1, max_length=10000, description="journal entry text")
    mood: Optional[JournalMood] = Field(None, description="mood tag chosen by the user")

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: Optional[str]) -> Optional[str]:
        return _clean_text(v)


class JournalUpdate(BaseModel):
    """partial edit — only the fields sent are changed"""
    text: Optional[str] = Field(None, min_length=1, max_length=10000)
    mood: Optional[JournalMood] = None
    pinned: Optional[bool] = None

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: Optional[str]) -> Optional[str]:
        return _clean_text(v)


class JournalEntryResponse(BaseModel):
    id: str
    text: str
    mood: JournalMood = "okay"
    sentiment: str = "okay"
    pinned: bool = False
    created_at: int = Field(..., alias="createdAt")
    updated_at: int = Field(..., alias="updatedAt")
    word_count: int = Field(0, alias="wordCount")

    model_config = {"populate_by_name": True}


class JournalStats(BaseModel):
    """totals and the night streak for the journal header"""
    total_entries: int = Field(0, alias="totalEntries")
    night_streak: int = Field(0, alias="nightStreak")
    pinned_count: int = Field(0, alias="pinnedCount")
    sentiment_counts: MoodCounts = Field(default_factory=MoodCounts, alias="sentimentCounts")

    model_config = {"populate_by_name": True}
