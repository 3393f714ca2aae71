# emotion table — emotion tag -> score and label/description lookup
# configuration data kept out of the aggregation engine; extend via a json file

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.config import settings

logger = logging.getLogger(__name__)


class EmotionSpec(BaseModel):
    """how a single emotion tag scores and reads on the dashboard"""
    score: int = Field(3, ge=1, le=5)
    label: str = "Okay"
    description: str = ""

    model_config = {"frozen": True}


def normalize_tag(tag) -> str:
    """lowercase, trimmed tag; anything falsy becomes an empty string"""
    if not tag:
        return ""
    return str(tag).strip().lower()


class EmotionTable(BaseModel):
    """fixed lookup table; unknown tags resolve to the default spec"""
    emotions: dict[str, EmotionSpec] = Field(default_factory=dict)
    default: EmotionSpec = Field(default_factory=lambda: EmotionSpec(
        score=3,
        label="Okay",
        description="Feeling steady, a bit of everything.",
    ))

    model_config = {"frozen": True}

    @field_validator("emotions")
    @classmethod
    def normalize_keys(cls, v: dict) -> dict:
        return {normalize_tag(tag): spec for tag, spec in v.items()}

    def lookup(self, tag) -> EmotionSpec:
        return self.emotions.get(normalize_tag(tag), self.default)

    def score(self, tag) -> int:
        return self.lookup(tag).score

    def describe(self, tag) -> tuple[str, str]:
        spec = self.lookup(tag)
        return spec.label, spec.description

    def extend(self, overrides: dict) -> "EmotionTable":
        """return a new table with entries added or replaced by `overrides`"""
        merged = dict(self.emotions)
        for tag, raw in overrides.items():
            merged[normalize_tag(tag)] = EmotionSpec.model_validate(raw)
        return EmotionTable(emotions=merged, default=self.default)


DEFAULT_EMOTIONS = {
    "sad": EmotionSpec(score=1, label="Low", description="Carrying something heavy right now."),
    "low": EmotionSpec(score=2, label="Low", description="Energy and mood are running low."),
    "stressed": EmotionSpec(score=2, label="Low", description="A lot on your plate at the moment."),
    "anxious": EmotionSpec(score=2, label="Low", description="Mind racing, hard to settle."),
    "okay": EmotionSpec(score=3, label="Okay", description="Feeling steady, a bit of everything."),
    "mixed": EmotionSpec(score=3, label="Okay", description="Ups and downs in the same day."),
    "neutral": EmotionSpec(score=3, label="Okay", description="Calm and even, nothing pulling hard."),
    "high": EmotionSpec(score=4, label="High", description="Feeling lighter than usual."),
    "happy": EmotionSpec(score=4, label="High", description="Good energy, enjoy it."),
    "hopeful": EmotionSpec(score=5, label="High", description="Looking forward with some light."),
}

DEFAULT_EMOTION_TABLE = EmotionTable(emotions=DEFAULT_EMOTIONS)


def load_emotion_table(path: Optional[str] = None) -> EmotionTable:
    """load the default table, extended by the json file at `path` if given.
    the file maps tags to {score, label, description} objects."""
    path = path if path is not None else settings.EMOTION_TABLE_PATH
    if not path:
        return DEFAULT_EMOTION_TABLE

    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("emotions", data)
    if not isinstance(data, dict):
        raise ValueError(f"Emotion table at {path} must be a json object of tag -> spec")
    table = DEFAULT_EMOTION_TABLE.extend(data)
    logger.info(f"Loaded emotion table from {path}: {len(table.emotions)} tags")
    return table
