# tests for the emotion -> score / label table
# unit tests for app/services/emotion_table.py

import json

import pytest
from pydantic import ValidationError

from app.services.emotion_table import (
    DEFAULT_EMOTION_TABLE,
    EmotionSpec,
    EmotionTable,
    load_emotion_table,
    normalize_tag,
)


class TestDefaultTable:

    @pytest.mark.parametrize("tag,score", [
        ("sad", 1), ("low", 2), ("stressed", 2), ("anxious", 2),
        ("okay", 3), ("mixed", 3), ("neutral", 3),
        ("high", 4), ("happy", 4), ("hopeful", 5),
    ])
    def test_known_scores(self, tag, score):
        assert DEFAULT_EMOTION_TABLE.score(tag) == score

    def test_scores_in_range(self):
        assert all(1 <= spec.score <= 5 for spec in DEFAULT_EMOTION_TABLE.emotions.values())

    def test_unknown_tag_default(self):
        assert DEFAULT_EMOTION_TABLE.score("confused") == 3
        assert DEFAULT_EMOTION_TABLE.describe("confused")[0] == "Okay"

    def test_empty_and_none(self):
        assert DEFAULT_EMOTION_TABLE.score(None) == 3
        assert DEFAULT_EMOTION_TABLE.score("") == 3

    def test_describe(self):
        label, description = DEFAULT_EMOTION_TABLE.describe("happy")
        assert label == "High"
        assert description


class TestNormalizeTag:

    def test_trims_and_lowercases(self):
        assert normalize_tag("  SAD ") == "sad"

    def test_falsy(self):
        assert normalize_tag(None) == ""


class TestExtend:

    def test_extend_adds_without_touching_default(self):
        table = DEFAULT_EMOTION_TABLE.extend({"Calm": {"score": 4, "label": "High", "description": "Settled."}})
        assert table.score("calm") == 4
        assert DEFAULT_EMOTION_TABLE.score("calm") == 3

    def test_extend_overrides(self):
        table = DEFAULT_EMOTION_TABLE.extend({"okay": {"score": 2, "label": "Low"}})
        assert table.score("okay") == 2

    def test_extend_rejects_out_of_range(self):
        with pytest.raises(ValidationError):
            DEFAULT_EMOTION_TABLE.extend({"ecstatic": {"score": 9, "label": "High"}})

    def test_spec_is_frozen(self):
        spec = EmotionSpec(score=2, label="Low")
        with pytest.raises(ValidationError):
            spec.score = 5


class TestLoad:

    def test_no_path_returns_default(self):
        assert load_emotion_table("") is DEFAULT_EMOTION_TABLE

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "emotions.json"
        path.write_text(json.dumps({"emotions": {"lonely": {"score": 2, "label": "Low", "description": "Missing people."}}}))
        table = load_emotion_table(str(path))
        assert table.score("lonely") == 2
        assert table.score("happy") == 4

    def test_load_flat_mapping(self, tmp_path):
        path = tmp_path / "emotions.json"
        path.write_text(json.dumps({"grateful": {"score": 5, "label": "High"}}))
        assert load_emotion_table(str(path)).score("grateful") == 5

    def test_top_level_list_rejected(self, tmp_path):
        path = tmp_path / "emotions.json"
        path.write_text(json.dumps([{"tag": "calm", "score": 4}]))
        with pytest.raises(ValueError, match="emotions.json"):
            load_emotion_table(str(path))

    def test_emotions_key_must_hold_a_mapping(self, tmp_path):
        path = tmp_path / "emotions.json"
        path.write_text(json.dumps({"emotions": ["calm"]}))
        with pytest.raises(ValueError):
            load_emotion_table(str(path))


class TestConstructor:

    def test_keys_are_normalized(self):
        table = EmotionTable(emotions={" Calm ": EmotionSpec(score=5, label="High")})
        assert table.score("Calm") == 5
        assert table.score("calm") == 5
        assert "calm" in table.emotions

    def test_constructor_matches_extend(self):
        spec = {"score": 2, "label": "Low"}
        built = EmotionTable(emotions={"Drained": EmotionSpec(**spec)})
        extended = EmotionTable().extend({"Drained": spec})
        assert built.emotions == extended.emotions
