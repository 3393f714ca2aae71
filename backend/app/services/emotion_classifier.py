# keyword emotion helpers
# classify_text is a fallback for entries submitted without a tag;
# normalize_mood folds raw emotion strings into the three dashboard buckets

NEGATIVE_WORDS = ["sad", "anxious", "overwhelmed", "lonely", "tired", "angry", "guilty"]
POSITIVE_WORDS = ["grateful", "happy", "hopeful", "excited", "calm", "peaceful"]

LOW_KEYWORDS = [
    "anxious", "anxiety", "stressed", "stress", "sad", "depressed",
    "low", "heavy", "angry", "lonely", "overwhelmed", "tired",
]
HIGH_KEYWORDS = [
    "high", "positive", "good", "better", "light", "relieved",
    "hopeful", "grateful", "calm", "happy", "peaceful",
]


def classify_text(text: str | None) -> str:
    """net keyword count: <= -1 is low, >= 1 is high, otherwise okay"""
    t = (text or "").lower()
    score = 0
    for word in NEGATIVE_WORDS:
        if word in t:
            score -= 1
    for word in POSITIVE_WORDS:
        if word in t:
            score += 1

    if score <= -1:
        return "low"
    if score >= 1:
        return "high"
    return "okay"


def normalize_mood(raw_emotion) -> str:
    """map a raw emotion string to low / okay / high by keyword containment.
    low keywords win over high ones ('not so happy, tired' reads as low)."""
    if not raw_emotion:
        return "okay"
    e = str(raw_emotion).lower()
    if any(k in e for k in LOW_KEYWORDS):
        return "low"
    if any(k in e for k in HIGH_KEYWORDS):
        return "high"
    return "okay"


# reflection card moods — exact tag match, not containment
CARD_MOODS = ["calm", "hopeful", "heavy", "mixed"]
CARD_MOOD_TAGS = {
    "calm": {"calm", "relaxed", "grounded", "peaceful", "relief"},
    "hopeful": {"hopeful", "optimistic", "motivated", "encouraged", "excited"},
    "heavy": {
        "sad", "low", "down", "depressed", "stressed", "anxious",
        "overwhelmed", "lonely", "angry", "upset", "heavy",
    },
}
CARD_MOOD_LABELS = {
    "calm": "Calm / grounded",
    "hopeful": "Hopeful",
    "heavy": "Heavy / overwhelmed",
    "mixed": "Mixed / unsure",
}


def card_mood(raw_emotion) -> str:
    """calm / hopeful / heavy, anything else is mixed"""
    e = str(raw_emotion or "").strip().lower()
    for mood, tags in CARD_MOOD_TAGS.items():
        if e in tags:
            return mood
    return "mixed"
