"""Mood entry record and the fixed mood_type -> mood_score mapping."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from shared_types import MoodType

MOOD_SCORES: dict[str, int] = {
    MoodType.VERY_SAD: 1,
    MoodType.SAD: 2,
    MoodType.NEUTRAL: 3,
    MoodType.HAPPY: 4,
    MoodType.VERY_HAPPY: 5,
}

DEFAULT_MOOD_SCORE = 3
POSITIVE_MOOD_SCORE = 4
MAX_NOTES_LENGTH = 500
MAX_TAG_LENGTH = 20


def mood_score_for(mood_type: str) -> int:
    """Score 1-5 for a mood type; unknown types score as neutral."""
    return MOOD_SCORES.get(mood_type, DEFAULT_MOOD_SCORE)


def _now() -> str:
    return datetime.now().isoformat()


@dataclass
class MoodEntry:
    """One user's mood for one calendar day.

    `mood_score` is derived: assigning `mood_type` (in __init__ or later)
    recomputes it.
    """

    user_id: str
    mood_type: str
    notes: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    date: str = field(default_factory=_now)
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    created_at: str = field(default_factory=_now)
    updated_at: str = field(default_factory=_now)
    mood_score: int = field(init=False, default=DEFAULT_MOOD_SCORE)

    def __setattr__(self, name, value):
        super().__setattr__(name, value)
        if name == "mood_type":
            super().__setattr__("mood_score", mood_score_for(value))

    @property
    def day(self) -> str:
        return self.date[:10]

    @property
    def is_positive(self) -> bool:
        return self.mood_score >= POSITIVE_MOOD_SCORE

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "mood_type": self.mood_type,
            "mood_score": self.mood_score,
            "notes": self.notes,
            "tags": list(self.tags),
            "date": self.date,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
