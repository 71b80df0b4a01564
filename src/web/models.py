"""Pydantic request/response schemas for the web API.

Bodies are camelCase on the wire; requests also accept snake_case.
"""

import re
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel

from mood.models import MAX_NOTES_LENGTH, MAX_TAG_LENGTH
from journal.storage import MAX_CONTENT_LENGTH, MAX_TITLE_LENGTH
from shared_types import MoodType

_REMINDER_RE = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")

Tag = Annotated[str, StringConstraints(strip_whitespace=True, max_length=MAX_TAG_LENGTH)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Requests ---


class MoodCreate(CamelModel):
    mood_type: MoodType
    notes: Optional[str] = Field(None, max_length=MAX_NOTES_LENGTH)
    tags: list[Tag] = []


class JournalCreate(CamelModel):
    content: str = Field(..., max_length=MAX_CONTENT_LENGTH)
    title: Optional[str] = Field(None, max_length=MAX_TITLE_LENGTH)
    tags: Optional[list[Tag]] = None
    is_private: bool = True

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Content is required")
        return v


class SentimentRequest(CamelModel):
    text: str = Field(..., max_length=MAX_CONTENT_LENGTH)

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Text is required")
        return v


class ReminderSet(CamelModel):
    time: str

    @field_validator("time")
    @classmethod
    def valid_time(cls, v: str) -> str:
        """HH:MM, 24h. Single-digit hours are zero-padded."""
        match = _REMINDER_RE.match(v.strip())
        if not match:
            raise ValueError("Please provide a valid time in HH:MM format")
        return f"{int(match.group(1)):02d}:{match.group(2)}"


# --- Responses ---


class MoodOut(CamelModel):
    id: str
    mood_type: str
    mood_score: int
    notes: Optional[str] = None
    tags: list[str] = []
    date: str
    created_at: str
    updated_at: str


class LinkedMood(CamelModel):
    id: str
    mood_type: str
    mood_score: int


class SentimentOut(CamelModel):
    score: float
    label: str
    confidence: float


class JournalOut(CamelModel):
    id: str
    title: Optional[str] = None
    content: str
    sentiment: Optional[SentimentOut] = None
    mood: Optional[LinkedMood] = None
    tags: list[str] = []
    is_private: bool = True
    date: str
    created_at: str
    updated_at: str


class JournalSentimentOut(CamelModel):
    sentiment: SentimentOut
    content: str


class MoodAverageOut(CamelModel):
    average_score: float
    total_entries: int
    mood_distribution: dict[str, int]


class TrendBucket(CamelModel):
    period: str
    average_score: float
    entry_count: int
    mood_distribution: dict[str, int]


class TrendsOut(CamelModel):
    period: str
    trends: list[TrendBucket]


class StreaksOut(CamelModel):
    current_streak: int
    longest_streak: int
    current_positive_streak: int
    longest_positive_streak: int
    total_entries: int


class Insight(CamelModel):
    type: str
    title: str
    message: str


class InsightStats(CamelModel):
    mood_entries: int
    journal_entries: int
    average_mood: float
    average_sentiment: float


class InsightsOut(CamelModel):
    period: str
    insights: list[Insight]
    stats: InsightStats


class AnalyzedSentimentOut(CamelModel):
    sentiment: dict
    source: str


class QuotesOut(CamelModel):
    quotes: list
    source: str


class ReminderOut(CamelModel):
    reminder_time: Optional[str] = None


class NotificationOut(CamelModel):
    id: str
    type: str
    title: str
    message: str
    is_read: bool
    created_at: str
