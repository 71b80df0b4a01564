"""Shared enums and types for moodlog."""

from enum import StrEnum


class MoodType(StrEnum):
    VERY_SAD = "very_sad"
    SAD = "sad"
    NEUTRAL = "neutral"
    HAPPY = "happy"
    VERY_HAPPY = "very_happy"


class SentimentLabel(StrEnum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class InsightType(StrEnum):
    POSITIVE = "positive"
    CONCERN = "concern"
    IMPROVEMENT = "improvement"
    ACHIEVEMENT = "achievement"


class TrendPeriod(StrEnum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class NotificationType(StrEnum):
    REMINDER = "reminder"
