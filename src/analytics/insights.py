"""Insights from mood patterns, journal sentiment and tracking consistency."""

from datetime import datetime, timedelta
from typing import Optional, Sequence

import structlog

from db import start_of_day
from journal.storage import JournalEntry
from mood.models import MoodEntry
from shared_types import InsightType

logger = structlog.get_logger()

INSIGHT_PERIODS = {"7d": 7, "30d": 30, "90d": 90}
DEFAULT_INSIGHT_PERIOD = "30d"

HIGH_MOOD = 4
LOW_MOOD = 2
IMPROVING_SLOPE = 0.1
POSITIVE_SENTIMENT = 0.3
CONSISTENT_RATE = 0.8


def resolve_insight_days(period: Optional[str]) -> int:
    """Window length in days; unknown selectors fall back to 30."""
    return INSIGHT_PERIODS.get(period or "", INSIGHT_PERIODS[DEFAULT_INSIGHT_PERIOD])


def calculate_trend(values: Sequence[float]) -> float:
    """Least-squares slope of values against their index (x = 0..n-1).

    Fewer than two values have no slope and return 0.
    """
    n = len(values)
    if n < 2:
        return 0.0
    sum_x = sum(range(n))
    sum_y = sum(values)
    sum_xy = sum(i * v for i, v in enumerate(values))
    sum_xx = sum(i * i for i in range(n))
    return (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)


def _insight(kind: InsightType, title: str, message: str) -> dict:
    return {"type": kind.value, "title": title, "message": message}


def build_insights(
    moods: Sequence[MoodEntry],
    journals: Sequence[JournalEntry],
    days: int,
) -> dict:
    """Insight list plus summary stats for one window.

    Args:
        moods: Mood entries in the window, oldest first.
        journals: Journal entries in the window that carry a sentiment.
        days: Window length, used for the consistency rate.
    """
    insights = []
    average_mood = 0.0
    average_sentiment = 0.0

    if moods:
        scores = [m.mood_score for m in moods]
        average_mood = sum(scores) / len(scores)
        slope = calculate_trend(scores)

        if average_mood >= HIGH_MOOD:
            insights.append(
                _insight(
                    InsightType.POSITIVE,
                    "Great Mood Trend!",
                    f"Your average mood over the last {days} days has been "
                    f"{average_mood:.1f}/5. Keep up the positive energy!",
                )
            )
        if average_mood <= LOW_MOOD:
            insights.append(
                _insight(
                    InsightType.CONCERN,
                    "Mood Support",
                    "Your mood has been lower recently. Consider reaching out to "
                    "friends or engaging in activities you enjoy.",
                )
            )
        if slope > IMPROVING_SLOPE:
            insights.append(
                _insight(
                    InsightType.IMPROVEMENT,
                    "Mood Improving",
                    "Your mood has been trending upward recently. Great progress!",
                )
            )

    scored = [j for j in journals if j.sentiment]
    if scored:
        average_sentiment = sum(j.sentiment["score"] for j in scored) / len(scored)
        if average_sentiment > POSITIVE_SENTIMENT:
            insights.append(
                _insight(
                    InsightType.POSITIVE,
                    "Positive Journaling",
                    "Your journal entries have been quite positive lately. "
                    "Writing seems to be helping your mindset!",
                )
            )

    consistency_rate = len(moods) / days
    if consistency_rate >= CONSISTENT_RATE:
        insights.append(
            _insight(
                InsightType.ACHIEVEMENT,
                "Consistent Tracking",
                "You've been very consistent with mood tracking - "
                f"{round(consistency_rate * 100)}% of days logged!",
            )
        )

    return {
        "period": f"{days} days",
        "insights": insights,
        "stats": {
            "mood_entries": len(moods),
            "journal_entries": len(scored),
            "average_mood": round(average_mood, 2),
            "average_sentiment": round(average_sentiment, 2),
        },
    }


class InsightGenerator:
    """Reads a user's window of moods and scored journals and builds insights."""

    def __init__(self, mood_storage, journal_storage):
        self.moods = mood_storage
        self.journals = journal_storage

    def generate(
        self,
        user_id: str,
        period: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> dict:
        days = resolve_insight_days(period)
        now = now or datetime.now()
        start = start_of_day(now - timedelta(days=days))

        moods = self.moods.list_entries(user_id, start=start, descending=False)
        journals = self.journals.list_entries(
            user_id, start=start, descending=False, with_sentiment=True
        )
        result = build_insights(moods, journals, days)
        logger.info(
            "insights.generated",
            user_id=user_id,
            days=days,
            insights=len(result["insights"]),
        )
        return result
