"""Mood trend aggregation: per-day/week/month buckets and period averages."""

from collections import Counter, defaultdict
from datetime import datetime, timedelta
from typing import Iterable, Optional

import structlog

from db import end_of_day, start_of_day
from mood.models import MoodEntry
from shared_types import TrendPeriod

logger = structlog.get_logger()

DEFAULT_TREND_PERIOD = TrendPeriod.WEEKLY

AVERAGE_PERIODS = {"7d": 7, "30d": 30, "90d": 90, "1y": 365}
DEFAULT_AVERAGE_PERIOD = "7d"


def resolve_trend_period(period: Optional[str]) -> TrendPeriod:
    """Map a period selector to a TrendPeriod; unknown values mean weekly."""
    try:
        return TrendPeriod(period)
    except ValueError:
        return DEFAULT_TREND_PERIOD


def window_start(period: TrendPeriod, now: datetime) -> datetime:
    """Start of the lookback window, aligned to the period's natural boundary.

    daily: 30 days back. weekly: 12 weeks back, Monday. monthly: 12 months
    back, first of the month.
    """
    today = start_of_day(now)
    if period == TrendPeriod.DAILY:
        return today - timedelta(days=30)
    if period == TrendPeriod.MONTHLY:
        return today.replace(year=today.year - 1, day=1)
    back = today - timedelta(weeks=12)
    return back - timedelta(days=back.weekday())


def bucket_key(dt: datetime, period: TrendPeriod) -> str:
    """Sortable bucket key for a datetime."""
    if period == TrendPeriod.DAILY:
        return dt.strftime("%Y-%m-%d")
    if period == TrendPeriod.MONTHLY:
        return dt.strftime("%Y-%m")
    iso_year, iso_week, _ = dt.isocalendar()
    return f"{iso_year}-W{iso_week:02d}"


def summarize_moods(entries: Iterable[MoodEntry]) -> dict:
    """Average score (2dp), count and mood_type distribution."""
    entries = list(entries)
    if not entries:
        return {"average_score": 0, "total_entries": 0, "mood_distribution": {}}
    average = sum(e.mood_score for e in entries) / len(entries)
    return {
        "average_score": round(average, 2),
        "total_entries": len(entries),
        "mood_distribution": dict(Counter(e.mood_type for e in entries)),
    }


def aggregate_trends(entries: Iterable[MoodEntry], period: TrendPeriod) -> list[dict]:
    """Group entries into buckets, ascending by key. Empty buckets are omitted."""
    buckets: dict[str, list[MoodEntry]] = defaultdict(list)
    for entry in entries:
        buckets[bucket_key(datetime.fromisoformat(entry.date), period)].append(entry)

    trends = []
    for key in sorted(buckets):
        summary = summarize_moods(buckets[key])
        trends.append(
            {
                "period": key,
                "average_score": summary["average_score"],
                "entry_count": summary["total_entries"],
                "mood_distribution": summary["mood_distribution"],
            }
        )
    return trends


class MoodTrends:
    """Trend and average queries over a user's stored moods."""

    def __init__(self, mood_storage):
        self.storage = mood_storage

    def get_trends(
        self,
        user_id: str,
        period: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> dict:
        resolved = resolve_trend_period(period)
        now = now or datetime.now()
        entries = self.storage.list_entries(
            user_id, start=window_start(resolved, now), descending=False
        )
        trends = aggregate_trends(entries, resolved)
        logger.debug("trends.aggregated", user_id=user_id, period=resolved, buckets=len(trends))
        return {"period": resolved.value, "trends": trends}

    def get_average(
        self,
        user_id: str,
        period: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> dict:
        """Average mood over a named period, or over [start, end] when both are given."""
        if not (start and end):
            now = now or datetime.now()
            days = AVERAGE_PERIODS.get(period or "", AVERAGE_PERIODS[DEFAULT_AVERAGE_PERIOD])
            start = start_of_day(now - timedelta(days=days))
            end = end_of_day(now)
        entries = self.storage.list_entries(user_id, start=start, end=end)
        return summarize_moods(entries)
