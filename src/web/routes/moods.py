"""Mood entry routes: submit today's mood, today's entry, history, average."""

from datetime import date, datetime
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query

from analytics.trends import MoodTrends
from db import end_of_day, start_of_day
from mood.storage import MoodStorage
from web.auth import get_current_user
from web.deps import get_mood_storage
from web.envelope import ok, paginated
from web.models import MoodAverageOut, MoodCreate, MoodOut

logger = structlog.get_logger()

router = APIRouter(prefix="/api/moods", tags=["moods"])


def _out(entry) -> MoodOut:
    return MoodOut.model_validate(entry.to_dict())


@router.post("")
async def submit_mood(
    body: MoodCreate,
    user: dict = Depends(get_current_user),
    storage: MoodStorage = Depends(get_mood_storage),
):
    """Create today's mood entry, or update it in place if one exists."""
    entry, created = storage.upsert_for_day(
        user["id"], body.mood_type.value, notes=body.notes, tags=body.tags
    )
    if created:
        return ok(_out(entry), "Mood entry created successfully", status_code=201)
    return ok(_out(entry), "Mood entry updated successfully")


@router.get("/daily")
async def daily_mood(
    user: dict = Depends(get_current_user),
    storage: MoodStorage = Depends(get_mood_storage),
):
    entry = storage.get_for_day(user["id"], date.today())
    return ok(_out(entry) if entry else None)


@router.get("/history")
async def mood_history(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    limit: int = Query(30, ge=1, le=365),
    page: int = Query(1, ge=1),
    user: dict = Depends(get_current_user),
    storage: MoodStorage = Depends(get_mood_storage),
):
    """Newest-first mood entries; endDate is inclusive."""
    start = start_of_day(start_date) if start_date else None
    end = end_of_day(end_date) if end_date else None
    entries = storage.list_entries(
        user["id"], start=start, end=end, limit=limit, offset=(page - 1) * limit
    )
    total = storage.count(user["id"], start=start, end=end)
    return paginated([_out(e) for e in entries], total, page, limit)


@router.get("/average")
async def average_mood(
    period: str = "7d",
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    user: dict = Depends(get_current_user),
    storage: MoodStorage = Depends(get_mood_storage),
):
    """Average over a named period, or over startDate..endDate when both are given."""
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    if start_date and end_date:
        start, end = start_of_day(start_date), end_of_day(end_date)
    summary = MoodTrends(storage).get_average(user["id"], period=period, start=start, end=end)
    return ok(MoodAverageOut.model_validate(summary))
