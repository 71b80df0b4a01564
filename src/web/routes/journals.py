"""Journal routes: submit today's entry, today's entry, history, lazy sentiment."""

from datetime import date
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from db import end_of_day, start_of_day
from journal.sentiment import analyze_journal_sentiment
from journal.storage import JournalEntry, JournalStorage
from mood.storage import MoodStorage
from web.auth import get_current_user
from web.deps import get_journal_storage, get_mood_storage
from web.envelope import ok, paginated
from web.models import JournalCreate, JournalOut, JournalSentimentOut

logger = structlog.get_logger()

router = APIRouter(prefix="/api/journals", tags=["journals"])


def _out(entry: JournalEntry, moods: dict) -> JournalOut:
    data = entry.to_dict()
    mood = moods.get(entry.mood_id) if entry.mood_id else None
    data["mood"] = (
        {"id": mood.id, "mood_type": mood.mood_type, "mood_score": mood.mood_score}
        if mood
        else None
    )
    return JournalOut.model_validate(data)


def _with_moods(user_id: str, entries: list[JournalEntry], mood_storage: MoodStorage) -> list:
    moods = mood_storage.get_many(user_id, [e.mood_id for e in entries if e.mood_id])
    return [_out(e, moods) for e in entries]


@router.post("")
async def submit_journal(
    body: JournalCreate,
    user: dict = Depends(get_current_user),
    storage: JournalStorage = Depends(get_journal_storage),
    mood_storage: MoodStorage = Depends(get_mood_storage),
):
    """Create today's entry (linked to today's mood, if any) or update it in place."""
    todays_mood = mood_storage.get_for_day(user["id"], date.today())
    entry, created = storage.upsert_for_day(
        user["id"],
        body.content,
        title=body.title,
        tags=body.tags,
        is_private=body.is_private,
        mood_id=todays_mood.id if todays_mood else None,
    )
    [out] = _with_moods(user["id"], [entry], mood_storage)
    if created:
        return ok(out, "Journal entry created successfully", status_code=201)
    return ok(out, "Journal entry updated successfully")


@router.get("/daily")
async def daily_journal(
    user: dict = Depends(get_current_user),
    storage: JournalStorage = Depends(get_journal_storage),
    mood_storage: MoodStorage = Depends(get_mood_storage),
):
    entry = storage.get_for_day(user["id"], date.today())
    if not entry:
        return ok(None)
    [out] = _with_moods(user["id"], [entry], mood_storage)
    return ok(out)


@router.get("/history")
async def journal_history(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    limit: int = Query(20, ge=1, le=365),
    page: int = Query(1, ge=1),
    user: dict = Depends(get_current_user),
    storage: JournalStorage = Depends(get_journal_storage),
    mood_storage: MoodStorage = Depends(get_mood_storage),
):
    start = start_of_day(start_date) if start_date else None
    end = end_of_day(end_date) if end_date else None
    entries = storage.list_entries(
        user["id"], start=start, end=end, limit=limit, offset=(page - 1) * limit
    )
    total = storage.count(user["id"], start=start, end=end)
    return paginated(_with_moods(user["id"], entries, mood_storage), total, page, limit)


@router.get("/sentiment/{entry_id}")
async def journal_sentiment(
    entry_id: str,
    user: dict = Depends(get_current_user),
    storage: JournalStorage = Depends(get_journal_storage),
):
    """Cached sentiment for an entry, computed and stored on first request."""
    entry = storage.get(user["id"], entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Journal entry not found")
    if not entry.has_sentiment:
        entry = storage.save_sentiment(
            user["id"], entry_id, analyze_journal_sentiment(entry.content)
        )
        logger.info("journal.sentiment_cached", entry_id=entry_id, label=entry.sentiment["label"])
    return ok(JournalSentimentOut(sentiment=entry.sentiment, content=entry.content))
