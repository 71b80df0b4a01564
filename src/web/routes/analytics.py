"""Analytics routes: mood trends, streaks, insights."""

import structlog
from fastapi import APIRouter, Depends

from analytics import InsightGenerator, MoodTrends, get_streaks
from journal.storage import JournalStorage
from mood.storage import MoodStorage
from web.auth import get_current_user
from web.deps import get_journal_storage, get_mood_storage
from web.envelope import ok
from web.models import InsightsOut, StreaksOut, TrendsOut

logger = structlog.get_logger()

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("/trends")
async def trends(
    period: str = "weekly",
    user: dict = Depends(get_current_user),
    storage: MoodStorage = Depends(get_mood_storage),
):
    """Mood buckets by day, ISO week, or month. Unknown periods fall back to weekly."""
    return ok(TrendsOut.model_validate(MoodTrends(storage).get_trends(user["id"], period)))


@router.get("/streaks")
async def streaks(
    user: dict = Depends(get_current_user),
    storage: MoodStorage = Depends(get_mood_storage),
):
    return ok(StreaksOut.model_validate(get_streaks(storage, user["id"])))


@router.get("/insights")
async def insights(
    period: str = "30d",
    user: dict = Depends(get_current_user),
    mood_storage: MoodStorage = Depends(get_mood_storage),
    journal_storage: JournalStorage = Depends(get_journal_storage),
):
    result = InsightGenerator(mood_storage, journal_storage).generate(user["id"], period)
    return ok(InsightsOut.model_validate(result))
