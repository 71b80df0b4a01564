"""Routes backed by third-party services, with local fallbacks."""

from typing import Optional

from fastapi import APIRouter, Depends

from external import QuotesAPIClient, SentimentAPIClient, analyze_sentiment, quotes_for_mood
from web.auth import get_current_user
from web.deps import get_quotes_service, get_sentiment_service
from web.envelope import ok
from web.models import AnalyzedSentimentOut, QuotesOut, SentimentRequest

router = APIRouter(prefix="/api", tags=["external"])


@router.post("/sentiment/analyze")
async def analyze(
    body: SentimentRequest,
    user: dict = Depends(get_current_user),
    service: SentimentAPIClient = Depends(get_sentiment_service),
):
    result = await analyze_sentiment(body.text, service)
    return ok(AnalyzedSentimentOut.model_validate(result))


@router.get("/quotes/mood")
async def quotes(
    mood: Optional[str] = None,
    sentiment: Optional[str] = None,
    user: dict = Depends(get_current_user),
    service: QuotesAPIClient = Depends(get_quotes_service),
):
    result = await quotes_for_mood(mood, sentiment, service)
    return ok(QuotesOut.model_validate(result))
