"""Motivational quotes matched to a mood, from an external API or a built-in set."""

from typing import Optional

import structlog

from external.base import DEFAULT_TIMEOUT, ExternalService
from observability import metrics
from shared_types import MoodType, SentimentLabel

logger = structlog.get_logger().bind(source="quotes_api")

QUOTES_API_URL = "https://api.quotegarden.com/api/v3/quotes"
MAX_QUOTES = 3

SOURCE_EXTERNAL = "external_api"
SOURCE_DEFAULT = "default_collection"

POSITIVE_QUOTES = [
    {"text": "The best way to predict the future is to create it.", "author": "Peter Drucker"},
    {
        "text": "Happiness is not something ready made. It comes from your own actions.",
        "author": "Dalai Lama",
    },
    {
        "text": "Life is 10% what happens to you and 90% how you react to it.",
        "author": "Charles R. Swindoll",
    },
]

MOTIVATIONAL_QUOTES = [
    {"text": "The only way to do great work is to love what you do.", "author": "Steve Jobs"},
    {"text": "Believe you can and you're halfway there.", "author": "Theodore Roosevelt"},
    {
        "text": "It does not matter how slowly you go as long as you do not stop.",
        "author": "Confucius",
    },
]

COMFORTING_QUOTES = [
    {
        "text": "This too shall pass. It might pass like a kidney stone, but it will pass.",
        "author": "Unknown",
    },
    {
        "text": "You are braver than you believe, stronger than you seem, and smarter than you think.",
        "author": "A.A. Milne",
    },
    {
        "text": "Every storm runs out of rain. Every dark night turns into day.",
        "author": "Maya Angelou",
    },
]

_LOW_MOODS = {MoodType.SAD, MoodType.VERY_SAD}
_HIGH_MOODS = {MoodType.HAPPY, MoodType.VERY_HAPPY}


def default_quotes(mood: Optional[str] = None, sentiment: Optional[str] = None) -> list[dict]:
    """Pick the built-in set: uplifting, comforting, or motivational."""
    if mood in _HIGH_MOODS or sentiment == SentimentLabel.POSITIVE:
        return [dict(q) for q in POSITIVE_QUOTES]
    if mood in _LOW_MOODS or sentiment == SentimentLabel.NEGATIVE:
        return [dict(q) for q in COMFORTING_QUOTES]
    return [dict(q) for q in MOTIVATIONAL_QUOTES]


class QuotesAPIClient(ExternalService):
    """GET quotes by category with a bearer token."""

    name = "quotes_api"

    def __init__(
        self,
        api_key: Optional[str],
        url: str = QUOTES_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        super().__init__(api_key, url, timeout)

    async def call(self, mood: Optional[str] = None, **kwargs) -> Optional[list]:
        if not self.is_configured:
            return None
        category = "inspirational" if mood in _LOW_MOODS else "happiness"
        data = await self._request_json(
            "GET", params={"author": "motivational", "category": category}
        )
        if not isinstance(data, dict) or not isinstance(data.get("data"), list) or not data["data"]:
            return None
        return data["data"][:MAX_QUOTES]


async def quotes_for_mood(
    mood: Optional[str] = None,
    sentiment: Optional[str] = None,
    service: Optional[ExternalService] = None,
) -> dict:
    """Quotes for a mood/sentiment.

    Returns:
        {quotes: list, source: "external_api" | "default_collection"}
    """
    if service is not None and service.is_configured:
        quotes = await service.call(mood=mood)
        if quotes is not None:
            return {"quotes": quotes, "source": SOURCE_EXTERNAL}
        logger.info("quotes.fallback", mood=mood)
        metrics.counter("quotes.fallback")
    return {"quotes": default_quotes(mood, sentiment), "source": SOURCE_DEFAULT}
