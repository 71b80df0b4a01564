from .base import DEFAULT_TIMEOUT, ExternalService
from .quotes import QuotesAPIClient, default_quotes, quotes_for_mood
from .sentiment_api import SentimentAPIClient, analyze_sentiment

__all__ = [
    "DEFAULT_TIMEOUT",
    "ExternalService",
    "QuotesAPIClient",
    "SentimentAPIClient",
    "analyze_sentiment",
    "default_quotes",
    "quotes_for_mood",
]
