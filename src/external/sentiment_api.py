"""Sentiment analysis via an external API, falling back to keyword scoring."""

from typing import Optional

import structlog

from external.base import DEFAULT_TIMEOUT, ExternalService
from journal.sentiment import analyze_text_sentiment
from observability import metrics

logger = structlog.get_logger().bind(source="sentiment_api")

SENTIMENT_API_URL = "https://api.sentimentanalysis.com/analyze"

SOURCE_EXTERNAL = "external_api"
SOURCE_BASIC = "basic_analysis"


class SentimentAPIClient(ExternalService):
    """POST {text} with a bearer token; the JSON body is the sentiment."""

    name = "sentiment_api"

    def __init__(
        self,
        api_key: Optional[str],
        url: str = SENTIMENT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        super().__init__(api_key, url, timeout)

    async def call(self, text: str = "", **kwargs) -> Optional[dict]:
        if not self.is_configured:
            return None
        data = await self._request_json("POST", json={"text": text})
        if data is not None and not isinstance(data, dict):
            logger.warning("sentiment.unexpected_body", body_type=type(data).__name__)
            data = None
        return data


async def analyze_sentiment(text: str, service: Optional[ExternalService] = None) -> dict:
    """Score text with the external service when it answers, else locally.

    Returns:
        {sentiment: dict, source: "external_api" | "basic_analysis"}
    """
    if service is not None and service.is_configured:
        result = await service.call(text=text)
        if result is not None:
            return {"sentiment": result, "source": SOURCE_EXTERNAL}
        logger.info("sentiment.fallback")
        metrics.counter("sentiment.fallback")
    return {"sentiment": analyze_text_sentiment(text), "source": SOURCE_BASIC}
