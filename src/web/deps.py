"""Dependency injection for FastAPI routes."""

from functools import lru_cache
from pathlib import Path
from typing import AsyncIterator

from fastapi import Depends

from cli.config import load_config_model
from cli.config_models import AppConfig
from external import QuotesAPIClient, SentimentAPIClient
from journal.storage import JournalStorage
from mood.storage import MoodStorage


@lru_cache
def get_config() -> AppConfig:
    """Load shared config (see cli.config.find_config for locations)."""
    return load_config_model()


def get_db_path() -> Path:
    return get_config().paths.db_path


def get_mood_storage(db_path: Path = Depends(get_db_path)) -> MoodStorage:
    return MoodStorage(db_path)


def get_journal_storage(db_path: Path = Depends(get_db_path)) -> JournalStorage:
    return JournalStorage(db_path)


async def get_sentiment_service() -> AsyncIterator[SentimentAPIClient]:
    """Per-request sentiment API client; closed after the response."""
    ext = get_config().external
    service = SentimentAPIClient(
        ext.sentiment_api_key, url=ext.sentiment_api_url, timeout=ext.timeout
    )
    try:
        yield service
    finally:
        await service.aclose()


async def get_quotes_service() -> AsyncIterator[QuotesAPIClient]:
    ext = get_config().external
    service = QuotesAPIClient(ext.quotes_api_key, url=ext.quotes_api_url, timeout=ext.timeout)
    try:
        yield service
    finally:
        await service.aclose()
