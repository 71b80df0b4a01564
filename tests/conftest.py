"""Shared test fixtures for moodlog."""

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "moodlog.db"


@pytest.fixture
def mood_storage(db_path):
    from mood.storage import MoodStorage

    return MoodStorage(db_path)


@pytest.fixture
def journal_storage(db_path):
    from journal.storage import JournalStorage

    return JournalStorage(db_path)


@pytest.fixture
def now():
    """Fixed mid-day clock so day arithmetic never straddles midnight."""
    return datetime(2024, 3, 15, 12, 0, 0)


@pytest.fixture
def log_moods(mood_storage):
    """Log moods for consecutive days ending at `end`: log_moods(end, ["happy", ...]).

    The first mood lands on the oldest day.
    """

    def _log(end: datetime, mood_types: list[str], user_id: str = "user-1"):
        entries = []
        for offset, mood_type in enumerate(reversed(mood_types)):
            entry, _ = mood_storage.upsert_for_day(
                user_id, mood_type, now=end - timedelta(days=offset)
            )
            entries.append(entry)
        return list(reversed(entries))

    return _log
