"""Tests for JournalStorage (SQLite, one entry per user per day)."""

from datetime import timedelta

import pytest

from journal.storage import MAX_CONTENT_LENGTH, JournalStorage


class TestJournalUpsert:
    def test_create(self, journal_storage, now):
        entry, created = journal_storage.upsert_for_day(
            "user-1", "Today was fine", title="Thursday", tags=["work"], now=now
        )

        assert created is True
        assert entry.title == "Thursday"
        assert entry.tags == ["work"]
        assert entry.is_private is True
        assert entry.sentiment is None

    def test_update_keeps_title_and_tags_when_omitted(self, journal_storage, now):
        first, _ = journal_storage.upsert_for_day(
            "user-1", "Morning notes", title="Thursday", tags=["work"], now=now
        )
        second, created = journal_storage.upsert_for_day(
            "user-1", "Evening notes", is_private=False, now=now + timedelta(hours=6)
        )

        assert created is False
        assert second.id == first.id
        assert second.content == "Evening notes"
        assert second.title == "Thursday"
        assert second.tags == ["work"]
        assert second.is_private is False

    def test_update_replaces_title_and_tags_when_given(self, journal_storage, now):
        journal_storage.upsert_for_day("user-1", "a", title="Old", tags=["x"], now=now)
        entry, _ = journal_storage.upsert_for_day("user-1", "b", title="New", tags=[], now=now)

        assert entry.title == "New"
        assert entry.tags == []

    def test_mood_link_only_on_create(self, journal_storage, now):
        journal_storage.upsert_for_day("user-1", "first", mood_id="mood-a", now=now)
        entry, _ = journal_storage.upsert_for_day("user-1", "second", mood_id="mood-b", now=now)

        assert entry.mood_id == "mood-a"

    def test_content_too_long(self, journal_storage, now):
        with pytest.raises(ValueError, match="max length"):
            journal_storage.upsert_for_day("user-1", "x" * (MAX_CONTENT_LENGTH + 1), now=now)

    def test_one_row_per_day(self, journal_storage, now):
        for hour in range(3):
            journal_storage.upsert_for_day("user-1", f"v{hour}", now=now + timedelta(hours=hour))

        assert journal_storage.count("user-1") == 1


class TestJournalSentimentCache:
    def test_save_sentiment(self, journal_storage, now):
        entry, _ = journal_storage.upsert_for_day("user-1", "happy day", now=now)
        sentiment = {"score": 1.0, "label": "positive", "confidence": 1.0}

        stored = journal_storage.save_sentiment("user-1", entry.id, sentiment)

        assert stored.sentiment == sentiment
        assert stored.has_sentiment

    def test_cached_sentiment_never_overwritten(self, journal_storage, now):
        entry, _ = journal_storage.upsert_for_day("user-1", "happy day", now=now)
        journal_storage.save_sentiment(
            "user-1", entry.id, {"score": 1.0, "label": "positive", "confidence": 1.0}
        )

        stored = journal_storage.save_sentiment(
            "user-1", entry.id, {"score": -1.0, "label": "negative", "confidence": 1.0}
        )

        assert stored.sentiment["label"] == "positive"

    def test_save_sentiment_foreign_entry(self, journal_storage, now):
        entry, _ = journal_storage.upsert_for_day("user-1", "happy day", now=now)

        result = journal_storage.save_sentiment(
            "user-2", entry.id, {"score": 1.0, "label": "positive", "confidence": 1.0}
        )

        assert result is None
        assert journal_storage.get("user-1", entry.id).sentiment is None

    def test_list_with_sentiment_only(self, journal_storage, now):
        scored, _ = journal_storage.upsert_for_day("user-1", "good", now=now)
        journal_storage.upsert_for_day("user-1", "plain", now=now - timedelta(days=1))
        journal_storage.save_sentiment(
            "user-1", scored.id, {"score": 1.0, "label": "positive", "confidence": 1.0}
        )

        entries = journal_storage.list_entries("user-1", with_sentiment=True)

        assert [e.id for e in entries] == [scored.id]
        assert journal_storage.count("user-1") == 2


def test_shares_database_with_moods(db_path, mood_storage, now):
    mood_storage.upsert_for_day("user-1", "happy", now=now)
    JournalStorage(db_path).upsert_for_day("user-1", "entry", now=now)

    assert mood_storage.count("user-1") == 1
    assert JournalStorage(db_path).count("user-1") == 1
