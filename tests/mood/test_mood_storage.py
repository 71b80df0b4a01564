"""Tests for MoodEntry and MoodStorage."""

import sqlite3
from datetime import date, datetime, timedelta

import pytest

from mood.models import MoodEntry, mood_score_for
from mood.storage import MoodStorage


class TestMoodEntry:
    @pytest.mark.parametrize(
        "mood_type,score",
        [("very_sad", 1), ("sad", 2), ("neutral", 3), ("happy", 4), ("very_happy", 5)],
    )
    def test_score_mapping(self, mood_type, score):
        assert MoodEntry(user_id="u", mood_type=mood_type).mood_score == score

    def test_unknown_type_scores_neutral(self):
        assert mood_score_for("ecstatic") == 3

    def test_reassigning_type_recomputes_score(self):
        entry = MoodEntry(user_id="u", mood_type="sad")
        entry.mood_type = "very_happy"
        assert entry.mood_score == 5
        assert entry.is_positive

    def test_day_is_date_prefix(self):
        entry = MoodEntry(user_id="u", mood_type="happy", date="2024-03-15T08:30:00")
        assert entry.day == "2024-03-15"


class TestMoodStorage:
    def test_first_submission_creates(self, mood_storage, now):
        entry, created = mood_storage.upsert_for_day("user-1", "happy", notes="ok", now=now)

        assert created is True
        assert entry.mood_score == 4
        assert entry.notes == "ok"
        assert entry.date == now.isoformat()

    def test_same_day_resubmission_updates_in_place(self, mood_storage, now):
        first, _ = mood_storage.upsert_for_day("user-1", "sad", tags=["work"], now=now)
        later = now + timedelta(hours=3)
        second, created = mood_storage.upsert_for_day("user-1", "very_happy", now=later)

        assert created is False
        assert second.id == first.id
        assert second.mood_type == "very_happy"
        assert second.mood_score == 5
        assert second.tags == []
        assert second.date == later.isoformat()
        assert second.created_at == first.created_at
        assert mood_storage.count("user-1") == 1

    def test_next_day_creates_new_entry(self, mood_storage, now):
        mood_storage.upsert_for_day("user-1", "happy", now=now)
        _, created = mood_storage.upsert_for_day("user-1", "happy", now=now + timedelta(days=1))

        assert created is True
        assert mood_storage.count("user-1") == 2

    def test_users_are_isolated(self, mood_storage, now):
        mood_storage.upsert_for_day("user-1", "happy", now=now)
        _, created = mood_storage.upsert_for_day("user-2", "sad", now=now)

        assert created is True
        assert mood_storage.get_for_day("user-1", now.date()).mood_type == "happy"
        assert mood_storage.get_for_day("user-2", now.date()).mood_type == "sad"

    def test_invalid_mood_type_rejected_by_db(self, mood_storage, now):
        with pytest.raises(sqlite3.IntegrityError):
            mood_storage.upsert_for_day("user-1", "ecstatic", now=now)

    def test_get_for_day_missing(self, mood_storage):
        assert mood_storage.get_for_day("user-1", date(2024, 1, 1)) is None

    def test_get_is_owner_scoped(self, mood_storage, now):
        entry, _ = mood_storage.upsert_for_day("user-1", "happy", now=now)

        assert mood_storage.get("user-1", entry.id).id == entry.id
        assert mood_storage.get("user-2", entry.id) is None

    def test_get_many_skips_foreign_and_missing(self, mood_storage, now):
        mine, _ = mood_storage.upsert_for_day("user-1", "happy", now=now)
        theirs, _ = mood_storage.upsert_for_day("user-2", "sad", now=now)

        found = mood_storage.get_many("user-1", [mine.id, theirs.id, "nope", None])

        assert list(found) == [mine.id]

    def test_list_entries_order_and_paging(self, mood_storage, log_moods, now):
        log_moods(now, ["sad", "neutral", "happy", "very_happy"])

        newest_first = mood_storage.list_entries("user-1")
        assert [e.mood_type for e in newest_first] == ["very_happy", "happy", "neutral", "sad"]

        oldest_first = mood_storage.list_entries("user-1", descending=False)
        assert oldest_first[0].mood_type == "sad"

        page_two = mood_storage.list_entries("user-1", limit=2, offset=2)
        assert [e.mood_type for e in page_two] == ["neutral", "sad"]

    def test_range_filter_is_inclusive(self, mood_storage, log_moods, now):
        log_moods(now, ["sad", "neutral", "happy"])
        start = datetime.combine(now.date() - timedelta(days=1), datetime.min.time())
        end = datetime.combine(now.date(), datetime.max.time())

        entries = mood_storage.list_entries("user-1", start=start, end=end)

        assert [e.mood_type for e in entries] == ["happy", "neutral"]
        assert mood_storage.count("user-1", start=start, end=end) == 2

    def test_persists_across_instances(self, db_path, now):
        MoodStorage(db_path).upsert_for_day("user-1", "happy", tags=["gym"], now=now)

        entry = MoodStorage(db_path).get_for_day("user-1", now.date())

        assert entry.tags == ["gym"]
