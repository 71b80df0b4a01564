"""Tests for daily reminder dispatch."""

from datetime import datetime

import pytest

from observability import metrics
from reminders import send_due_reminders
from web import user_store


@pytest.fixture
def users(db_path):
    user_store.init_db(db_path)
    for uid, hhmm in [("early", "08:00"), ("logged", "08:00"), ("late", "21:00"), ("none", None)]:
        user_store.get_or_create_user(uid, db_path=db_path)
        if hhmm:
            user_store.set_reminder_time(uid, hhmm, db_path=db_path)
    return db_path


def test_sends_to_due_users_without_mood_today(users, mood_storage):
    now = datetime(2024, 3, 15, 8, 0, 30)
    mood_storage.upsert_for_day("logged", "happy", now=now.replace(hour=7))
    metrics.reset()

    sent = send_due_reminders(users, now=now, mood_storage=mood_storage)

    assert [n["user_id"] for n in sent] == ["early"]
    assert sent[0]["type"] == "reminder"
    assert user_store.count_notifications("early", db_path=users) == 1
    assert user_store.count_notifications("logged", db_path=users) == 0
    assert metrics.get_counter("reminders.sent") == 1


def test_yesterdays_mood_does_not_suppress(users, mood_storage):
    mood_storage.upsert_for_day("early", "happy", now=datetime(2024, 3, 14, 8, 0))

    sent = send_due_reminders(users, now=datetime(2024, 3, 15, 8, 0), mood_storage=mood_storage)

    assert {n["user_id"] for n in sent} == {"early", "logged"}


def test_nobody_due(users):
    assert send_due_reminders(users, now=datetime(2024, 3, 15, 12, 0)) == []
