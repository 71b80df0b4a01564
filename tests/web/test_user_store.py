"""Tests for the users/notifications store."""

import sqlite3

import pytest

from web import user_store


def test_get_or_create_user(users_db):
    user = user_store.get_or_create_user("u1", email="a@b.c", name="A", db_path=users_db)
    assert user["id"] == "u1"
    assert user["reminder_time"] is None

    again = user_store.get_or_create_user("u1", name="Renamed", db_path=users_db)
    assert again["email"] == "a@b.c"
    assert again["name"] == "Renamed"


def test_reminder_time(users_db):
    user_store.get_or_create_user("u1", db_path=users_db)

    user_store.set_reminder_time("u1", "08:00", db_path=users_db)
    assert user_store.get_reminder_time("u1", db_path=users_db) == "08:00"

    user_store.clear_reminder_time("u1", db_path=users_db)
    assert user_store.get_reminder_time("u1", db_path=users_db) is None


def test_reminder_time_unknown_user(users_db):
    assert user_store.get_reminder_time("ghost", db_path=users_db) is None


def test_users_with_reminder_at(users_db):
    for uid, hhmm in [("u1", "08:00"), ("u2", "08:00"), ("u3", "09:00")]:
        user_store.get_or_create_user(uid, db_path=users_db)
        user_store.set_reminder_time(uid, hhmm, db_path=users_db)

    assert user_store.users_with_reminder_at("08:00", db_path=users_db) == ["u1", "u2"]
    assert user_store.users_with_reminder_at("10:00", db_path=users_db) == []


def test_notification_requires_known_user(users_db):
    with pytest.raises(sqlite3.IntegrityError):
        user_store.create_notification("ghost", "reminder", "t", "m", db_path=users_db)


def test_notifications_newest_first(users_db):
    user_store.get_or_create_user("u1", db_path=users_db)
    a = user_store.create_notification("u1", "reminder", "a", "m", db_path=users_db)
    b = user_store.create_notification("u1", "reminder", "b", "m", db_path=users_db)

    items = user_store.list_notifications("u1", db_path=users_db)

    assert [n["id"] for n in items] == [b["id"], a["id"]]
    assert user_store.count_notifications("u1", db_path=users_db) == 2


def test_mark_notification_read(users_db):
    user_store.get_or_create_user("u1", db_path=users_db)
    n = user_store.create_notification("u1", "reminder", "t", "m", db_path=users_db)

    assert user_store.mark_notification_read("u2", n["id"], db_path=users_db) is None
    read = user_store.mark_notification_read("u1", n["id"], db_path=users_db)

    assert read["is_read"] is True
    assert user_store.list_notifications("u1", unread_only=True, db_path=users_db) == []
