"""Multi-user SQLite store: users (with reminder time) + notifications."""

import os
import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import structlog

from db import wal_connect

logger = structlog.get_logger()

_DEFAULT_DB_PATH = Path(os.environ.get("MOODLOG_HOME", Path.home() / "moodlog")) / "moodlog.db"


def _get_conn(db_path: Path | None = None) -> sqlite3.Connection:
    return wal_connect(db_path or _DEFAULT_DB_PATH, row_factory=True)


def init_db(db_path: Path | None = None) -> None:
    """Create tables if they don't exist."""
    conn = _get_conn(db_path)
    try:
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                email TEXT,
                name TEXT,
                reminder_time TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            );
            CREATE INDEX IF NOT EXISTS idx_users_reminder ON users(reminder_time);

            CREATE TABLE IF NOT EXISTS notifications (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
                type TEXT NOT NULL,
                title TEXT NOT NULL,
                message TEXT NOT NULL,
                is_read INTEGER NOT NULL DEFAULT 0,
                created_at TIMESTAMP NOT NULL
            );
            CREATE INDEX IF NOT EXISTS idx_notif_user ON notifications(user_id, created_at DESC);
        """)
        conn.commit()
    finally:
        conn.close()


def get_or_create_user(
    user_id: str,
    email: str | None = None,
    name: str | None = None,
    db_path: Path | None = None,
) -> dict[str, Any]:
    """Upsert user on authenticated request. Returns user dict."""
    conn = _get_conn(db_path)
    try:
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        if row:
            if email or name:
                conn.execute(
                    "UPDATE users SET email = COALESCE(?, email), name = COALESCE(?, name) WHERE id = ?",
                    (email, name, user_id),
                )
                conn.commit()
                row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
            return dict(row)
        now = datetime.now(timezone.utc).isoformat()
        conn.execute(
            "INSERT INTO users (id, email, name, created_at) VALUES (?, ?, ?, ?)",
            (user_id, email, name, now),
        )
        conn.commit()
        logger.info("user_store.user_created", user_id=user_id)
        return {
            "id": user_id,
            "email": email,
            "name": name,
            "reminder_time": None,
            "created_at": now,
        }
    finally:
        conn.close()


# --- Reminder time ---


def set_reminder_time(user_id: str, reminder_time: str, db_path: Path | None = None) -> None:
    """Store the daily reminder time ("HH:MM") for a user."""
    conn = _get_conn(db_path)
    try:
        conn.execute("UPDATE users SET reminder_time = ? WHERE id = ?", (reminder_time, user_id))
        conn.commit()
        logger.info("user_store.reminder_set", user_id=user_id, reminder_time=reminder_time)
    finally:
        conn.close()


def get_reminder_time(user_id: str, db_path: Path | None = None) -> str | None:
    conn = _get_conn(db_path)
    try:
        row = conn.execute("SELECT reminder_time FROM users WHERE id = ?", (user_id,)).fetchone()
        return row["reminder_time"] if row else None
    finally:
        conn.close()


def clear_reminder_time(user_id: str, db_path: Path | None = None) -> None:
    conn = _get_conn(db_path)
    try:
        conn.execute("UPDATE users SET reminder_time = NULL WHERE id = ?", (user_id,))
        conn.commit()
    finally:
        conn.close()


def users_with_reminder_at(reminder_time: str, db_path: Path | None = None) -> list[str]:
    """Ids of users whose reminder is set to exactly this "HH:MM"."""
    conn = _get_conn(db_path)
    try:
        rows = conn.execute(
            "SELECT id FROM users WHERE reminder_time = ? ORDER BY id", (reminder_time,)
        ).fetchall()
        return [r["id"] for r in rows]
    finally:
        conn.close()


# --- Notifications ---


def _notification_dict(row: sqlite3.Row) -> dict:
    data = dict(row)
    data["is_read"] = bool(data["is_read"])
    return data


def create_notification(
    user_id: str,
    type: str,
    title: str,
    message: str,
    db_path: Path | None = None,
) -> dict:
    """Insert an unread notification. Returns it."""
    notification = {
        "id": uuid.uuid4().hex[:12],
        "user_id": user_id,
        "type": type,
        "title": title,
        "message": message,
        "is_read": False,
        "created_at": datetime.now().isoformat(),
    }
    conn = _get_conn(db_path)
    try:
        conn.execute(
            "INSERT INTO notifications (id, user_id, type, title, message, is_read, created_at) "
            "VALUES (:id, :user_id, :type, :title, :message, 0, :created_at)",
            notification,
        )
        conn.commit()
    finally:
        conn.close()
    return notification


def list_notifications(
    user_id: str,
    limit: int = 20,
    offset: int = 0,
    unread_only: bool = False,
    db_path: Path | None = None,
) -> list[dict]:
    """Notifications for a user, newest first."""
    query = "SELECT * FROM notifications WHERE user_id = ?"
    if unread_only:
        query += " AND is_read = 0"
    query += " ORDER BY created_at DESC, rowid DESC LIMIT ? OFFSET ?"
    conn = _get_conn(db_path)
    try:
        rows = conn.execute(query, (user_id, limit, offset)).fetchall()
        return [_notification_dict(r) for r in rows]
    finally:
        conn.close()


def count_notifications(
    user_id: str, unread_only: bool = False, db_path: Path | None = None
) -> int:
    query = "SELECT COUNT(*) FROM notifications WHERE user_id = ?"
    if unread_only:
        query += " AND is_read = 0"
    conn = _get_conn(db_path)
    try:
        return conn.execute(query, (user_id,)).fetchone()[0]
    finally:
        conn.close()


def mark_notification_read(
    user_id: str, notification_id: str, db_path: Path | None = None
) -> dict | None:
    """Mark one of the user's notifications read. None if absent or not theirs."""
    conn = _get_conn(db_path)
    try:
        cur = conn.execute(
            "UPDATE notifications SET is_read = 1 WHERE id = ? AND user_id = ?",
            (notification_id, user_id),
        )
        conn.commit()
        if cur.rowcount == 0:
            return None
        row = conn.execute(
            "SELECT * FROM notifications WHERE id = ?", (notification_id,)
        ).fetchone()
        return _notification_dict(row)
    finally:
        conn.close()
