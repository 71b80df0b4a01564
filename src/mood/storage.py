"""SQLite persistence for mood entries: one row per (user, calendar day)."""

import json
import sqlite3
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import Path
from typing import Iterator, Optional

import structlog

from db import wal_connect
from mood.models import MoodEntry

logger = structlog.get_logger()


class MoodStorage:
    """Mood entries in SQLite.

    The per-day invariant is a UNIQUE(user_id, day) constraint; submissions
    go through a single INSERT ... ON CONFLICT DO UPDATE, so two concurrent
    same-day submissions end up as one row (last write wins).
    """

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path).expanduser()
        self._init_tables()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = wal_connect(self.db_path)
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def _init_tables(self):
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS moods (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    day TEXT NOT NULL,
                    mood_type TEXT NOT NULL CHECK(mood_type IN (
                        'very_sad','sad','neutral','happy','very_happy'
                    )),
                    mood_score INTEGER NOT NULL CHECK(mood_score BETWEEN 1 AND 5),
                    notes TEXT,
                    tags TEXT DEFAULT '[]',
                    date TIMESTAMP NOT NULL,
                    created_at TIMESTAMP NOT NULL,
                    updated_at TIMESTAMP NOT NULL,
                    UNIQUE (user_id, day)
                )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_mood_user_date ON moods(user_id, date DESC)")

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> MoodEntry:
        return MoodEntry(
            id=row["id"],
            user_id=row["user_id"],
            mood_type=row["mood_type"],
            notes=row["notes"],
            tags=json.loads(row["tags"] or "[]"),
            date=row["date"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def upsert_for_day(
        self,
        user_id: str,
        mood_type: str,
        notes: Optional[str] = None,
        tags: Optional[list[str]] = None,
        now: Optional[datetime] = None,
    ) -> tuple[MoodEntry, bool]:
        """Create today's entry or update it in place.

        On update, type/notes/tags are replaced and `date` moves to `now`.

        Returns:
            (stored entry, created) where created is False for an update.
        """
        now = now or datetime.now()
        stamp = now.isoformat()
        entry = MoodEntry(
            user_id=user_id,
            mood_type=mood_type,
            notes=notes,
            tags=tags or [],
            date=stamp,
            created_at=stamp,
            updated_at=stamp,
        )
        with self._connect() as conn:
            row = conn.execute(
                """INSERT INTO moods
                (id, user_id, day, mood_type, mood_score, notes, tags, date, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT (user_id, day) DO UPDATE SET
                    mood_type = excluded.mood_type,
                    mood_score = excluded.mood_score,
                    notes = excluded.notes,
                    tags = excluded.tags,
                    date = excluded.date,
                    updated_at = excluded.updated_at
                RETURNING *""",
                (
                    entry.id,
                    user_id,
                    now.date().isoformat(),
                    entry.mood_type,
                    entry.mood_score,
                    entry.notes,
                    json.dumps(entry.tags),
                    entry.date,
                    entry.created_at,
                    entry.updated_at,
                ),
            ).fetchone()

        stored = self._row_to_entry(row)
        created = stored.id == entry.id
        logger.info(
            "mood.created" if created else "mood.updated",
            user_id=user_id,
            mood_type=stored.mood_type,
        )
        return stored, created

    def get_for_day(self, user_id: str, day: date) -> Optional[MoodEntry]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM moods WHERE user_id = ? AND day = ?",
                (user_id, day.isoformat()),
            ).fetchone()
        return self._row_to_entry(row) if row else None

    def get(self, user_id: str, entry_id: str) -> Optional[MoodEntry]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM moods WHERE id = ? AND user_id = ?",
                (entry_id, user_id),
            ).fetchone()
        return self._row_to_entry(row) if row else None

    def get_many(self, user_id: str, entry_ids: list[str]) -> dict[str, MoodEntry]:
        """Entries by id (owner-scoped), keyed by id. Missing ids are skipped."""
        ids = [i for i in dict.fromkeys(entry_ids) if i]
        if not ids:
            return {}
        placeholders = ",".join("?" for _ in ids)
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT * FROM moods WHERE user_id = ? AND id IN ({placeholders})",
                [user_id, *ids],
            ).fetchall()
        return {r["id"]: self._row_to_entry(r) for r in rows}

    @staticmethod
    def _range_clause(
        user_id: str, start: Optional[datetime], end: Optional[datetime]
    ) -> tuple[str, list]:
        clause = "user_id = ?"
        params: list = [user_id]
        if start:
            clause += " AND date >= ?"
            params.append(start.isoformat())
        if end:
            clause += " AND date <= ?"
            params.append(end.isoformat())
        return clause, params

    def list_entries(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        descending: bool = True,
    ) -> list[MoodEntry]:
        """Entries for a user in [start, end], sorted by date."""
        clause, params = self._range_clause(user_id, start, end)
        order = "DESC" if descending else "ASC"
        query = f"SELECT * FROM moods WHERE {clause} ORDER BY date {order}"
        if limit is not None:
            query += " LIMIT ? OFFSET ?"
            params.extend([limit, offset])
        with self._connect() as conn:
            rows = conn.execute(query, params).fetchall()
        return [self._row_to_entry(r) for r in rows]

    def count(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> int:
        clause, params = self._range_clause(user_id, start, end)
        with self._connect() as conn:
            return conn.execute(f"SELECT COUNT(*) FROM moods WHERE {clause}", params).fetchone()[0]
