"""SQLite persistence for journal entries: one row per (user, calendar day)."""

import json
import sqlite3
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Iterator, Optional

import structlog

from db import wal_connect

logger = structlog.get_logger()

MAX_TITLE_LENGTH = 100
MAX_CONTENT_LENGTH = 5000
MAX_TAG_LENGTH = 20


def _now() -> str:
    return datetime.now().isoformat()


@dataclass
class JournalEntry:
    user_id: str
    content: str
    title: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    is_private: bool = True
    mood_id: Optional[str] = None
    sentiment: Optional[dict] = None
    date: str = field(default_factory=_now)
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    created_at: str = field(default_factory=_now)
    updated_at: str = field(default_factory=_now)

    @property
    def has_sentiment(self) -> bool:
        return self.sentiment is not None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "content": self.content,
            "sentiment": dict(self.sentiment) if self.sentiment else None,
            "mood_id": self.mood_id,
            "tags": list(self.tags),
            "is_private": self.is_private,
            "date": self.date,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


class JournalStorage:
    """Journal entries in SQLite, keyed UNIQUE(user_id, day).

    Sentiment is cached on the row the first time it is computed and is
    never overwritten afterwards.
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
                CREATE TABLE IF NOT EXISTS journals (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    day TEXT NOT NULL,
                    title TEXT,
                    content TEXT NOT NULL,
                    sentiment_score REAL CHECK(sentiment_score BETWEEN -1 AND 1),
                    sentiment_label TEXT CHECK(sentiment_label IN ('positive','negative','neutral')),
                    sentiment_confidence REAL CHECK(sentiment_confidence BETWEEN 0 AND 1),
                    mood_id TEXT,
                    tags TEXT,
                    is_private INTEGER NOT NULL DEFAULT 1,
                    date TIMESTAMP NOT NULL,
                    created_at TIMESTAMP NOT NULL,
                    updated_at TIMESTAMP NOT NULL,
                    UNIQUE (user_id, day)
                )
            """)
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_journal_user_date ON journals(user_id, date DESC)"
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_journal_user_label ON journals(user_id, sentiment_label)"
            )

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> JournalEntry:
        sentiment = None
        if row["sentiment_score"] is not None:
            sentiment = {
                "score": row["sentiment_score"],
                "label": row["sentiment_label"],
                "confidence": row["sentiment_confidence"],
            }
        return JournalEntry(
            id=row["id"],
            user_id=row["user_id"],
            title=row["title"],
            content=row["content"],
            sentiment=sentiment,
            mood_id=row["mood_id"],
            tags=json.loads(row["tags"] or "[]"),
            is_private=bool(row["is_private"]),
            date=row["date"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def upsert_for_day(
        self,
        user_id: str,
        content: str,
        title: Optional[str] = None,
        tags: Optional[list[str]] = None,
        is_private: bool = True,
        mood_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> tuple[JournalEntry, bool]:
        """Create today's entry or update it in place.

        On update, content/is_private/date are replaced; title and tags only
        when given. `mood_id` is only written on creation.

        Returns:
            (stored entry, created)
        """
        if len(content) > MAX_CONTENT_LENGTH:
            raise ValueError(f"Content exceeds max length ({MAX_CONTENT_LENGTH} chars)")

        now = now or datetime.now()
        stamp = now.isoformat()
        new_id = uuid.uuid4().hex[:12]
        with self._connect() as conn:
            row = conn.execute(
                """INSERT INTO journals
                (id, user_id, day, title, content, mood_id, tags, is_private,
                 date, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT (user_id, day) DO UPDATE SET
                    title = COALESCE(excluded.title, journals.title),
                    content = excluded.content,
                    tags = COALESCE(excluded.tags, journals.tags),
                    is_private = excluded.is_private,
                    date = excluded.date,
                    updated_at = excluded.updated_at
                RETURNING *""",
                (
                    new_id,
                    user_id,
                    now.date().isoformat(),
                    title or None,
                    content,
                    mood_id,
                    json.dumps(tags) if tags is not None else None,
                    int(is_private),
                    stamp,
                    stamp,
                    stamp,
                ),
            ).fetchone()

        stored = self._row_to_entry(row)
        created = stored.id == new_id
        logger.info("journal.created" if created else "journal.updated", user_id=user_id)
        return stored, created

    def get(self, user_id: str, entry_id: str) -> Optional[JournalEntry]:
        """Entry by id, scoped to its owner."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM journals WHERE id = ? AND user_id = ?",
                (entry_id, user_id),
            ).fetchone()
        return self._row_to_entry(row) if row else None

    def get_for_day(self, user_id: str, day: date) -> Optional[JournalEntry]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM journals WHERE user_id = ? AND day = ?",
                (user_id, day.isoformat()),
            ).fetchone()
        return self._row_to_entry(row) if row else None

    def save_sentiment(self, user_id: str, entry_id: str, sentiment: dict) -> Optional[JournalEntry]:
        """Cache sentiment on an entry unless one is already stored.

        Returns the entry as stored afterwards (the earlier sentiment wins).
        """
        with self._connect() as conn:
            conn.execute(
                """UPDATE journals
                SET sentiment_score = ?, sentiment_label = ?, sentiment_confidence = ?
                WHERE id = ? AND user_id = ? AND sentiment_score IS NULL""",
                (
                    sentiment["score"],
                    sentiment["label"],
                    sentiment["confidence"],
                    entry_id,
                    user_id,
                ),
            )
        return self.get(user_id, entry_id)

    @staticmethod
    def _range_clause(
        user_id: str,
        start: Optional[datetime],
        end: Optional[datetime],
        with_sentiment: bool,
    ) -> tuple[str, list]:
        clause = "user_id = ?"
        params: list = [user_id]
        if start:
            clause += " AND date >= ?"
            params.append(start.isoformat())
        if end:
            clause += " AND date <= ?"
            params.append(end.isoformat())
        if with_sentiment:
            clause += " AND sentiment_score IS NOT NULL"
        return clause, params

    def list_entries(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        descending: bool = True,
        with_sentiment: bool = False,
    ) -> list[JournalEntry]:
        """Entries for a user in [start, end], sorted by date.

        Args:
            with_sentiment: Only entries whose sentiment has been computed.
        """
        clause, params = self._range_clause(user_id, start, end, with_sentiment)
        order = "DESC" if descending else "ASC"
        query = f"SELECT * FROM journals WHERE {clause} ORDER BY date {order}"
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
        clause, params = self._range_clause(user_id, start, end, with_sentiment=False)
        with self._connect() as conn:
            return conn.execute(f"SELECT COUNT(*) FROM journals WHERE {clause}", params).fetchone()[0]
