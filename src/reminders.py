"""Daily mood reminders: notify users whose reminder time is now and who haven't logged today."""

from datetime import datetime
from pathlib import Path
from typing import Optional

import structlog

from mood.storage import MoodStorage
from observability import metrics
from shared_types import NotificationType
from web import user_store

logger = structlog.get_logger()

REMINDER_TITLE = "Daily mood check-in"
REMINDER_MESSAGE = "How are you feeling today? Take a moment to log your mood."


def send_due_reminders(
    db_path: Path,
    now: Optional[datetime] = None,
    mood_storage: Optional[MoodStorage] = None,
) -> list[dict]:
    """Create a reminder notification for every user due at `now` (HH:MM).

    Meant to be run once a minute (e.g. from cron via `moodlog reminders send`).

    Returns:
        The notifications created.
    """
    now = now or datetime.now()
    mood_storage = mood_storage or MoodStorage(db_path)
    due = user_store.users_with_reminder_at(now.strftime("%H:%M"), db_path=db_path)

    sent = []
    for user_id in due:
        if mood_storage.get_for_day(user_id, now.date()):
            continue
        sent.append(
            user_store.create_notification(
                user_id,
                NotificationType.REMINDER.value,
                REMINDER_TITLE,
                REMINDER_MESSAGE,
                db_path=db_path,
            )
        )
    metrics.counter("reminders.sent", len(sent))
    logger.info("reminders.sent", due=len(due), sent=len(sent), at=now.strftime("%H:%M"))
    return sent
