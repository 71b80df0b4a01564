"""CLI command modules."""

from .analytics import insights, streaks, trends
from .journal import journal
from .mood import mood
from .reminders import reminders
from .sentiment import sentiment

__all__ = [
    "insights",
    "journal",
    "mood",
    "reminders",
    "sentiment",
    "streaks",
    "trends",
]
