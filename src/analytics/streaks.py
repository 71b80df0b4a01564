"""Logging streaks over a user's mood history.

The current streak is the run ending today. A run that ended before today is
not current, even if it ended yesterday; it only counts toward the longest.
"""

from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from mood.models import POSITIVE_MOOD_SCORE, MoodEntry


def _entry_day(entry: MoodEntry) -> date:
    return datetime.fromisoformat(entry.date).date()


def calculate_streaks(entries: Sequence[MoodEntry], today: Optional[date] = None) -> dict:
    """Compute streaks from mood history sorted newest first.

    A streak is a run of consecutive calendar days with an entry; a positive
    streak is a run of consecutive days scoring >= 4. The "current" streaks
    are the runs that include today: a history whose newest entry is older
    than today has no current streak, and once the today-anchored run breaks
    further runs only count towards the longest.

    Returns:
        {current_streak, longest_streak, current_positive_streak,
         longest_positive_streak, total_entries}
    """
    today = today or date.today()

    current = longest = 0
    current_positive = longest_positive = 0
    run = positive_run = 0
    ongoing = positive_ongoing = False
    previous_day: Optional[date] = None

    for index, entry in enumerate(entries):
        day = _entry_day(entry)
        continues = previous_day is not None and day == previous_day - timedelta(days=1)

        if continues:
            run += 1
        else:
            longest = max(longest, run)
            longest_positive = max(longest_positive, positive_run)
            run = 1
            positive_run = 0
            ongoing = index == 0 and day == today
            positive_ongoing = ongoing

        if entry.mood_score >= POSITIVE_MOOD_SCORE:
            positive_run += 1
        else:
            longest_positive = max(longest_positive, positive_run)
            positive_run = 0
            positive_ongoing = False

        if ongoing:
            current = run
        if positive_ongoing:
            current_positive = positive_run

        previous_day = day

    longest = max(longest, run)
    longest_positive = max(longest_positive, positive_run)

    return {
        "current_streak": current,
        "longest_streak": longest,
        "current_positive_streak": current_positive,
        "longest_positive_streak": longest_positive,
        "total_entries": len(entries),
    }


def get_streaks(mood_storage, user_id: str, today: Optional[date] = None) -> dict:
    """Streak summary over a user's full mood history."""
    return calculate_streaks(mood_storage.list_entries(user_id, descending=True), today=today)
