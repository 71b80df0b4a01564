from .models import MOOD_SCORES, MoodEntry, mood_score_for
from .storage import MoodStorage

__all__ = ["MoodEntry", "MoodStorage", "MOOD_SCORES", "mood_score_for"]
