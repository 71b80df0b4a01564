from .insights import InsightGenerator, build_insights, calculate_trend
from .streaks import calculate_streaks, get_streaks
from .trends import MoodTrends, aggregate_trends, summarize_moods

__all__ = [
    "InsightGenerator",
    "MoodTrends",
    "aggregate_trends",
    "build_insights",
    "calculate_streaks",
    "calculate_trend",
    "get_streaks",
    "summarize_moods",
]
