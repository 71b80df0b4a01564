from .sentiment import EXACT_MATCH, SUBSTRING_MATCH, analyze_journal_sentiment, analyze_text_sentiment
from .storage import JournalEntry, JournalStorage

__all__ = [
    "JournalEntry",
    "JournalStorage",
    "EXACT_MATCH",
    "SUBSTRING_MATCH",
    "analyze_journal_sentiment",
    "analyze_text_sentiment",
]
