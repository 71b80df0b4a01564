"""Keyword-based sentiment scoring.

Two strategies with different strictness are kept side by side:

- EXACT_MATCH scores journal entries: a token counts only if it equals a
  lexicon word.
- SUBSTRING_MATCH scores ad-hoc text (and backs the external sentiment API):
  a token counts if it contains a lexicon word, the score is damped on long
  texts, and the label threshold is wider.
"""

from dataclasses import dataclass
from typing import Callable

from shared_types import SentimentLabel

# Lexicons (static, no external deps needed)
JOURNAL_POSITIVE_WORDS = (
    "happy", "joy", "love", "excited", "wonderful",
    "amazing", "great", "good", "fantastic", "awesome",
)

JOURNAL_NEGATIVE_WORDS = (
    "sad", "angry", "hate", "terrible", "awful",
    "bad", "horrible", "depressed", "anxious", "worried",
)

TEXT_POSITIVE_WORDS = JOURNAL_POSITIVE_WORDS + (
    "brilliant", "excellent", "perfect", "beautiful", "grateful",
    "blessed", "peaceful", "content", "optimistic", "hopeful",
)

TEXT_NEGATIVE_WORDS = JOURNAL_NEGATIVE_WORDS + (
    "stressed", "frustrated", "disappointed", "lonely", "tired",
    "exhausted", "overwhelmed", "confused", "scared", "afraid",
)

NEUTRAL_CONFIDENCE = 0.5


def _exact(token: str, word: str) -> bool:
    return token == word


def _contains(token: str, word: str) -> bool:
    return word in token


@dataclass(frozen=True)
class SentimentStrategy:
    """A lexicon plus the scoring knobs that go with it."""

    name: str
    positive_words: tuple[str, ...]
    negative_words: tuple[str, ...]
    matches: Callable[[str, str], bool]
    length_damping: float  # min share of tokens used as the score denominator
    confidence_factor: float
    label_threshold: float

    def count_hits(self, tokens: list[str]) -> tuple[int, int]:
        """Count tokens matching the positive and negative lexicons."""
        pos = sum(1 for t in tokens if any(self.matches(t, w) for w in self.positive_words))
        neg = sum(1 for t in tokens if any(self.matches(t, w) for w in self.negative_words))
        return pos, neg

    def analyze(self, text: str) -> dict:
        """Score text.

        Returns:
            {score: float (-1 to 1), label: str, confidence: float (0 to 1)}
        """
        tokens = text.lower().split()
        pos, neg = self.count_hits(tokens)
        total = pos + neg

        if total == 0:
            return {
                "score": 0.0,
                "label": SentimentLabel.NEUTRAL.value,
                "confidence": NEUTRAL_CONFIDENCE,
            }

        denominator = max(total, len(tokens) * self.length_damping)
        score = max(-1.0, min(1.0, (pos - neg) / denominator))
        confidence = min(total / len(tokens) * self.confidence_factor, 1.0)

        if score > self.label_threshold:
            label = SentimentLabel.POSITIVE
        elif score < -self.label_threshold:
            label = SentimentLabel.NEGATIVE
        else:
            label = SentimentLabel.NEUTRAL

        return {
            "score": score,
            "label": label.value,
            "confidence": round(confidence, 2),
        }


EXACT_MATCH = SentimentStrategy(
    name="exact",
    positive_words=JOURNAL_POSITIVE_WORDS,
    negative_words=JOURNAL_NEGATIVE_WORDS,
    matches=_exact,
    length_damping=0.0,
    confidence_factor=2,
    label_threshold=0.1,
)

SUBSTRING_MATCH = SentimentStrategy(
    name="substring",
    positive_words=TEXT_POSITIVE_WORDS,
    negative_words=TEXT_NEGATIVE_WORDS,
    matches=_contains,
    length_damping=0.1,
    confidence_factor=3,
    label_threshold=0.2,
)


def analyze_journal_sentiment(text: str) -> dict:
    """Sentiment for a stored journal entry (exact token matching)."""
    return EXACT_MATCH.analyze(text)


def analyze_text_sentiment(text: str) -> dict:
    """Sentiment for free text (substring matching)."""
    return SUBSTRING_MATCH.analyze(text)
