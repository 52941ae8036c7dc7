from newspulse.sentiment.lexicon import DEFAULT_LEXICON, LEXICON_VERSION, Lexicon
from newspulse.sentiment.scorer import NEUTRAL_SCORE, SentimentScorer, mood_for

__all__ = [
    "DEFAULT_LEXICON",
    "LEXICON_VERSION",
    "NEUTRAL_SCORE",
    "Lexicon",
    "SentimentScorer",
    "mood_for",
]
