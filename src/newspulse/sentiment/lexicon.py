"""Versioned keyword lexicon for headline sentiment.

Keywords match at the start of a word, so ``surge`` also counts ``surges``
and ``surged``. Stems that start unrelated words (``bull`` in "bullet",
``bear`` in "bearing") are listed in ``WHOLE_WORDS`` with their inflections
and must match a full word. Each keyword counts at most once per article.
"""

import re
from dataclasses import dataclass, field

LEXICON_VERSION = "3"

POSITIVE_WORDS: frozenset[str] = frozenset(
    {
        "adoption",
        "beat",
        "boost",
        "breakout",
        "bull",
        "bullish",
        "bulls",
        "gain",
        "growth",
        "jump",
        "outperform",
        "profit",
        "rally",
        "record",
        "rebound",
        "soar",
        "strong",
        "surge",
        "upgrade",
    }
)

NEGATIVE_WORDS: frozenset[str] = frozenset(
    {
        "bear",
        "bearish",
        "bears",
        "crash",
        "decline",
        "default",
        "downgrade",
        "drop",
        "fall",
        "fraud",
        "hack",
        "lawsuit",
        "loss",
        "missed",
        "misses",
        "plunge",
        "selloff",
        "slump",
        "tumble",
        "weak",
    }
)

WHOLE_WORDS: frozenset[str] = frozenset(
    {"bull", "bullish", "bulls", "bear", "bearish", "bears"}
)


@dataclass(frozen=True)
class Lexicon:
    """Positive and negative keyword sets with a version tag."""

    positive: frozenset[str] = POSITIVE_WORDS
    negative: frozenset[str] = NEGATIVE_WORDS
    version: str = LEXICON_VERSION
    whole_words: frozenset[str] = WHOLE_WORDS
    _positive_patterns: tuple[re.Pattern[str], ...] = field(
        init=False, repr=False, compare=False
    )
    _negative_patterns: tuple[re.Pattern[str], ...] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "_positive_patterns", _compile(self.positive, self.whole_words)
        )
        object.__setattr__(
            self, "_negative_patterns", _compile(self.negative, self.whole_words)
        )

    def count_hits(self, text: str) -> tuple[int, int]:
        """Return (positive, negative) distinct keyword hits in ``text``."""
        folded = text.casefold()
        positive = sum(1 for pattern in self._positive_patterns if pattern.search(folded))
        negative = sum(1 for pattern in self._negative_patterns if pattern.search(folded))
        return positive, negative


def _compile(words: frozenset[str], whole_words: frozenset[str]) -> tuple[re.Pattern[str], ...]:
    patterns = []
    for word in sorted(words):
        pattern = r"\b" + re.escape(word.casefold())
        if word in whole_words:
            pattern += r"\b"
        patterns.append(re.compile(pattern))
    return tuple(patterns)


DEFAULT_LEXICON = Lexicon()
