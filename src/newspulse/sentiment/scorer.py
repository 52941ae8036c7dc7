"""Per-article sentiment signals and the aggregate 0-100 score.

Per-article signal, in [-1.0, +1.0]:

- Provider sentiment present: ``raw / bound`` for the provider's documented
  bound (Alpha Vantage reports roughly -0.35..+0.35), clamped.
- Otherwise lexicon hits: ``(positive - negative) / LEXICON_SCALE``, clamped.
- No provider value and no hits: 0.0, marked as the neutral default.

Aggregate over N articles::

    round(((sum(signal) + N) / (2 * N)) * 100)

so all -1 maps to 0, all 0 to 50 and all +1 to 100. N = 0 yields 50. Python's
``round`` is used, so exact halves round to even.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import replace

from newspulse.data import Article, Mood, SignalSource
from newspulse.sentiment.lexicon import DEFAULT_LEXICON, Lexicon

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 50
BULLISH_ABOVE = 60
BEARISH_BELOW = 40

# Net keyword hits that saturate the lexicon signal.
LEXICON_SCALE = 3.0

PROVIDER_BOUNDS: dict[str, float] = {
    "alphavantage": 0.35,
}


def clamp(value: float, low: float = -1.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def mood_for(score: int) -> Mood:
    """Map an aggregate score to its mood label."""
    if score > BULLISH_ABOVE:
        return Mood.BULLISH
    if score < BEARISH_BELOW:
        return Mood.BEARISH
    return Mood.NEUTRAL


class SentimentScorer:
    """Deterministic lexicon/provider sentiment scorer.

    Args:
        lexicon: Keyword sets used when a provider gives no sentiment.
        provider_bounds: Native magnitude of each provider's sentiment scale.
            Providers not listed are assumed to already report [-1, +1].
    """

    def __init__(
        self,
        *,
        lexicon: Lexicon = DEFAULT_LEXICON,
        provider_bounds: Mapping[str, float] | None = None,
    ) -> None:
        self._lexicon = lexicon
        self._bounds = dict(PROVIDER_BOUNDS if provider_bounds is None else provider_bounds)

    def score(self, articles: Sequence[Article]) -> tuple[list[Article], int]:
        """Annotate articles and compute their aggregate score."""
        scored = self.annotate(articles)
        return scored, self.aggregate(scored)

    def annotate(self, articles: Sequence[Article]) -> list[Article]:
        """Return copies of ``articles`` with ``normalized_sentiment`` set."""
        return [self._annotate_one(article) for article in articles]

    def aggregate(self, articles: Sequence[Article]) -> int:
        """Aggregate annotated articles into an integer score in [0, 100]."""
        n = len(articles)
        if n == 0:
            return NEUTRAL_SCORE
        total = sum(self.signal(article)[0] for article in articles)
        score = round(((total + n) / (2 * n)) * 100)
        return int(max(0, min(100, score)))

    def signal(self, article: Article) -> tuple[float, SignalSource]:
        """Compute the [-1, +1] signal for one article and where it came from."""
        if article.normalized_sentiment is not None and article.signal_source is not None:
            return clamp(article.normalized_sentiment), article.signal_source

        if article.provider_sentiment is not None:
            bound = self._bounds.get(article.provider, 1.0)
            return clamp(article.provider_sentiment / bound), SignalSource.PROVIDER

        positive, negative = self._lexicon.count_hits(f"{article.title} {article.summary}")
        if positive == 0 and negative == 0:
            return 0.0, SignalSource.DEFAULT
        return clamp((positive - negative) / LEXICON_SCALE), SignalSource.LEXICON

    def _annotate_one(self, article: Article) -> Article:
        value, source = self.signal(article)
        logger.debug(f"[{source} / {value:+.3f}] {article.title[:60]!r}")
        return replace(article, normalized_sentiment=round(value, 4), signal_source=source)
