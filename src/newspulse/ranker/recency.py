"""Quality-then-recency ranker."""

import logging
from datetime import datetime

from newspulse.data import Article

logger = logging.getLogger(__name__)


def _sort_key(article: Article) -> tuple[int, int, float]:
    """Genuine sentiment first, then newest first, undated last."""
    quality = 0 if article.has_genuine_signal else 1
    if article.published_at is None:
        return (quality, 1, 0.0)
    return (quality, 0, -_epoch(article.published_at))


def _epoch(moment: datetime) -> float:
    return moment.timestamp()


class QualityRecencyRanker:
    """Order articles by analysis quality, then recency, and truncate.

    ``sorted`` is stable, so ties keep the aggregator's order and the output
    is reproducible for identical input.

    Args:
        default_k: Digest size used when ``select`` is called without ``k``.
    """

    def __init__(self, default_k: int = 6) -> None:
        if default_k < 0:
            raise ValueError("default_k must be non-negative")
        self._default_k = default_k

    def select(self, articles: list[Article], k: int | None = None) -> list[Article]:
        limit = self._default_k if k is None else k
        if limit < 0:
            raise ValueError("k must be non-negative")
        ranked = sorted(articles, key=_sort_key)
        selected = ranked[:limit]
        logger.debug(f"Selected {len(selected)} of {len(articles)} articles (k={limit})")
        return selected
