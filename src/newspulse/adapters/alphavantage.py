"""Alpha Vantage NEWS_SENTIMENT feed."""

import os
from typing import Any

from newspulse.adapters.base import JSONNewsAdapter, float_field, text_field
from newspulse.data import Article, Query
from newspulse.timestamps import parse_timestamp

ALPHA_VANTAGE_URL = "https://www.alphavantage.co/query"


class AlphaVantageAdapter(JSONNewsAdapter):
    """Fetch news and provider sentiment from Alpha Vantage.

    Crypto tickers are sent as ``CRYPTO:<SYMBOL>``. Each feed item carries an
    ``overall_sentiment_score`` and a ``ticker_sentiment`` list; the score for
    the queried ticker is preferred when present. Scores are kept in the
    provider's native scale (roughly -0.35..+0.35) and converted later.

    Args:
        api_key: Alpha Vantage key (defaults to ALPHA_KEY env var).
        limit: Maximum feed items to request.
        timeout_seconds: Transport timeout.
    """

    name = "alphavantage"

    def __init__(
        self,
        *,
        api_key: str | None = None,
        limit: int = 50,
        timeout_seconds: float = 10.0,
    ) -> None:
        key = api_key or os.environ.get("ALPHA_KEY")
        if not key:
            raise ValueError("Alpha Vantage API key required. Pass api_key or set ALPHA_KEY env var.")
        super().__init__(api_key=key, timeout_seconds=timeout_seconds)
        self._limit = limit

    def _endpoint(self, query: Query) -> str:
        return ALPHA_VANTAGE_URL

    def _params(self, query: Query) -> dict[str, str | int]:
        return {
            "function": "NEWS_SENTIMENT",
            "tickers": _ticker(query),
            "sort": "LATEST",
            "limit": self._limit,
            "apikey": self._api_key,
        }

    def _to_article(self, record: dict[str, Any], query: Query) -> Article:
        return Article(
            title=text_field(record, "title"),
            url=text_field(record, "url"),
            source=text_field(record, "source"),
            published_at=parse_timestamp(record.get("time_published")),
            summary=text_field(record, "summary"),
            provider=self.name,
            provider_sentiment=_sentiment(record, _ticker(query)),
        )


def _ticker(query: Query) -> str:
    if query.is_crypto:
        return f"CRYPTO:{query.symbol}"
    return query.symbol


def _sentiment(record: dict[str, Any], ticker: str) -> float | None:
    """Prefer the per-ticker score, fall back to the overall article score."""
    for entry in record.get("ticker_sentiment") or []:
        if isinstance(entry, dict) and str(entry.get("ticker", "")).upper() == ticker:
            score = float_field(entry, "ticker_sentiment_score")
            if score is not None:
                return score
    return float_field(record, "overall_sentiment_score")
