"""Finnhub company and crypto news."""

import os
from datetime import UTC, datetime, timedelta
from typing import Any

from newspulse.adapters.base import JSONNewsAdapter, text_field
from newspulse.data import Article, Query
from newspulse.timestamps import parse_timestamp

FINNHUB_API_URL = "https://finnhub.io/api/v1"


class FinnhubAdapter(JSONNewsAdapter):
    """Fetch news from Finnhub.

    Stocks use ``/company-news`` over a lookback window; crypto uses the
    general ``/news?category=crypto`` feed, which is not symbol-specific and
    relies on the relevance filter downstream. Finnhub has no native sentiment.

    Args:
        api_key: Finnhub token (defaults to FINNHUB_KEY env var).
        lookback_days: Days of company news to request.
        timeout_seconds: Transport timeout.
    """

    name = "finnhub"

    def __init__(
        self,
        *,
        api_key: str | None = None,
        lookback_days: int = 30,
        timeout_seconds: float = 10.0,
    ) -> None:
        key = api_key or os.environ.get("FINNHUB_KEY")
        if not key:
            raise ValueError("Finnhub API key required. Pass api_key or set FINNHUB_KEY env var.")
        super().__init__(api_key=key, timeout_seconds=timeout_seconds)
        self._lookback_days = lookback_days

    def _endpoint(self, query: Query) -> str:
        if query.is_crypto:
            return f"{FINNHUB_API_URL}/news"
        return f"{FINNHUB_API_URL}/company-news"

    def _params(self, query: Query) -> dict[str, str | int]:
        if query.is_crypto:
            return {"category": "crypto", "token": self._api_key}
        today = datetime.now(tz=UTC).date()
        start = today - timedelta(days=self._lookback_days)
        return {
            "symbol": query.symbol,
            "from": start.isoformat(),
            "to": today.isoformat(),
            "token": self._api_key,
        }

    def _to_article(self, record: dict[str, Any], query: Query) -> Article:
        return Article(
            title=text_field(record, "headline"),
            url=text_field(record, "url"),
            source=text_field(record, "source"),
            published_at=parse_timestamp(record.get("datetime")),
            summary=text_field(record, "summary"),
            provider=self.name,
        )
