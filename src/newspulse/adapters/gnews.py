"""GNews search API."""

import os
from typing import Any

from newspulse.adapters.base import JSONNewsAdapter, text_field
from newspulse.data import Article, Query
from newspulse.timestamps import parse_timestamp

GNEWS_API_URL = "https://gnews.io/api/v4/search"


class GNewsAdapter(JSONNewsAdapter):
    """Search for news articles using the GNews API.

    Args:
        api_key: GNews API key (defaults to GNEWS_API_KEY env var).
        lang: Language code for results (default: "en").
        max_results: Maximum articles to request (GNews caps this at 100).
        timeout_seconds: Transport timeout.
    """

    name = "gnews"

    def __init__(
        self,
        *,
        api_key: str | None = None,
        lang: str = "en",
        max_results: int = 10,
        timeout_seconds: float = 10.0,
    ) -> None:
        key = api_key or os.environ.get("GNEWS_API_KEY")
        if not key:
            raise ValueError("GNews API key required. Pass api_key or set GNEWS_API_KEY env var.")
        super().__init__(api_key=key, timeout_seconds=timeout_seconds)
        self._lang = lang
        self._max_results = max_results

    def _endpoint(self, query: Query) -> str:
        return GNEWS_API_URL

    def _params(self, query: Query) -> dict[str, str | int]:
        return {
            "q": build_search_text(query),
            "lang": self._lang,
            "max": min(self._max_results, 100),
            "apikey": self._api_key,
        }

    def _to_article(self, record: dict[str, Any], query: Query) -> Article:
        source = record.get("source")
        source_name = text_field(source, "name") if isinstance(source, dict) else ""
        return Article(
            title=text_field(record, "title"),
            url=text_field(record, "url"),
            source=source_name,
            published_at=parse_timestamp(record.get("publishedAt")),
            summary=text_field(record, "description"),
            provider=self.name,
        )


def build_search_text(query: Query) -> str:
    """OR together the query's search terms, each quoted."""
    return " OR ".join(f'"{term}"' for term in query.search_terms)
