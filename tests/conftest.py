"""Shared fixtures."""

from datetime import UTC, datetime

import pytest

from newspulse.data import Article, Query


def make_article(
    title: str = "Apple shares rally on record iPhone sales",
    url: str = "https://example.com/a",
    source: str = "Example News",
    *,
    published_at: datetime | None = None,
    summary: str = "",
    provider: str = "finnhub",
    provider_sentiment: float | None = None,
) -> Article:
    return Article(
        title=title,
        url=url,
        source=source,
        published_at=published_at,
        summary=summary,
        provider=provider,
        provider_sentiment=provider_sentiment,
    )


@pytest.fixture
def aapl() -> Query:
    return Query.from_symbol("AAPL")


@pytest.fixture
def btc() -> Query:
    return Query.from_symbol("BTC")


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 2, 1, 12, 0, tzinfo=UTC)
