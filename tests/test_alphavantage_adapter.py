"""Tests for AlphaVantageAdapter."""

from __future__ import annotations

from datetime import UTC, datetime

import httpx
import pytest

from newspulse.adapters import AlphaVantageAdapter
from newspulse.data import Query


def _feed_item(**overrides) -> dict:
    item = {
        "title": "Bitcoin rallies past resistance",
        "url": "https://www.coindesk.com/btc-rally",
        "source": "CoinDesk",
        "time_published": "20260201T100000",
        "summary": "BTC climbed overnight.",
        "overall_sentiment_score": 0.12,
        "ticker_sentiment": [
            {"ticker": "CRYPTO:BTC", "ticker_sentiment_score": "0.3"},
            {"ticker": "CRYPTO:ETH", "ticker_sentiment_score": "-0.2"},
        ],
    }
    item.update(overrides)
    return item


class TestAlphaVantageAdapter:
    @pytest.fixture
    def adapter(self) -> AlphaVantageAdapter:
        return AlphaVantageAdapter(api_key="test-key", limit=20)

    def test_init_requires_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ALPHA_KEY", raising=False)
        with pytest.raises(ValueError, match="API key required"):
            AlphaVantageAdapter()

    async def test_fetch_crypto_params_and_sentiment(
        self, adapter: AlphaVantageAdapter, btc: Query, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        captured: dict = {}

        async def mock_get(self, url, params=None, **kwargs):
            captured.update(params)
            return httpx.Response(
                200, json={"feed": [_feed_item()]}, request=httpx.Request("GET", url)
            )

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        outcome = await adapter.fetch(btc)

        assert captured["function"] == "NEWS_SENTIMENT"
        assert captured["tickers"] == "CRYPTO:BTC"
        assert captured["sort"] == "LATEST"
        assert captured["limit"] == 20
        assert captured["apikey"] == "test-key"

        article = outcome.articles[0]
        assert article.provider == "alphavantage"
        assert article.provider_sentiment == pytest.approx(0.3)
        assert article.published_at == datetime(2026, 2, 1, 10, 0, tzinfo=UTC)

    async def test_overall_score_used_without_matching_ticker(
        self, adapter: AlphaVantageAdapter, aapl: Query, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_get(self, url, params=None, **kwargs):
            return httpx.Response(
                200, json={"feed": [_feed_item()]}, request=httpx.Request("GET", url)
            )

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        outcome = await adapter.fetch(aapl)

        assert outcome.articles[0].provider_sentiment == pytest.approx(0.12)

    async def test_missing_sentiment_stays_none(
        self, adapter: AlphaVantageAdapter, aapl: Query, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        item = _feed_item(ticker_sentiment=[], overall_sentiment_score=None)

        async def mock_get(self, url, params=None, **kwargs):
            return httpx.Response(200, json={"feed": [item]}, request=httpx.Request("GET", url))

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        outcome = await adapter.fetch(aapl)

        assert outcome.articles[0].provider_sentiment is None

    async def test_rate_limit_note_is_no_data(
        self, adapter: AlphaVantageAdapter, aapl: Query, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_get(self, url, params=None, **kwargs):
            return httpx.Response(
                200,
                json={"Information": "Our standard API rate limit is 25 requests per day."},
                request=httpx.Request("GET", url),
            )

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        outcome = await adapter.fetch(aapl)

        assert outcome.ok
        assert outcome.articles == ()

    async def test_non_list_ticker_sentiment_falls_back(
        self, adapter: AlphaVantageAdapter, aapl: Query, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        item = _feed_item(ticker_sentiment="not-a-list")

        async def mock_get(self, url, params=None, **kwargs):
            return httpx.Response(200, json={"feed": [item]}, request=httpx.Request("GET", url))

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        outcome = await adapter.fetch(aapl)

        assert outcome.ok
        assert outcome.articles[0].provider_sentiment == pytest.approx(0.12)

    async def test_malformed_record_is_failed_outcome(
        self, adapter: AlphaVantageAdapter, aapl: Query, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        item = _feed_item(ticker_sentiment=5)

        async def mock_get(self, url, params=None, **kwargs):
            return httpx.Response(200, json={"feed": [item]}, request=httpx.Request("GET", url))

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        outcome = await adapter.fetch(aapl)

        assert not outcome.ok
        assert outcome.reason.startswith("malformed payload")
