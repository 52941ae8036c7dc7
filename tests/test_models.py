"""Tests for data models."""

from datetime import UTC, datetime

import pytest

from newspulse.data import (
    AdapterOutcome,
    AggregateResult,
    Article,
    AssetClass,
    Mood,
    OutcomeStatus,
    Query,
    SignalSource,
)


class TestQuery:
    def test_search_terms_include_name(self) -> None:
        query = Query(symbol="BTC", asset_class=AssetClass.CRYPTO, name="bitcoin")
        assert query.search_terms == ("BTC", "bitcoin")
        assert query.is_crypto

    def test_search_terms_skip_name_equal_to_symbol(self) -> None:
        query = Query(symbol="AMD", asset_class=AssetClass.STOCK, name="AMD")
        assert query.search_terms == ("AMD",)

    def test_search_terms_without_name(self) -> None:
        query = Query(symbol="XYZ", asset_class=AssetClass.STOCK)
        assert query.search_terms == ("XYZ",)
        assert not query.is_crypto

    def test_is_frozen(self) -> None:
        query = Query(symbol="AAPL", asset_class=AssetClass.STOCK)
        with pytest.raises(AttributeError):
            query.symbol = "MSFT"  # type: ignore[misc]


class TestArticle:
    def test_defaults(self) -> None:
        article = Article(title="T", url="https://example.com", source="S")
        assert article.published_at is None
        assert article.summary == ""
        assert article.normalized_sentiment is None
        assert not article.has_genuine_signal

    @pytest.mark.parametrize(
        ("signal_source", "genuine"),
        [
            (SignalSource.PROVIDER, True),
            (SignalSource.LEXICON, True),
            (SignalSource.DEFAULT, False),
        ],
    )
    def test_has_genuine_signal(self, signal_source: SignalSource, genuine: bool) -> None:
        article = Article(
            title="T", url="https://example.com", source="S", signal_source=signal_source
        )
        assert article.has_genuine_signal is genuine

    def test_to_dict(self) -> None:
        article = Article(
            title="T",
            url="https://example.com",
            source="S",
            published_at=datetime(2026, 2, 1, 10, 0, tzinfo=UTC),
            provider="gnews",
            normalized_sentiment=0.25,
        )
        assert article.to_dict() == {
            "title": "T",
            "url": "https://example.com",
            "source": "S",
            "publishedAt": "2026-02-01T10:00:00+00:00",
            "summary": "",
            "provider": "gnews",
            "sentiment": 0.25,
        }


class TestAdapterOutcome:
    def test_fulfilled(self) -> None:
        article = Article(title="T", url="https://example.com", source="S")
        outcome = AdapterOutcome.fulfilled("finnhub", [article])
        assert outcome.ok
        assert outcome.status == OutcomeStatus.FULFILLED
        assert outcome.articles == (article,)
        assert outcome.reason is None

    def test_failed(self) -> None:
        outcome = AdapterOutcome.failed("gnews", "HTTP 500")
        assert not outcome.ok
        assert outcome.articles == ()
        assert outcome.reason == "HTTP 500"


class TestAggregateResult:
    def test_to_payload(self) -> None:
        article = Article(title="T", url="https://example.com", source="S")
        result = AggregateResult(
            symbol="BTC",
            asset_class=AssetClass.CRYPTO,
            articles=(article,),
            sentiment_score=72,
            mood=Mood.BULLISH,
            summary="summary",
            explanation="explanation",
            price_correlation="correlation",
            failed_sources=("gnews",),
        )
        payload = result.to_payload()
        assert payload["asset"] == "BTC"
        assert payload["assetClass"] == "crypto"
        assert payload["isCrypto"] is True
        assert payload["sentimentScore"] == 72
        assert payload["mood"] == "Bullish"
        assert payload["sentimentExplanation"] == "explanation"
        assert payload["priceCorrelation"] == "correlation"
        assert payload["failedSources"] == ["gnews"]
        assert payload["articles"][0]["url"] == "https://example.com"
