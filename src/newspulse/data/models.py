"""Core data models for newspulse."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any


class AssetClass(StrEnum):
    """Kind of asset a query refers to."""

    STOCK = "stock"
    CRYPTO = "crypto"


class Mood(StrEnum):
    """Coarse three-way label derived from the aggregate score."""

    BULLISH = "Bullish"
    BEARISH = "Bearish"
    NEUTRAL = "Neutral"


class SignalSource(StrEnum):
    """Where an article's normalized sentiment came from."""

    PROVIDER = "provider"
    LEXICON = "lexicon"
    DEFAULT = "default"


class OutcomeStatus(StrEnum):
    FULFILLED = "fulfilled"
    FAILED = "failed"


@dataclass(frozen=True)
class Query:
    """A single sentiment request for one asset.

    Build instances with :func:`newspulse.assets.resolve_query` (re-exported as
    ``Query.from_symbol``) so that the symbol is normalized and the asset class
    derived consistently.
    """

    symbol: str
    asset_class: AssetClass
    name: str | None = None
    price_change: float | None = None

    @property
    def is_crypto(self) -> bool:
        return self.asset_class == AssetClass.CRYPTO

    @property
    def search_terms(self) -> tuple[str, ...]:
        """Terms an article must mention to count as relevant."""
        if self.name and self.name.casefold() != self.symbol.casefold():
            return (self.symbol, self.name)
        return (self.symbol,)

    @classmethod
    def from_symbol(cls, raw: str | None, *, price_change: float | None = None) -> "Query":
        from newspulse.assets import resolve_query

        return resolve_query(raw, price_change=price_change)


@dataclass(frozen=True)
class Article:
    """A news article normalized from any provider."""

    title: str
    url: str
    source: str
    published_at: datetime | None = None
    summary: str = ""
    provider: str = ""
    provider_sentiment: float | None = None
    normalized_sentiment: float | None = None
    signal_source: SignalSource | None = None

    @property
    def has_genuine_signal(self) -> bool:
        """True when the sentiment came from the provider or lexicon hits."""
        return self.signal_source in (SignalSource.PROVIDER, SignalSource.LEXICON)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "source": self.source,
            "publishedAt": self.published_at.isoformat() if self.published_at else None,
            "summary": self.summary,
            "provider": self.provider,
            "sentiment": self.normalized_sentiment,
        }


@dataclass(frozen=True)
class AdapterOutcome:
    """Result of one Source Adapter call: fulfilled with articles, or failed."""

    adapter: str
    status: OutcomeStatus
    articles: tuple[Article, ...] = ()
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == OutcomeStatus.FULFILLED

    @classmethod
    def fulfilled(cls, adapter: str, articles: list[Article] | tuple[Article, ...]) -> "AdapterOutcome":
        return cls(adapter=adapter, status=OutcomeStatus.FULFILLED, articles=tuple(articles))

    @classmethod
    def failed(cls, adapter: str, reason: str) -> "AdapterOutcome":
        return cls(adapter=adapter, status=OutcomeStatus.FAILED, reason=reason)


@dataclass(frozen=True)
class AggregateResult:
    """Final digest returned by the pipeline for one query."""

    symbol: str
    asset_class: AssetClass
    articles: tuple[Article, ...]
    sentiment_score: int
    mood: Mood
    summary: str
    explanation: str = ""
    price_correlation: str = ""
    failed_sources: tuple[str, ...] = ()

    def to_payload(self) -> dict[str, Any]:
        """Render the JSON response body."""
        return {
            "asset": self.symbol,
            "assetClass": self.asset_class.value,
            "isCrypto": self.asset_class == AssetClass.CRYPTO,
            "sentimentScore": self.sentiment_score,
            "mood": self.mood.value,
            "summary": self.summary,
            "sentimentExplanation": self.explanation,
            "priceCorrelation": self.price_correlation,
            "failedSources": list(self.failed_sources),
            "articles": [article.to_dict() for article in self.articles],
        }
