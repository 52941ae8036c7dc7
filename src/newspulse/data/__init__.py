"""Data models for newspulse."""

from newspulse.data.models import (
    AdapterOutcome,
    AggregateResult,
    Article,
    AssetClass,
    Mood,
    OutcomeStatus,
    Query,
    SignalSource,
)

__all__ = [
    "AdapterOutcome",
    "AggregateResult",
    "Article",
    "AssetClass",
    "Mood",
    "OutcomeStatus",
    "Query",
    "SignalSource",
]
