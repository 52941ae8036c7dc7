"""newspulse: asset news sentiment from several providers."""

from newspulse.data import AggregateResult, Article, AssetClass, Mood, Query
from newspulse.errors import (
    InternalPipelineError,
    InvalidQueryError,
    NewsPulseError,
    UpstreamFailureError,
)
from newspulse.pipeline import SentimentPipeline

__all__ = [
    "AggregateResult",
    "Article",
    "AssetClass",
    "InternalPipelineError",
    "InvalidQueryError",
    "Mood",
    "NewsPulseError",
    "Query",
    "SentimentPipeline",
    "UpstreamFailureError",
]
