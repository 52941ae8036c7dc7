"""Factory functions to create components from configuration."""

import logging
from pathlib import Path

from newspulse.adapters import AlphaVantageAdapter, FinnhubAdapter, GNewsAdapter
from newspulse.adapters.base import SourceAdapter
from newspulse.aggregator import ArticleAggregator
from newspulse.config.models import (
    AdapterConfig,
    AlphaVantageAdapterConfig,
    FilterConfig,
    FinnhubAdapterConfig,
    GNewsAdapterConfig,
    NewsPulseConfig,
)
from newspulse.pipeline import SentimentPipeline
from newspulse.ranker import QualityRecencyRanker

logger = logging.getLogger(__name__)


def create_adapter(config: AdapterConfig) -> SourceAdapter:
    """Create a source adapter from config.

    Raises:
        ValueError: If the adapter's credential is missing or the config type is unknown.
    """
    if isinstance(config, FinnhubAdapterConfig):
        return FinnhubAdapter(
            api_key=config.api_key,
            lookback_days=config.lookback_days,
            timeout_seconds=config.timeout_seconds,
        )
    if isinstance(config, AlphaVantageAdapterConfig):
        return AlphaVantageAdapter(
            api_key=config.api_key,
            limit=config.limit,
            timeout_seconds=config.timeout_seconds,
        )
    if isinstance(config, GNewsAdapterConfig):
        return GNewsAdapter(
            api_key=config.api_key,
            lang=config.lang,
            max_results=config.max_results,
            timeout_seconds=config.timeout_seconds,
        )
    msg = f"Unknown adapter config type: {type(config)}"
    raise ValueError(msg)


def create_adapters(configs: list[AdapterConfig]) -> list[SourceAdapter]:
    """Create every adapter that has credentials, skipping the rest.

    Raises:
        ValueError: If no adapter could be created.
    """
    adapters: list[SourceAdapter] = []
    for config in configs:
        try:
            adapters.append(create_adapter(config))
        except ValueError as e:
            logger.warning(f"Skipping {config.type} adapter: {e}")
    if not adapters:
        raise ValueError("No news adapter is configured with credentials")
    return adapters


def create_aggregator(config: FilterConfig) -> ArticleAggregator:
    """Create the article aggregator from filter config."""
    return ArticleAggregator(
        denied_domains=config.denied_domains,
        trusted_sources=config.trusted_sources,
        english_only=config.english_only,
        dedupe_titles=config.dedupe_titles,
    )


def create_pipeline(
    config: NewsPulseConfig,
    *,
    run_log_dir: Path | None = None,
) -> SentimentPipeline:
    """Create the sentiment pipeline from root config."""
    return SentimentPipeline(
        create_adapters(config.adapters),
        aggregator=create_aggregator(config.filters),
        ranker=QualityRecencyRanker(default_k=config.selection.top_k),
        top_k=config.selection.top_k,
        adapter_timeout_seconds=config.pipeline.adapter_timeout_seconds,
        run_log_dir=run_log_dir,
    )


def create_from_config(
    config: NewsPulseConfig,
    *,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
) -> SentimentPipeline:
    """Create a complete pipeline from root config.

    Args:
        config: Root configuration.
        log_override: Override the config's logging.enabled setting.
        log_dir_override: Override the config's logging.log_dir setting.

    Returns:
        The configured pipeline. It writes run logs only when logging is enabled.
    """
    log_enabled = log_override if log_override is not None else config.logging.enabled
    log_dir = Path(log_dir_override if log_dir_override is not None else config.logging.log_dir)
    return create_pipeline(config, run_log_dir=log_dir if log_enabled else None)
