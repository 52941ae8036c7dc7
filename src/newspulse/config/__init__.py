"""Configuration module for newspulse."""

from newspulse.config.factory import (
    create_adapter,
    create_adapters,
    create_aggregator,
    create_from_config,
    create_pipeline,
)
from newspulse.config.loader import get_default_config_path, load_config, load_default_config
from newspulse.config.models import (
    AdapterConfig,
    AlphaVantageAdapterConfig,
    FilterConfig,
    FinnhubAdapterConfig,
    GNewsAdapterConfig,
    LoggingConfig,
    NewsPulseConfig,
    PipelineSettings,
    SelectionConfig,
)

__all__ = [
    "AdapterConfig",
    "AlphaVantageAdapterConfig",
    "FilterConfig",
    "FinnhubAdapterConfig",
    "GNewsAdapterConfig",
    "LoggingConfig",
    "NewsPulseConfig",
    "PipelineSettings",
    "SelectionConfig",
    "create_adapter",
    "create_adapters",
    "create_aggregator",
    "create_from_config",
    "create_pipeline",
    "get_default_config_path",
    "load_config",
    "load_default_config",
]
