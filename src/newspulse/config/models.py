"""Pydantic configuration models for newspulse components."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from newspulse.aggregator.filters import DEFAULT_DENIED_DOMAINS

# ============================================================
# Adapter Configs
# ============================================================


class FinnhubAdapterConfig(BaseModel):
    """Configuration for FinnhubAdapter."""

    type: Literal["finnhub"] = "finnhub"
    api_key: str | None = None
    lookback_days: int = Field(default=30, ge=1)
    timeout_seconds: float = Field(default=10.0, gt=0)

    model_config = {"frozen": True}


class AlphaVantageAdapterConfig(BaseModel):
    """Configuration for AlphaVantageAdapter."""

    type: Literal["alphavantage"] = "alphavantage"
    api_key: str | None = None
    limit: int = Field(default=50, ge=1)
    timeout_seconds: float = Field(default=10.0, gt=0)

    model_config = {"frozen": True}


class GNewsAdapterConfig(BaseModel):
    """Configuration for GNewsAdapter."""

    type: Literal["gnews"] = "gnews"
    api_key: str | None = None
    lang: str = "en"
    max_results: int = Field(default=10, ge=1, le=100)
    timeout_seconds: float = Field(default=10.0, gt=0)

    model_config = {"frozen": True}


AdapterConfig = Annotated[
    FinnhubAdapterConfig | AlphaVantageAdapterConfig | GNewsAdapterConfig,
    Field(discriminator="type"),
]


def _default_adapters() -> list[AdapterConfig]:
    return [FinnhubAdapterConfig(), AlphaVantageAdapterConfig()]


# ============================================================
# Aggregation / Selection Configs
# ============================================================


class FilterConfig(BaseModel):
    """Filters applied while merging adapter outcomes."""

    denied_domains: list[str] = Field(default_factory=lambda: list(DEFAULT_DENIED_DOMAINS))
    trusted_sources: list[str] | None = None
    english_only: bool = True
    dedupe_titles: bool = True

    model_config = {"frozen": True}


class SelectionConfig(BaseModel):
    """Digest size."""

    top_k: int = Field(default=6, ge=0)

    model_config = {"frozen": True}


class PipelineSettings(BaseModel):
    """Orchestrator settings."""

    adapter_timeout_seconds: float = Field(default=10.0, gt=0)

    model_config = {"frozen": True}


# ============================================================
# Logging Config
# ============================================================


class LoggingConfig(BaseModel):
    """Configuration for intermediate pipeline logging."""

    enabled: bool = False
    log_dir: str = "logs"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class NewsPulseConfig(BaseModel):
    """Root configuration for newspulse."""

    adapters: list[AdapterConfig] = Field(default_factory=_default_adapters)
    filters: FilterConfig = Field(default_factory=FilterConfig)
    selection: SelectionConfig = Field(default_factory=SelectionConfig)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
