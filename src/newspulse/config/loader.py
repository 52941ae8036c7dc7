"""YAML configuration loading utilities."""

import logging
from pathlib import Path

import yaml

from newspulse.config.models import NewsPulseConfig

logger = logging.getLogger(__name__)


def load_config(path: Path | str) -> NewsPulseConfig:
    """Load configuration from YAML file.

    An empty file yields the default configuration.

    Args:
        path: Path to YAML config file.

    Returns:
        Validated NewsPulseConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        pydantic.ValidationError: If config is invalid.
    """
    path = Path(path)
    with path.open() as f:
        raw = yaml.safe_load(f)

    return NewsPulseConfig.model_validate(raw or {})


def get_default_config_path() -> Path:
    """Get path to default config file."""
    return Path(__file__).resolve().parents[3] / "configs" / "default.yaml"


def load_default_config() -> NewsPulseConfig:
    """Load ``configs/default.yaml`` when running from a checkout.

    An installed package has no ``configs/`` directory next to it, so the
    built-in model defaults are used instead.
    """
    path = get_default_config_path()
    if not path.is_file():
        logger.warning(f"Default config not found at {path}; using built-in defaults")
        return NewsPulseConfig()
    return load_config(path)
