"""Publication timestamp parsing across provider formats."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

logger = logging.getLogger(__name__)

_COMPACT_FORMATS = ("%Y%m%dT%H%M%S", "%Y%m%dT%H%M")


def parse_timestamp(value: object) -> datetime | None:
    """Normalize a provider timestamp to an aware UTC datetime.

    Understands unix seconds (int, float or digit string), ISO-8601 (with or
    without ``Z``/offset) and Alpha Vantage's compact ``YYYYMMDDTHHMMSS``.
    Naive values are taken to be UTC.

    Returns:
        The parsed instant, or None if the value is empty or unrecognized.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int | float):
        return _from_unix(float(value))

    text = str(value).strip()
    if not text:
        return None

    if text.isdigit():
        return _from_unix(float(text))

    for fmt in _COMPACT_FORMATS:
        try:
            return datetime.strptime(text, fmt).replace(tzinfo=UTC)
        except ValueError:
            pass

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.debug(f"Unrecognized timestamp: {text!r}")
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _from_unix(seconds: float) -> datetime | None:
    try:
        return datetime.fromtimestamp(seconds, tz=UTC)
    except (OverflowError, OSError, ValueError):
        logger.debug(f"Unix timestamp out of range: {seconds}")
        return None
