"""URL handling utilities."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


def extract_domain(url: str) -> str:
    """Extract the lowercase host name from a URL.

    Args:
        url: The URL to extract the domain from.

    Returns:
        The host (without 'www.' prefix), or "" if extraction fails.
    """
    try:
        host = urlparse(url).hostname or ""
    except ValueError:
        logger.debug(f"Could not parse url {url!r}")
        return ""
    host = host.lower()
    if host.startswith("www."):
        host = host[4:]
    return host


def host_matches(host: str, domains: Iterable[str]) -> bool:
    """Return True if ``host`` equals one of ``domains`` or is a subdomain of one."""
    if not host:
        return False
    for domain in domains:
        domain = domain.lower().removeprefix("www.")
        if host == domain or host.endswith("." + domain):
            return True
    return False
