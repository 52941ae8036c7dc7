"""Article-level predicates used by the aggregator."""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterable

from newspulse.data import Article
from newspulse.url import extract_domain, host_matches

# Titles some providers substitute for withdrawn content.
REMOVED_SENTINELS = frozenset({"[removed]"})

DEFAULT_DENIED_DOMAINS: tuple[str, ...] = (
    "twitter.com",
    "x.com",
    "facebook.com",
    "instagram.com",
    "reddit.com",
    "tiktok.com",
    "youtube.com",
    "medium.com",
    "blogspot.com",
    "wordpress.com",
    "tumblr.com",
    "github.com",
    "gitlab.com",
)


def is_well_formed(article: Article) -> bool:
    """Article has a title and URL and is not a removed-content placeholder."""
    title = article.title.strip()
    if not title or not article.url.strip():
        return False
    return title.casefold() not in REMOVED_SENTINELS


def title_key(title: str) -> str:
    """Normalized headline used for the secondary dedup pass."""
    return " ".join(title.casefold().split())


def is_denied(article: Article, denied_domains: Iterable[str]) -> bool:
    return host_matches(extract_domain(article.url), denied_domains)


def is_mostly_latin(text: str, threshold: float = 0.5) -> bool:
    """True if at least ``threshold`` of the letters in ``text`` are Latin script.

    Text without letters counts as Latin.
    """
    letters = [ch for ch in text if ch.isalpha()]
    if not letters:
        return True
    latin = sum(1 for ch in letters if unicodedata.name(ch, "").startswith("LATIN"))
    return latin / len(letters) >= threshold


def _standalone_match(text: str, phrase: str) -> bool:
    pattern = r"\b" + re.escape(phrase) + r"\b"
    return re.search(pattern, text) is not None


def mentions_any(article: Article, terms: Iterable[str]) -> bool:
    """Title or summary mentions one of ``terms`` as a standalone word."""
    haystack = f"{article.title} {article.summary}".casefold()
    return any(term and _standalone_match(haystack, term.casefold()) for term in terms)


def is_trusted(article: Article, trusted_sources: Iterable[str]) -> bool:
    """Source name or URL host matches an entry of the allowlist."""
    trusted = [t.strip() for t in trusted_sources if t.strip()]
    source = article.source.strip().casefold()
    if source and any(source == t.casefold() for t in trusted):
        return True
    return host_matches(extract_domain(article.url), trusted)
