"""Merge adapter outcomes into one filtered, deduplicated article list."""

import logging
from collections.abc import Callable, Sequence

from newspulse.aggregator.filters import (
    DEFAULT_DENIED_DOMAINS,
    is_denied,
    is_mostly_latin,
    is_trusted,
    is_well_formed,
    mentions_any,
    title_key,
)
from newspulse.data import AdapterOutcome, Article, Query

logger = logging.getLogger(__name__)


class ArticleAggregator:
    """Reconcile articles from all adapters into one canonical set.

    Steps, in order:

    1. Flatten fulfilled outcomes in adapter-registration order.
    2. Drop articles without title/URL or with a removed-content title.
    3. Deduplicate by exact URL (first wins).
    4. Drop URLs on denied domains, and non-Latin titles when
       ``english_only`` is set.
    5. Optionally fold identical normalized titles (first surviving wins),
       so a dropped copy never hides a kept one.
    6. Keep only articles mentioning the query's search terms, unless that
       would leave nothing, in which case the relevance filter is skipped.
    7. If ``trusted_sources`` is given, keep only those sources.

    The result is idempotent: merging it again returns the same list.

    Args:
        denied_domains: Hosts (and their subdomains) never treated as news.
        trusted_sources: Optional allowlist of source names or domains.
        english_only: Drop titles dominated by non-Latin script.
        dedupe_titles: Also fold identical headlines under different URLs.
    """

    def __init__(
        self,
        *,
        denied_domains: Sequence[str] = DEFAULT_DENIED_DOMAINS,
        trusted_sources: Sequence[str] | None = None,
        english_only: bool = True,
        dedupe_titles: bool = True,
    ) -> None:
        self._denied_domains = tuple(denied_domains)
        self._trusted_sources = tuple(trusted_sources) if trusted_sources else None
        self._english_only = english_only
        self._dedupe_titles = dedupe_titles

    def merge(self, outcomes: Sequence[AdapterOutcome], query: Query) -> list[Article]:
        """Merge and filter articles from adapter outcomes.

        Args:
            outcomes: One outcome per adapter, in registration order.
            query: The query the articles were fetched for.

        Returns:
            Filtered articles in a deterministic order.
        """
        flattened = [article for outcome in outcomes if outcome.ok for article in outcome.articles]
        articles = [a for a in flattened if is_well_formed(a)]
        articles = _unique_by(articles, lambda a: a.url)
        articles = [a for a in articles if not is_denied(a, self._denied_domains)]
        if self._english_only:
            articles = [a for a in articles if is_mostly_latin(a.title)]
        if self._dedupe_titles:
            articles = _unique_by(articles, lambda a: title_key(a.title))

        relevant = [a for a in articles if mentions_any(a, query.search_terms)]
        if relevant:
            articles = relevant
        elif articles:
            logger.info(
                f"No article mentions {query.search_terms}; "
                f"keeping {len(articles)} unfiltered articles"
            )

        if self._trusted_sources is not None:
            articles = [a for a in articles if is_trusted(a, self._trusted_sources)]

        logger.debug(f"Aggregated {len(flattened)} raw articles into {len(articles)}")
        return articles


def _unique_by(articles: list[Article], key: Callable[[Article], str]) -> list[Article]:
    """Keep the first article for each key, preserving order."""
    seen: set[str] = set()
    unique: list[Article] = []
    for article in articles:
        k = key(article)
        if k in seen:
            continue
        seen.add(k)
        unique.append(article)
    return unique
