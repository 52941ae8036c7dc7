"""Protocol for article ranking."""

from typing import Protocol

from newspulse.data import Article


class ArticleRanker(Protocol):
    """Interface for ordering scored articles and keeping the best ones."""

    def select(self, articles: list[Article], k: int) -> list[Article]:
        """Select the top-k articles.

        Args:
            articles: Scored articles in aggregator order.
            k: Maximum number of articles to return.

        Returns:
            At most ``k`` articles, best first.
        """
        ...
