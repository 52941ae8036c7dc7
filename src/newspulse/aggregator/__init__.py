from newspulse.aggregator.filters import DEFAULT_DENIED_DOMAINS
from newspulse.aggregator.merge import ArticleAggregator

__all__ = ["DEFAULT_DENIED_DOMAINS", "ArticleAggregator"]
