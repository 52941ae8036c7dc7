from newspulse.ranker.base import ArticleRanker
from newspulse.ranker.recency import QualityRecencyRanker

__all__ = ["ArticleRanker", "QualityRecencyRanker"]
