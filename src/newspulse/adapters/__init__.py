from newspulse.adapters.alphavantage import AlphaVantageAdapter
from newspulse.adapters.base import JSONNewsAdapter, SourceAdapter, extract_records
from newspulse.adapters.finnhub import FinnhubAdapter
from newspulse.adapters.gnews import GNewsAdapter

__all__ = [
    "AlphaVantageAdapter",
    "FinnhubAdapter",
    "GNewsAdapter",
    "JSONNewsAdapter",
    "SourceAdapter",
    "extract_records",
]
