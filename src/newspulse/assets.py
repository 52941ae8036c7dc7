"""Asset symbol normalization and keyword expansion."""

from __future__ import annotations

import logging

from newspulse.data import AssetClass, Query
from newspulse.errors import InvalidQueryError

logger = logging.getLogger(__name__)

# Ticker -> lowercase full name. Narrow symbol searches for crypto often return
# nothing, so adapters and the relevance filter also use the full name.
CRYPTO_NAMES: dict[str, str] = {
    "BTC": "bitcoin",
    "ETH": "ethereum",
    "SOL": "solana",
    "BNB": "binance coin",
    "MATIC": "polygon",
    "ADA": "cardano",
    "UNI": "uniswap",
    "XRP": "ripple",
    "DOGE": "dogecoin",
    "AVAX": "avalanche",
    "ATOM": "cosmos",
}

_CRYPTO_TICKERS: dict[str, str] = {name: ticker for ticker, name in CRYPTO_NAMES.items()}

COMPANY_NAMES: dict[str, str] = {
    "AAPL": "Apple",
    "MSFT": "Microsoft",
    "GOOGL": "Alphabet",
    "GOOG": "Alphabet",
    "AMZN": "Amazon",
    "META": "Meta",
    "NVDA": "Nvidia",
    "TSLA": "Tesla",
    "NFLX": "Netflix",
    "AMD": "AMD",
    "INTC": "Intel",
    "JPM": "JPMorgan",
}


def classify(symbol: str) -> AssetClass:
    """Return the asset class for an uppercase ticker."""
    if symbol in CRYPTO_NAMES:
        return AssetClass.CRYPTO
    return AssetClass.STOCK


def resolve_query(raw: str | None, *, price_change: float | None = None) -> Query:
    """Build a normalized :class:`Query` from user input.

    Accepts a ticker (``"aapl"``, ``"BTC"``) or a crypto name (``"Bitcoin"``).

    Raises:
        InvalidQueryError: If ``raw`` is missing or blank.
    """
    text = (raw or "").strip()
    if not text:
        raise InvalidQueryError("Missing asset")

    crypto_ticker = _CRYPTO_TICKERS.get(text.lower())
    symbol = crypto_ticker or text.upper()
    asset_class = classify(symbol)

    if asset_class == AssetClass.CRYPTO:
        name: str | None = CRYPTO_NAMES[symbol]
    else:
        name = COMPANY_NAMES.get(symbol)

    logger.debug(f"Resolved {raw!r} -> {symbol} ({asset_class}, name={name!r})")
    return Query(symbol=symbol, asset_class=asset_class, name=name, price_change=price_change)
