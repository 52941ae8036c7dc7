"""Template text for the digest: summary sentence, mood note, price note."""

from collections.abc import Sequence

from newspulse.data import Article, Mood

NO_NEWS_MESSAGE = "No significant news found for {symbol}."
NO_PRICE_DATA = "No price data given."

_MOOD_EXPLANATIONS = {
    Mood.BULLISH: "Most news is positive. Investors feel optimistic.",
    Mood.BEARISH: "Most news is negative. Investors feel worried.",
    Mood.NEUTRAL: "News is neutral.",
}

_CORRELATION_NOTES = {
    (True, True): "Price is up and news sentiment is positive: the move is backed by the news.",
    (False, False): "Price is down and news sentiment is negative: the drop matches the news.",
    (True, False): "Price is up while news sentiment is negative: the rally is not supported by the news.",
    (False, True): "Price is down while news sentiment is positive: the dip runs against the news.",
}


def explain(selected: Sequence[Article], score: int, mood: Mood, symbol: str) -> str:
    """One sentence naming mood, score and the leading article.

    Callers must pass score 50 / Neutral for an empty selection; the text for
    that case never mentions a verdict.
    """
    if not selected:
        return NO_NEWS_MESSAGE.format(symbol=symbol)
    lead = selected[0]
    source = lead.source or lead.provider or "an unnamed source"
    return f'{mood.value} sentiment for {symbol} ({score}/100), led by {source}: "{lead.title}".'


def explain_mood(mood: Mood) -> str:
    """Plain-language reading of a mood."""
    return _MOOD_EXPLANATIONS[mood]


def describe_price_correlation(price_change: float | None, score: int) -> str:
    """Compare price direction with sentiment direction.

    A zero price change counts as up and a score of exactly 50 counts as
    positive.
    """
    if price_change is None:
        return NO_PRICE_DATA
    return _CORRELATION_NOTES[(price_change >= 0, score >= 50)]
