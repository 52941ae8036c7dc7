"""Tests for SentimentPipeline."""

import asyncio
import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from conftest import make_article

from newspulse.data import AdapterOutcome, Article, Mood, Query
from newspulse.errors import InternalPipelineError, UpstreamFailureError
from newspulse.pipeline import PipelineState, RunTracker, SentimentPipeline


def make_adapter(name: str, outcome: AdapterOutcome | None = None, **fetch_kwargs) -> MagicMock:
    """Create a mock source adapter."""
    adapter = MagicMock()
    adapter.name = name
    if outcome is not None:
        adapter.fetch = AsyncMock(return_value=outcome)
    else:
        adapter.fetch = AsyncMock(**fetch_kwargs)
    return adapter


def apple_articles() -> list[Article]:
    return [
        make_article("Apple rally continues", "https://a.com/1", source="Reuters"),
        make_article("Apple faces lawsuit", "https://a.com/2", source="CNBC"),
        make_article("Apple holds event", "https://a.com/3", source="Bloomberg"),
    ]


class TestSentimentPipeline:
    def test_requires_an_adapter(self) -> None:
        with pytest.raises(ValueError, match="at least one"):
            SentimentPipeline([])

    async def test_partial_failure_uses_surviving_articles(self, aapl: Query) -> None:
        articles = apple_articles()

        async def never_returns(query: Query) -> AdapterOutcome:
            await asyncio.sleep(10)
            return AdapterOutcome.fulfilled("gnews", [])

        finnhub = make_adapter("finnhub", AdapterOutcome.fulfilled("finnhub", articles))
        gnews = make_adapter("gnews", side_effect=never_returns)
        pipeline = SentimentPipeline([finnhub, gnews], adapter_timeout_seconds=0.05)

        result = await pipeline.run(aapl)

        assert len(result.articles) == 3
        assert result.failed_sources == ("gnews",)
        # rally +1/3, lawsuit -1/3, event 0 -> 50
        assert result.sentiment_score == 50
        assert result.mood == Mood.NEUTRAL
        finnhub.fetch.assert_awaited_once_with(aapl)

    async def test_all_adapters_failed_raises(self, aapl: Query) -> None:
        pipeline = SentimentPipeline(
            [
                make_adapter("finnhub", AdapterOutcome.failed("finnhub", "HTTP 500")),
                make_adapter("gnews", AdapterOutcome.failed("gnews", "HTTP 403")),
            ]
        )

        with pytest.raises(UpstreamFailureError) as exc_info:
            await pipeline.run(aapl)

        assert [o.adapter for o in exc_info.value.outcomes] == ["finnhub", "gnews"]
        assert "finnhub, gnews" in str(exc_info.value)

    async def test_adapter_exception_becomes_failed_outcome(self, aapl: Query) -> None:
        pipeline = SentimentPipeline(
            [
                make_adapter("broken", side_effect=RuntimeError("boom")),
                make_adapter("finnhub", AdapterOutcome.fulfilled("finnhub", apple_articles())),
            ]
        )

        result = await pipeline.run(aapl)

        assert result.failed_sources == ("broken",)
        assert len(result.articles) == 3

    async def test_order_independent_of_completion(self, aapl: Query) -> None:
        slow_article = make_article("Apple slow", "https://slow.com/1")
        fast_article = make_article("Apple fast", "https://fast.com/1")

        async def slow(query: Query) -> AdapterOutcome:
            await asyncio.sleep(0.02)
            return AdapterOutcome.fulfilled("slow", [slow_article])

        pipeline = SentimentPipeline(
            [
                make_adapter("slow", side_effect=slow),
                make_adapter("fast", AdapterOutcome.fulfilled("fast", [fast_article])),
            ]
        )

        result = await pipeline.run(aapl)

        # Both undated with default signal, so the ranker keeps merge order.
        assert [a.url for a in result.articles] == [slow_article.url, fast_article.url]

    async def test_empty_selection_is_neutral(self, aapl: Query) -> None:
        pipeline = SentimentPipeline([make_adapter("finnhub", AdapterOutcome.fulfilled("finnhub", []))])

        result = await pipeline.run(aapl)

        assert result.articles == ()
        assert result.sentiment_score == 50
        assert result.mood == Mood.NEUTRAL
        assert result.summary == "No significant news found for AAPL."

    async def test_output_is_bounded(self, aapl: Query) -> None:
        articles = [make_article(f"Apple item {i}", f"https://a.com/{i}") for i in range(20)]
        pipeline = SentimentPipeline(
            [make_adapter("finnhub", AdapterOutcome.fulfilled("finnhub", articles))], top_k=4
        )

        result = await pipeline.run(aapl)

        assert len(result.articles) == 4
        assert 0 <= result.sentiment_score <= 100

    async def test_price_correlation_and_explanation(self) -> None:
        query = Query.from_symbol("AAPL", price_change=1.5)
        articles = [make_article("Apple shares surge to record", "https://a.com/1")]
        pipeline = SentimentPipeline(
            [make_adapter("finnhub", AdapterOutcome.fulfilled("finnhub", articles))]
        )

        result = await pipeline.run(query)

        assert result.mood == Mood.BULLISH
        assert "backed by the news" in result.price_correlation
        assert result.explanation.startswith("Most news is positive")

    async def test_internal_error_is_wrapped(self, aapl: Query) -> None:
        aggregator = MagicMock()
        aggregator.merge.side_effect = KeyError("bad")
        pipeline = SentimentPipeline(
            [make_adapter("finnhub", AdapterOutcome.fulfilled("finnhub", apple_articles()))],
            aggregator=aggregator,
        )

        with pytest.raises(InternalPipelineError) as exc_info:
            await pipeline.run(aapl)

        assert isinstance(exc_info.value.__cause__, KeyError)

    async def test_writes_run_log(self, aapl: Query, tmp_path: Path) -> None:
        pipeline = SentimentPipeline(
            [
                make_adapter("finnhub", AdapterOutcome.fulfilled("finnhub", apple_articles())),
                make_adapter("gnews", AdapterOutcome.failed("gnews", "HTTP 500")),
            ],
            run_log_dir=tmp_path,
        )

        await pipeline.run(aapl)

        [log_file] = list(tmp_path.glob("run_*.json"))
        data = json.loads(log_file.read_text())
        assert data["pipeline_type"] == "sentiment"
        assert data["query"]["symbol"] == "AAPL"
        assert data["final_article_count"] == 3
        stages = [s["stage"] for s in data["stages"]]
        assert stages == ["dispatch", "aggregation", "scoring", "selection"]
        assert data["failed_sources"] == ["gnews"]
        assert data["states"] == [
            "idle",
            "dispatched",
            "partial_failure",
            "aggregated",
            "scored",
            "selected",
            "done",
        ]

    async def test_failed_run_log_records_error(self, aapl: Query, tmp_path: Path) -> None:
        pipeline = SentimentPipeline(
            [make_adapter("finnhub", AdapterOutcome.failed("finnhub", "HTTP 500"))],
            run_log_dir=tmp_path,
        )

        with pytest.raises(UpstreamFailureError):
            await pipeline.run(aapl)

        [log_file] = list(tmp_path.glob("run_*.json"))
        data = json.loads(log_file.read_text())
        assert "All news sources failed" in data["error"]
        assert data["states"][-1] == "failed"

    async def test_no_run_log_by_default(self, aapl: Query, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        pipeline = SentimentPipeline(
            [make_adapter("finnhub", AdapterOutcome.fulfilled("finnhub", apple_articles()))]
        )

        await pipeline.run(aapl)

        assert not (tmp_path / "logs").exists()

    async def test_unwritable_run_log_keeps_result(self, aapl: Query, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("")
        pipeline = SentimentPipeline(
            [make_adapter("finnhub", AdapterOutcome.fulfilled("finnhub", apple_articles()))],
            run_log_dir=blocker / "logs",
        )

        result = await pipeline.run(aapl)

        assert len(result.articles) == 3

    async def test_unwritable_run_log_keeps_upstream_error(
        self, aapl: Query, tmp_path: Path
    ) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("")
        pipeline = SentimentPipeline(
            [make_adapter("finnhub", AdapterOutcome.failed("finnhub", "HTTP 500"))],
            run_log_dir=blocker / "logs",
        )

        with pytest.raises(UpstreamFailureError):
            await pipeline.run(aapl)


class TestRunTracker:
    def test_records_history(self) -> None:
        tracker = RunTracker("AAPL")
        tracker.advance(PipelineState.DISPATCHED)
        tracker.advance(PipelineState.ALL_FULFILLED)
        assert tracker.state == PipelineState.ALL_FULFILLED
        assert tracker.history == [
            PipelineState.IDLE,
            PipelineState.DISPATCHED,
            PipelineState.ALL_FULFILLED,
        ]

    def test_rejects_illegal_transition(self) -> None:
        tracker = RunTracker("AAPL")
        with pytest.raises(RuntimeError, match="Illegal pipeline transition"):
            tracker.advance(PipelineState.DONE)
