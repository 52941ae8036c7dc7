"""Sentiment pipeline: fan out to adapters, then aggregate, score, rank, explain."""

import asyncio
import logging
import time
from collections.abc import Sequence
from enum import StrEnum
from pathlib import Path

from newspulse.adapters.base import SourceAdapter
from newspulse.aggregator import ArticleAggregator
from newspulse.data import AdapterOutcome, AggregateResult, Article, Mood, Query
from newspulse.errors import InternalPipelineError, UpstreamFailureError
from newspulse.ranker import ArticleRanker, QualityRecencyRanker
from newspulse.run_logger import RunLogger
from newspulse.sentiment import NEUTRAL_SCORE, SentimentScorer, mood_for
from newspulse.summary import describe_price_correlation, explain, explain_mood

logger = logging.getLogger(__name__)


class PipelineState(StrEnum):
    IDLE = "idle"
    DISPATCHED = "dispatched"
    PARTIAL_FAILURE = "partial_failure"
    ALL_FULFILLED = "all_fulfilled"
    AGGREGATED = "aggregated"
    SCORED = "scored"
    SELECTED = "selected"
    DONE = "done"
    FAILED = "failed"


_TRANSITIONS: dict[PipelineState, frozenset[PipelineState]] = {
    PipelineState.IDLE: frozenset({PipelineState.DISPATCHED}),
    PipelineState.DISPATCHED: frozenset(
        {PipelineState.PARTIAL_FAILURE, PipelineState.ALL_FULFILLED, PipelineState.FAILED}
    ),
    PipelineState.PARTIAL_FAILURE: frozenset({PipelineState.AGGREGATED, PipelineState.FAILED}),
    PipelineState.ALL_FULFILLED: frozenset({PipelineState.AGGREGATED, PipelineState.FAILED}),
    PipelineState.AGGREGATED: frozenset({PipelineState.SCORED, PipelineState.FAILED}),
    PipelineState.SCORED: frozenset({PipelineState.SELECTED, PipelineState.FAILED}),
    PipelineState.SELECTED: frozenset({PipelineState.DONE, PipelineState.FAILED}),
    PipelineState.DONE: frozenset(),
    PipelineState.FAILED: frozenset(),
}


class RunTracker:
    """State of a single pipeline run. Created per run, never shared."""

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        self.state = PipelineState.IDLE
        self.history: list[PipelineState] = [PipelineState.IDLE]

    def advance(self, new_state: PipelineState) -> None:
        if new_state not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"Illegal pipeline transition {self.state} -> {new_state}")
        logger.debug(f"{self.symbol}: {self.state} -> {new_state}")
        self.state = new_state
        self.history.append(new_state)


class SentimentPipeline:
    """Answer "what is the current news sentiment for this asset?".

    Flow:
    1. All adapters are called concurrently, each under its own timeout
    2. Fan-in waits for every outcome; failures degrade the input set
    3. Aggregator merges, deduplicates and filters
    4. Scorer annotates each article
    5. Ranker keeps the top ``top_k`` articles
    6. Scorer aggregates the digest, summary text is rendered

    Partial failure proceeds exactly like full success with fewer articles.
    Only the failure of every adapter ends the run with an error.

    A pipeline object holds only read-only collaborators and can serve
    concurrent runs.

    Args:
        adapters: Source adapters in registration order.
        aggregator: Merger/filter for adapter outcomes.
        scorer: Sentiment scorer.
        ranker: Digest ranker.
        top_k: Maximum digest size.
        adapter_timeout_seconds: Per-adapter deadline; a late adapter counts as failed.
        run_log_dir: If set, each run writes a JSON trace there.
    """

    def __init__(
        self,
        adapters: Sequence[SourceAdapter],
        *,
        aggregator: ArticleAggregator | None = None,
        scorer: SentimentScorer | None = None,
        ranker: ArticleRanker | None = None,
        top_k: int = 6,
        adapter_timeout_seconds: float = 10.0,
        run_log_dir: Path | None = None,
    ) -> None:
        if not adapters:
            raise ValueError("SentimentPipeline needs at least one source adapter")
        if top_k < 0:
            raise ValueError("top_k must be non-negative")
        self._adapters = tuple(adapters)
        self._aggregator = aggregator or ArticleAggregator()
        self._scorer = scorer or SentimentScorer()
        self._ranker = ranker or QualityRecencyRanker(default_k=top_k)
        self._top_k = top_k
        self._timeout = adapter_timeout_seconds
        self._run_log_dir = run_log_dir

    @property
    def adapter_names(self) -> list[str]:
        return [adapter.name for adapter in self._adapters]

    async def run(self, query: Query) -> AggregateResult:
        """Execute the pipeline for one query.

        Args:
            query: The resolved asset query.

        Returns:
            The ranked, scored digest.

        Raises:
            UpstreamFailureError: If every adapter failed.
            InternalPipelineError: If a later stage raised unexpectedly.
        """
        tracker = RunTracker(query.symbol)
        run_logger = RunLogger(
            self._run_log_dir or Path("logs"), enabled=self._run_log_dir is not None
        )
        run_logger.start_run("sentiment", query)

        # Fan-out / fan-in
        t0 = time.monotonic()
        tracker.advance(PipelineState.DISPATCHED)
        outcomes = await self._dispatch(query)
        failed = [o for o in outcomes if not o.ok]
        run_logger.log_stage(
            stage="dispatch",
            component="fan_out",
            input_data=self.adapter_names,
            output_data=[
                {
                    "adapter": o.adapter,
                    "status": o.status,
                    "articles": len(o.articles),
                    "reason": o.reason,
                }
                for o in outcomes
            ],
            duration_seconds=time.monotonic() - t0,
        )

        if len(failed) == len(outcomes):
            tracker.advance(PipelineState.FAILED)
            error = UpstreamFailureError(failed)
            logger.error(f"{query.symbol}: {error}")
            self._finish_log(run_logger, None, tracker, error=str(error))
            raise error

        if failed:
            tracker.advance(PipelineState.PARTIAL_FAILURE)
            logger.warning(
                f"{query.symbol}: continuing without {', '.join(o.adapter for o in failed)}"
            )
        else:
            tracker.advance(PipelineState.ALL_FULFILLED)

        try:
            result = self._assemble(query, outcomes, failed, tracker, run_logger)
        except Exception as exc:
            failed_in = tracker.state
            tracker.advance(PipelineState.FAILED)
            logger.exception(f"{query.symbol}: pipeline failed after state {failed_in}")
            self._finish_log(run_logger, None, tracker, error=f"{type(exc).__name__}: {exc}")
            raise InternalPipelineError("Unexpected error while building the news digest") from exc

        tracker.advance(PipelineState.DONE)
        logger.info(
            f"{query.symbol}: {len(result.articles)} articles, "
            f"score={result.sentiment_score} ({result.mood})"
        )
        self._finish_log(run_logger, result, tracker)
        return result

    async def _dispatch(self, query: Query) -> list[AdapterOutcome]:
        """Call every adapter concurrently and wait for all of them to settle.

        Outcomes come back in registration order regardless of completion order.
        """
        tasks = [self._fetch_with_timeout(adapter, query) for adapter in self._adapters]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        outcomes: list[AdapterOutcome] = []
        for adapter, result in zip(self._adapters, results, strict=True):
            if isinstance(result, BaseException):
                logger.warning(f"Adapter {adapter.name} raised: {result!r}")
                outcomes.append(
                    AdapterOutcome.failed(adapter.name, f"{type(result).__name__}: {result}")
                )
            else:
                outcomes.append(result)
        return outcomes

    async def _fetch_with_timeout(self, adapter: SourceAdapter, query: Query) -> AdapterOutcome:
        try:
            return await asyncio.wait_for(adapter.fetch(query), timeout=self._timeout)
        except TimeoutError:
            logger.warning(f"Adapter {adapter.name} timed out after {self._timeout}s")
            return AdapterOutcome.failed(adapter.name, f"timed out after {self._timeout}s")

    def _assemble(
        self,
        query: Query,
        outcomes: list[AdapterOutcome],
        failed: list[AdapterOutcome],
        tracker: RunTracker,
        run_logger: RunLogger,
    ) -> AggregateResult:
        # Aggregate
        t0 = time.monotonic()
        articles = self._aggregator.merge(outcomes, query)
        tracker.advance(PipelineState.AGGREGATED)
        run_logger.log_stage(
            stage="aggregation",
            component=type(self._aggregator).__name__,
            input_data={"article_count": sum(len(o.articles) for o in outcomes)},
            output_data={"article_count": len(articles)},
            duration_seconds=time.monotonic() - t0,
        )

        # Score
        t0 = time.monotonic()
        scored = self._scorer.annotate(articles)
        tracker.advance(PipelineState.SCORED)
        run_logger.log_stage(
            stage="scoring",
            component=type(self._scorer).__name__,
            input_data={"article_count": len(articles)},
            output_data=[_signal_summary(a) for a in scored],
            duration_seconds=time.monotonic() - t0,
        )

        # Select
        t0 = time.monotonic()
        selected = self._ranker.select(scored, self._top_k)
        tracker.advance(PipelineState.SELECTED)
        run_logger.log_stage(
            stage="selection",
            component=type(self._ranker).__name__,
            input_data={"article_count": len(scored), "k": self._top_k},
            output_data=[a.url for a in selected],
            duration_seconds=time.monotonic() - t0,
        )

        if selected:
            score = self._scorer.aggregate(selected)
            mood = mood_for(score)
        else:
            score, mood = NEUTRAL_SCORE, Mood.NEUTRAL

        return AggregateResult(
            symbol=query.symbol,
            asset_class=query.asset_class,
            articles=tuple(selected),
            sentiment_score=score,
            mood=mood,
            summary=explain(selected, score, mood, query.symbol),
            explanation=explain_mood(mood),
            price_correlation=describe_price_correlation(query.price_change, score),
            failed_sources=tuple(o.adapter for o in failed),
        )

    def _finish_log(
        self,
        run_logger: RunLogger,
        result: AggregateResult | None,
        tracker: RunTracker,
        *,
        error: str | None = None,
    ) -> None:
        run_logger.log_states(tracker.history)
        # A trace that cannot be written never changes the run's outcome.
        try:
            path = run_logger.finish_run(result, error=error)
        except OSError as e:
            logger.warning(f"{tracker.symbol}: could not write run log: {e}")
            return
        if path:
            logger.info(f"Run log written to: {path}")


def _signal_summary(article: Article) -> dict[str, object]:
    return {
        "url": article.url,
        "signal": article.normalized_sentiment,
        "source": article.signal_source,
    }
