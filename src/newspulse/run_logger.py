"""Per-run JSON traces of pipeline stages."""

import dataclasses
import uuid
from collections.abc import Sequence
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from newspulse.data import AggregateResult


class StageRecord(BaseModel):
    """One executed stage: what went in, what came out, how long it took."""

    stage: str
    component: str
    at: datetime
    duration_seconds: float = 0.0
    input: Any = None
    output: Any = None


class RunRecord(BaseModel):
    """Everything recorded about one pipeline run."""

    run_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    pipeline_type: str
    query: dict[str, Any]
    started_at: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))
    completed_at: datetime | None = None
    stages: list[StageRecord] = Field(default_factory=list)
    states: list[str] = Field(default_factory=list)
    failed_sources: list[str] = Field(default_factory=list)
    final_article_count: int = 0
    sentiment_score: int | None = None
    mood: str | None = None
    error: str | None = None

    @property
    def filename(self) -> str:
        return f"run_{self.started_at:%Y-%m-%dT%H-%M-%S}_{self.run_id[:8]}.json"


def _serialize(obj: Any) -> Any:
    """Convert pipeline values into JSON-compatible data.

    Enums become their values, datetimes ISO strings, dataclasses and
    mappings dicts, sequences lists. Unknown objects fall back to ``repr``.
    """
    if isinstance(obj, Enum):
        return obj.value
    if obj is None or isinstance(obj, bool | int | float | str):
        return obj
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, dict):
        return {str(k): _serialize(v) for k, v in obj.items()}
    if isinstance(obj, list | tuple | set | frozenset):
        return [_serialize(item) for item in obj]
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: _serialize(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    return repr(obj)


class RunLogger:
    """Collects stage records for a single run and writes them as one JSON file.

    Disabled loggers accept every call and record nothing. An instance holds
    one in-flight record, so the pipeline creates a fresh logger per run.

    Args:
        log_dir: Directory for ``run_<timestamp>_<id>.json`` files.
        enabled: If False, nothing is recorded or written.
    """

    def __init__(self, log_dir: Path, *, enabled: bool = True) -> None:
        self._log_dir = log_dir
        self._enabled = enabled
        self._record: RunRecord | None = None
        self._last_log_path: Path | None = None

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def last_log_path(self) -> Path | None:
        """Path of the most recently written file, if any."""
        return self._last_log_path

    def start_run(self, pipeline_type: str, query: Any) -> None:
        if self._enabled:
            self._record = RunRecord(pipeline_type=pipeline_type, query=_serialize(query))

    def log_stage(
        self,
        stage: str,
        component: str,
        input_data: Any,
        output_data: Any,
        duration_seconds: float,
    ) -> None:
        """Append a stage to the current run; ignored when no run is open."""
        if self._record is None:
            return
        self._record.stages.append(
            StageRecord(
                stage=stage,
                component=component,
                at=datetime.now(tz=UTC),
                duration_seconds=round(duration_seconds, 4),
                input=_serialize(input_data),
                output=_serialize(output_data),
            )
        )

    def log_states(self, states: Sequence[Enum | str]) -> None:
        """Store the state transitions the run went through."""
        if self._record is not None:
            self._record.states = [_serialize(state) for state in states]

    def finish_run(
        self,
        result: AggregateResult | None,
        *,
        error: str | None = None,
    ) -> Path | None:
        """Close the current run and write it to disk.

        Args:
            result: Final digest, or None when the run failed.
            error: Failure description for a failed run.

        Returns:
            The written file, or None when disabled or no run was started.
        """
        record, self._record = self._record, None
        if record is None:
            return None

        record.completed_at = datetime.now(tz=UTC)
        record.error = error
        if result is not None:
            record.final_article_count = len(result.articles)
            record.sentiment_score = result.sentiment_score
            record.mood = result.mood.value
            record.failed_sources = list(result.failed_sources)

        self._log_dir.mkdir(parents=True, exist_ok=True)
        path = self._log_dir / record.filename
        path.write_text(record.model_dump_json(indent=2))
        self._last_log_path = path
        return path
