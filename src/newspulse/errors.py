"""Exception types surfaced by the pipeline."""

from newspulse.data import AdapterOutcome


class NewsPulseError(Exception):
    """Base class for errors the pipeline reports to its caller."""


class InvalidQueryError(NewsPulseError, ValueError):
    """The requested asset is missing or blank."""


class UpstreamFailureError(NewsPulseError):
    """Every source adapter failed, so there is nothing to aggregate."""

    def __init__(self, outcomes: list[AdapterOutcome]) -> None:
        self.outcomes = outcomes
        names = ", ".join(o.adapter for o in outcomes) or "none"
        super().__init__(f"All news sources failed ({names})")


class InternalPipelineError(NewsPulseError):
    """An unexpected fault after the fan-in stage."""
