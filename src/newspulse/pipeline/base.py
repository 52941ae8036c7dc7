"""Pipeline protocol for asset news sentiment."""

from typing import Protocol

from newspulse.data import AggregateResult, Query


class Pipeline(Protocol):
    """Interface for end-to-end sentiment pipelines."""

    async def run(self, query: Query) -> AggregateResult:
        """Execute the pipeline for one asset query.

        Args:
            query: The resolved asset query.

        Returns:
            The ranked, scored digest.
        """
        ...
