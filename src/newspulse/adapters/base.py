"""Source adapter protocol and the shared JSON fetch flow."""

import logging
from typing import Any, Protocol

import httpx

from newspulse.data import AdapterOutcome, Article, Query

logger = logging.getLogger(__name__)

_RECORD_FIELDS = ("feed", "articles")


class SourceAdapter(Protocol):
    """Interface for one news provider."""

    name: str

    async def fetch(self, query: Query) -> AdapterOutcome:
        """Fetch news for a query and normalize it into canonical articles.

        Implementations never raise for provider problems; transport errors,
        bad status codes and malformed payloads come back as a failed outcome.

        Args:
            query: The resolved asset query.

        Returns:
            Fulfilled outcome with articles, or a failed outcome with a reason.
        """
        ...


def extract_records(payload: Any) -> list[Any] | None:
    """Pull the list of news records out of a provider payload.

    Providers answer either with a bare list or with an object carrying a
    ``feed``/``articles`` list. Any other shape means "no data" and yields None.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in _RECORD_FIELDS:
            records = payload.get(key)
            if isinstance(records, list):
                return records
    return None


def text_field(record: dict[str, Any], key: str) -> str:
    """Read a string field from a raw record, returning "" when absent."""
    value = record.get(key)
    if value is None:
        return ""
    return str(value).strip()


def float_field(record: dict[str, Any], key: str) -> float | None:
    """Read a numeric field, returning None when absent or non-numeric."""
    value = record.get(key)
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class JSONNewsAdapter:
    """Base for adapters that issue one GET and receive JSON.

    Subclasses set ``name`` and implement :meth:`_endpoint`, :meth:`_params`
    and :meth:`_to_article`.

    Args:
        api_key: Provider credential.
        timeout_seconds: Transport timeout for the single outbound call.
    """

    name: str = "json"

    def __init__(self, *, api_key: str, timeout_seconds: float = 10.0) -> None:
        self._api_key = api_key
        self._timeout = timeout_seconds

    async def fetch(self, query: Query) -> AdapterOutcome:
        url = self._endpoint(query)
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(url, params=self._params(query))
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            reason = f"HTTP {exc.response.status_code}"
            logger.warning(f"{self.name}: request failed for {query.symbol}: {reason}")
            return AdapterOutcome.failed(self.name, reason)
        except httpx.HTTPError as exc:
            reason = f"{type(exc).__name__}: {exc}"
            logger.warning(f"{self.name}: transport error for {query.symbol}: {reason}")
            return AdapterOutcome.failed(self.name, reason)
        except ValueError as exc:
            logger.warning(f"{self.name}: undecodable body for {query.symbol}: {exc}")
            return AdapterOutcome.failed(self.name, f"invalid JSON: {exc}")

        records = extract_records(payload)
        if records is None:
            logger.warning(
                f"{self.name}: unexpected payload shape for {query.symbol}, treating as no data"
            )
            return AdapterOutcome.fulfilled(self.name, [])

        try:
            articles = [
                self._to_article(record, query) for record in records if isinstance(record, dict)
            ]
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            logger.warning(f"{self.name}: malformed record for {query.symbol}: {exc}")
            return AdapterOutcome.failed(self.name, f"malformed payload: {exc}")

        logger.info(f"{self.name}: {len(articles)} articles for {query.symbol}")
        return AdapterOutcome.fulfilled(self.name, articles)

    def _endpoint(self, query: Query) -> str:
        raise NotImplementedError

    def _params(self, query: Query) -> dict[str, str | int]:
        raise NotImplementedError

    def _to_article(self, record: dict[str, Any], query: Query) -> Article:
        raise NotImplementedError
