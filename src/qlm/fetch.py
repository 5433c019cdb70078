"""Fetch executor: one GET per page against the item service.

Builds the page URL from the static query parameters and the current
pagination state, issues the request through an ``httpx.AsyncClient`` and
turns the JSON body into a ``FetchResult``. Any client can be injected, so
tests route requests through ``httpx.ASGITransport`` or ``httpx.MockTransport``.
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from qlm.config import ParameterValue
from qlm.exceptions import ServiceContractViolation, TransportError
from qlm.logging import get_logger

ItemExtractor = Callable[[Any], Iterable[Any]]
ExhaustionPredicate = Callable[[Any], bool]

# Errors an extractor or predicate raises on a body that does not have the expected shape
_CONTRACT_ERRORS = (KeyError, IndexError, TypeError, AttributeError, ValueError)


def extract_items(response: Any) -> Iterable[Any]:
    """Default item extractor: the ``items`` field of the response body."""
    return response["items"]  # type: ignore[no-any-return]


def is_exhausted(response: Any) -> bool:
    """Default exhaustion predicate: the ``exhausted`` field, false when absent."""
    return bool(response.get("exhausted", False))


def _format_value(value: ParameterValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_url(
    service_url: str, *mappings: Mapping[str, ParameterValue | list[ParameterValue]]
) -> str:
    """Build a page URL by concatenating the mappings' parameters in order.

    List values repeat their key once per element::

        >>> build_url("/items", {"start": 0}, {"tags": ["cool", "awesome"]})
        '/items?start=0&tags=cool&tags=awesome'

    An empty parameter set still yields the trailing ``?``. Values are not
    percent-encoded here.
    """
    pairs: list[str] = []
    for mapping in mappings:
        for name, value in mapping.items():
            if isinstance(value, list):
                pairs.extend(f"{name}={_format_value(v)}" for v in value)
            else:
                pairs.append(f"{name}={_format_value(value)}")
    return service_url + "?" + "&".join(pairs)


@dataclass(frozen=True)
class FetchResult[T]:
    """Items and exhaustion flag read from one response."""

    items: list[T]
    exhausted: bool
    url: str


class FetchExecutor[T]:
    """Issues page requests and interprets their responses.

    The executor owns the client only when it created it; ``aclose()`` leaves
    an injected client open.
    """

    def __init__(
        self,
        service_url: str,
        *,
        client: httpx.AsyncClient | None = None,
        extract_items: ItemExtractor = extract_items,
        is_exhausted: ExhaustionPredicate = is_exhausted,
        timeout: float = 10.0,
    ) -> None:
        self.service_url = service_url
        self._log = get_logger(__name__, service_url=service_url)
        self._extract_items = extract_items
        self._is_exhausted = is_exhausted
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(timeout=timeout)

    def build_url(self, *mappings: Mapping[str, ParameterValue | list[ParameterValue]]) -> str:
        return build_url(self.service_url, *mappings)

    async def fetch(
        self, *mappings: Mapping[str, ParameterValue | list[ParameterValue]]
    ) -> FetchResult[T]:
        """Fetch one page.

        Raises:
            TransportError: the request failed or returned a non-2xx status.
            ServiceContractViolation: the body is not JSON, or the extractor
                or predicate could not read it.
        """
        url = self.build_url(*mappings)
        self._log.debug("fetch_issued", url=url)
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            self._log.warning(
                "fetch_failed", url=url, error=str(exc), error_type=type(exc).__name__
            )
            raise TransportError(url, f"Request failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            self._log.warning("fetch_failed", url=url, error="response body is not JSON")
            raise ServiceContractViolation(url, "Response body is not JSON") from exc

        try:
            extracted = self._extract_items(payload)
            if isinstance(extracted, str | bytes | Mapping):
                raise TypeError(f"items must be a sequence, got {type(extracted).__name__}")
            items: list[T] = list(extracted)
            exhausted = bool(self._is_exhausted(payload))
        except _CONTRACT_ERRORS as exc:
            self._log.warning("fetch_failed", url=url, error=repr(exc), error_type="contract")
            raise ServiceContractViolation(url, f"Unreadable response: {exc!r}") from exc

        self._log.debug("fetch_completed", url=url, item_count=len(items), exhausted=exhausted)
        return FetchResult(items=items, exhausted=exhausted, url=url)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
