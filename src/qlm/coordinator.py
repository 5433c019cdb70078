"""Prefetch coordinator.

``QuickLoadMore`` answers "give me N more items" from a local buffer and keeps
that buffer topped up ahead of demand. Three paths through ``request(n)``:

1. A fetch is in flight: wait for it to settle, then start over. Any number
   of concurrent callers coalesce onto the same fetch this way.
2. The buffer already holds N items: hand them out immediately. If that
   leaves fewer than ``low_item_threshold`` items, start one background fetch
   without waiting for it (no load events for it).
3. Otherwise: emit ``load_started``, fetch page after page until the buffer
   holds N items or the service reports exhaustion, hand out up to N items,
   emit ``load_finished``.

At most one fetch is ever in flight. It is tracked by ``_ongoing``, which is
cleared before any waiter resumes, and pagination state only advances after
a fetch succeeds.

Usage:
    async with QuickLoadMore("https://api.example.com/items", low_item_threshold=20) as qlm:
        items = await qlm.request(10)
"""

import asyncio
from collections.abc import Coroutine
from typing import Any, Self

import httpx
from pydantic import ValidationError

from qlm import config as qlm_config
from qlm.buffer import ItemBuffer
from qlm.config import ClientSettings, EventConfig, LoaderConfig, ParameterValue, QueryParameters
from qlm.events import EventBus, EventKind, Notifier
from qlm.exceptions import ConfigurationError, FetchError
from qlm.fetch import (
    ExhaustionPredicate,
    FetchExecutor,
    ItemExtractor,
    extract_items,
    is_exhausted,
)
from qlm.logging import get_logger
from qlm.paginator import OffsetPaginator, PaginationState, Paginator


class QuickLoadMore[T]:
    """Predictive item loader for "load more" interactions."""

    def __init__(
        self,
        service_url: str | None,
        *,
        low_item_threshold: int = 20,
        query_parameters: QueryParameters | None = None,
        paginator: Paginator | None = None,
        extract_items: ItemExtractor = extract_items,
        is_exhausted: ExhaustionPredicate = is_exhausted,
        events: EventConfig | dict[str, Any] | None = None,
        bus: EventBus | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        # The only critically required option.
        if not service_url:
            raise ConfigurationError("No service URL provided.")
        try:
            self.config = LoaderConfig(
                service_url=service_url,
                low_item_threshold=low_item_threshold,
                query_parameters=query_parameters or {},
                events=events if events is not None else EventConfig(),
            )
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid loader configuration: {exc}") from exc

        self._paginator: Paginator = paginator if paginator is not None else OffsetPaginator()
        self._state: PaginationState = self._paginator.initial_state()
        self._buffer: ItemBuffer[T] = ItemBuffer()
        self._executor: FetchExecutor[T] = FetchExecutor(
            service_url,
            client=client,
            extract_items=extract_items,
            is_exhausted=is_exhausted,
            timeout=timeout,
        )
        self._notifier = Notifier(self.config.events, bus)
        self._log = get_logger(__name__, service_url=service_url)
        # The fetch currently in flight, foreground chain or background page.
        self._ongoing: asyncio.Task[Any] | None = None

    @classmethod
    def from_settings(cls, settings: ClientSettings | None = None, **overrides: Any) -> Self:
        """Build a loader from ``QLM_*`` environment settings.

        Keyword overrides win over settings, e.g. ``client=`` or ``paginator=``.
        """
        settings = settings if settings is not None else qlm_config.settings
        options: dict[str, Any] = {
            "low_item_threshold": settings.low_item_threshold,
            "timeout": settings.request_timeout,
            "events": EventConfig(namespace=settings.event_namespace),
        }
        if "paginator" not in overrides:
            options["paginator"] = OffsetPaginator(count=settings.page_size)
        options.update(overrides)
        return cls(settings.service_url, **options)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def local_cache(self) -> tuple[T, ...]:
        """Buffered items not yet handed out, front first."""
        return self._buffer.snapshot()

    @property
    def pagination_state(self) -> PaginationState:
        """Copy of the state the next fetch will use."""
        return dict(self._state)

    @property
    def fetching(self) -> bool:
        return self._ongoing is not None

    @property
    def fetched_total(self) -> int:
        return self._buffer.fetched_total

    @property
    def delivered_total(self) -> int:
        return self._buffer.delivered_total

    def build_url(self, *mappings: QueryParameters | PaginationState) -> str:
        return self._executor.build_url(*mappings)

    # ------------------------------------------------------------------
    # Static query parameters
    # ------------------------------------------------------------------
    def set_parameter(self, name: str, value: ParameterValue | list[ParameterValue]) -> None:
        """Set a static query parameter; used from the next fetch on."""
        self.config.query_parameters[name] = value

    def get_parameter(self, name: str) -> ParameterValue | list[ParameterValue] | None:
        return self.config.query_parameters.get(name)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    async def request(self, number_of_items: int) -> list[T]:
        """Return up to ``number_of_items`` items, fewer only if the service ran out.

        Raises:
            ValueError: ``number_of_items`` is negative.
            FetchError: a fetch this call was waiting on failed.
        """
        if number_of_items < 0:
            raise ValueError(f"number_of_items must not be negative, got {number_of_items}")
        if number_of_items == 0:
            return []

        await self.wait_until_idle()

        if len(self._buffer) >= number_of_items:
            items = self._buffer.take(number_of_items)
            if len(self._buffer) < self.config.low_item_threshold:
                self._start(self._prefetch())
            return items

        task = self._start(self._load(number_of_items))
        # A cancelled caller must not cancel the fetch chain.
        return await asyncio.shield(task)

    async def wait_until_idle(self) -> None:
        """Wait until no fetch is in flight. Fetch errors are not raised here."""
        while self._ongoing is not None:
            await asyncio.wait({self._ongoing})

    async def aclose(self) -> None:
        """Let the in-flight fetch settle, then close the HTTP client if we own it."""
        await self.wait_until_idle()
        await self._executor.aclose()
        self._log.debug("loader_closed")

    async def _load(self, number_of_items: int) -> list[T]:
        self._notifier.emit(EventKind.LOAD_STARTED)
        self._log.debug("load_started", requested=number_of_items, buffered=len(self._buffer))
        try:
            while len(self._buffer) < number_of_items:
                if await self._fetch_page():
                    break
        except Exception:
            self._release()
            self._notifier.emit(EventKind.LOAD_FINISHED)
            self._notifier.emit(EventKind.ERROR)
            raise
        else:
            items = self._buffer.take(number_of_items)
            self._notifier.emit(EventKind.LOAD_FINISHED)
        finally:
            self._release()

        self._log.debug("load_finished", delivered=len(items), buffered=len(self._buffer))
        return items

    async def _prefetch(self) -> None:
        try:
            await self._fetch_page()
        except FetchError as exc:
            self._log.warning("background_fetch_failed", url=exc.url, error=exc.message)
        except Exception:
            self._log.exception("background_fetch_failed")
        finally:
            self._release()

    async def _fetch_page(self) -> bool:
        """Fetch the next page into the buffer. Returns whether the service is exhausted."""
        result = await self._executor.fetch(self.config.query_parameters, self._state)
        self._state = self._paginator.advance(self._state)
        added = self._buffer.extend(result.items)

        exhausted = result.exhausted
        if not added and not exhausted:
            # An empty page that does not claim exhaustion would loop forever.
            self._log.warning("empty_page_treated_as_exhausted", url=result.url)
            exhausted = True
        if exhausted:
            self._notifier.emit(EventKind.EXHAUSTED)
        return exhausted

    def _start[R](self, fetch: Coroutine[Any, Any, R]) -> asyncio.Task[R]:
        task = asyncio.create_task(fetch)
        self._ongoing = task
        # Also covers a task cancelled before its body ever ran.
        task.add_done_callback(self._release)
        return task

    def _release(self, task: asyncio.Future[Any] | None = None) -> None:
        if task is None:
            task = asyncio.current_task()
        if self._ongoing is not None and self._ongoing is task:
            self._ongoing = None
