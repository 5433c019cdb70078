"""Factory helpers for building loaders and scripted transports in tests."""

from collections.abc import Callable, Iterable
from typing import Any

import httpx

from qlm.config import EventConfig
from qlm.coordinator import QuickLoadMore
from qlm.events import EventBus, EventKind, Notifier
from qlm.paginator import OffsetPaginator

SERVICE_URL = "/items"

Item = dict[str, Any]


def make_loader(
    client: httpx.AsyncClient,
    bus: EventBus,
    *,
    count: int = 50,
    low_item_threshold: int = 20,
    service_url: str = SERVICE_URL,
    **options: Any,
) -> QuickLoadMore[Item]:
    options.setdefault("paginator", OffsetPaginator(count=count))
    return QuickLoadMore(
        service_url,
        low_item_threshold=low_item_threshold,
        client=client,
        bus=bus,
        **options,
    )


def titles(items: Iterable[Item]) -> list[str]:
    return [item["title"] for item in items]


def expected_titles(first: int, last: int) -> list[str]:
    """Titles ``first``..``last`` inclusive, as the demo catalog names them."""
    return [f"title {i}" for i in range(first, last + 1)]


class EventRecorder:
    """Records lifecycle events published on a bus, by kind."""

    def __init__(self, bus: EventBus, config: EventConfig | None = None) -> None:
        self.received: list[EventKind] = []
        notifier = Notifier(config, bus)
        for kind in EventKind:
            bus.subscribe(notifier.event_name(kind), self._recorder(kind))

    def _recorder(self, kind: EventKind) -> Callable[[str], None]:
        def record(_name: str) -> None:
            self.received.append(kind)

        return record

    def count(self, kind: EventKind) -> int:
        return self.received.count(kind)


class ScriptedService:
    """Mock transport answering requests from a script of responses.

    Each entry is a JSON body, an ``httpx.Response``, or an exception to raise.
    The last entry repeats once the script runs out.
    """

    def __init__(self, *script: Any) -> None:
        self.script = list(script)
        self.urls: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.urls.append(request.url.raw_path.decode("ascii"))
        entry = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        if isinstance(entry, Exception):
            raise entry
        if isinstance(entry, httpx.Response):
            return entry
        return httpx.Response(200, json=entry)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=httpx.MockTransport(self.handler), base_url="http://test"
        )


def page(first: int, last: int, *, exhausted: bool | None = None) -> dict[str, Any]:
    """JSON body holding demo items ``first``..``last`` inclusive."""
    body: dict[str, Any] = {
        "items": [{"id": i, "title": f"title {i}"} for i in range(first, last + 1)]
    }
    if exhausted is not None:
        body["exhausted"] = exhausted
    return body
