from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient, Request

from qlm.events import EventBus
from qlm.service import create_app
from qlm.service.catalog import Catalog
from tests.factories import EventRecorder

# Fixtures in tests/seeds.py are only visible to pytest when registered here.
pytest_plugins = ["tests.seeds"]


@pytest.fixture
def request_log() -> list[str]:
    """Path and query of every request a client fixture sends, in order."""
    return []


@pytest_asyncio.fixture
async def client(catalog: Catalog, request_log: list[str]) -> AsyncIterator[AsyncClient]:
    """HTTP client wired to a reference service serving ``catalog``."""

    async def record(request: Request) -> None:
        request_log.append(request.url.raw_path.decode("ascii"))

    async with AsyncClient(
        transport=ASGITransport(app=create_app(catalog)),
        base_url="http://test",
        event_hooks={"request": [record]},
    ) as client:
        yield client


@pytest.fixture
def bus() -> EventBus:
    """A private event bus so tests never see each other's events."""
    return EventBus()


@pytest.fixture
def events(bus: EventBus) -> EventRecorder:
    return EventRecorder(bus)
