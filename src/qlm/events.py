"""Lifecycle events.

``EventBus`` is an in-memory publish/subscribe point keyed by event name.
``default_bus`` is the process-wide instance loaders publish to unless they
are given another one. ``Notifier`` maps the four event kinds to their
configured, namespaced names.

    from qlm.events import default_bus

    unsubscribe = default_bus.subscribe("qlm.loadStarted", show_spinner)
"""

from collections import defaultdict
from collections.abc import Callable
from enum import StrEnum

from qlm.config import EventConfig
from qlm.logging import get_logger

logger = get_logger(__name__)

Listener = Callable[[str], None]


class EventKind(StrEnum):
    LOAD_STARTED = "load_started"
    LOAD_FINISHED = "load_finished"
    ERROR = "error"
    EXHAUSTED = "exhausted"


class EventBus:
    """Synchronous pub/sub. Events carry no payload beyond their name."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def subscribe(self, name: str, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for ``name``; returns a function that unsubscribes it."""
        self._listeners[name].append(listener)

        def unsubscribe() -> None:
            self.unsubscribe(name, listener)

        return unsubscribe

    def unsubscribe(self, name: str, listener: Listener) -> None:
        listeners = self._listeners.get(name)
        if listeners and listener in listeners:
            listeners.remove(listener)
            if not listeners:
                self._listeners.pop(name, None)

    def publish(self, name: str) -> None:
        """Call every listener of ``name`` in subscription order.

        A listener that raises is logged and skipped; delivery to the others
        continues.
        """
        for listener in list(self._listeners.get(name, [])):
            try:
                listener(name)
            except Exception:
                logger.exception("event_listener_failed", event_name=name)


default_bus = EventBus()


class Notifier:
    """Publishes lifecycle events under their configured names."""

    def __init__(self, config: EventConfig | None = None, bus: EventBus | None = None) -> None:
        self.config = config if config is not None else EventConfig()
        self.bus = bus if bus is not None else default_bus

    def event_name(self, kind: EventKind) -> str:
        return f"{self.config.namespace}.{getattr(self.config.names, kind.value)}"

    def emit(self, kind: EventKind) -> None:
        self.bus.publish(self.event_name(kind))
