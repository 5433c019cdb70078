from qlm.config import EventConfig, EventNames
from qlm.events import EventBus, EventKind, Notifier


def test_publish_reaches_subscribers_in_order() -> None:
    bus = EventBus()
    received: list[str] = []
    bus.subscribe("qlm.loadStarted", lambda name: received.append(f"first:{name}"))
    bus.subscribe("qlm.loadStarted", lambda name: received.append(f"second:{name}"))

    bus.publish("qlm.loadStarted")
    bus.publish("qlm.loadFinished")

    assert received == ["first:qlm.loadStarted", "second:qlm.loadStarted"]


def test_unsubscribe_stops_delivery() -> None:
    bus = EventBus()
    received: list[str] = []
    unsubscribe = bus.subscribe("qlm.error", received.append)

    bus.publish("qlm.error")
    unsubscribe()
    bus.publish("qlm.error")
    unsubscribe()

    assert received == ["qlm.error"]


def test_failing_listener_does_not_block_others() -> None:
    bus = EventBus()
    received: list[str] = []

    def broken(_name: str) -> None:
        raise RuntimeError("listener bug")

    bus.subscribe("qlm.exhausted", broken)
    bus.subscribe("qlm.exhausted", received.append)

    bus.publish("qlm.exhausted")

    assert received == ["qlm.exhausted"]


def test_notifier_uses_namespace_and_default_names() -> None:
    notifier = Notifier(EventConfig(), EventBus())

    assert [notifier.event_name(kind) for kind in EventKind] == [
        "qlm.loadStarted",
        "qlm.loadFinished",
        "qlm.error",
        "qlm.exhausted",
    ]


def test_notifier_publishes_configured_names() -> None:
    bus = EventBus()
    received: list[str] = []
    config = EventConfig(namespace="products", names=EventNames(load_started="busy"))
    bus.subscribe("products.busy", received.append)
    bus.subscribe("products.loadFinished", received.append)

    notifier = Notifier(config, bus)
    notifier.emit(EventKind.LOAD_STARTED)
    notifier.emit(EventKind.LOAD_FINISHED)

    assert received == ["products.busy", "products.loadFinished"]
