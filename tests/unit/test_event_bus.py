from __future__ import annotations

import pytest

from chine.domain.events import InMemoryEventBus


@pytest.mark.unit
def test_publish_delivers_to_handlers_in_subscription_order() -> None:
    bus = InMemoryEventBus()
    calls: list[tuple[str, tuple[object, ...]]] = []
    bus.subscribe("done", lambda *args: calls.append(("first", args)))
    bus.subscribe("done", lambda *args: calls.append(("second", args)))

    bus.publish("done", 1, "x")

    assert calls == [("first", (1, "x")), ("second", (1, "x"))]


@pytest.mark.unit
def test_publish_without_listeners_is_a_noop() -> None:
    InMemoryEventBus().publish("nobody-listens", 1)


@pytest.mark.unit
def test_unsubscribe_removes_only_that_handler() -> None:
    bus = InMemoryEventBus()
    calls: list[str] = []

    def first() -> None:
        calls.append("first")

    def second() -> None:
        calls.append("second")

    bus.subscribe("e", first)
    bus.subscribe("e", second)
    bus.unsubscribe("e", first)
    bus.unsubscribe("e", first)
    bus.unsubscribe("other", second)
    bus.publish("e")

    assert calls == ["second"]
    assert bus.listener_count("e") == 1


@pytest.mark.unit
def test_handler_may_unsubscribe_itself_while_being_notified() -> None:
    bus = InMemoryEventBus()
    calls: list[str] = []

    def once() -> None:
        calls.append("once")
        bus.unsubscribe("e", once)

    bus.subscribe("e", once)
    bus.subscribe("e", lambda: calls.append("always"))
    bus.publish("e")
    bus.publish("e")

    assert calls == ["once", "always", "always"]


@pytest.mark.unit
def test_handler_errors_propagate_to_publisher() -> None:
    bus = InMemoryEventBus()

    def broken() -> None:
        raise ValueError("handler failed")

    bus.subscribe("e", broken)

    with pytest.raises(ValueError, match="handler failed"):
        bus.publish("e")
