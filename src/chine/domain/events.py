from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeAlias

EventHandler: TypeAlias = Callable[..., object]


class EventBus(Protocol):
    def subscribe(self, event: str, handler: EventHandler, /) -> None: ...

    def unsubscribe(self, event: str, handler: EventHandler, /) -> None: ...

    def publish(self, event: str, /, *args: Any) -> None: ...


@dataclass(slots=True)
class InMemoryEventBus(EventBus):
    """
    Synchronous publish/subscribe.

    Handlers run in subscription order on the publisher's call stack; an
    exception raised by a handler propagates to whoever emitted the event.
    """

    _handlers: dict[str, list[EventHandler]] = field(default_factory=dict)

    def subscribe(self, event: str, handler: EventHandler, /) -> None:
        self._handlers.setdefault(event, []).append(handler)

    def unsubscribe(self, event: str, handler: EventHandler, /) -> None:
        handlers = self._handlers.get(event)
        if not handlers or handler not in handlers:
            return
        handlers.remove(handler)
        if not handlers:
            del self._handlers[event]

    def publish(self, event: str, /, *args: Any) -> None:
        # Snapshot so handlers may (un)subscribe while being notified.
        for handler in tuple(self._handlers.get(event, ())):
            handler(*args)

    def listener_count(self, event: str) -> int:
        return len(self._handlers.get(event, ()))
