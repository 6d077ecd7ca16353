from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from chine.domain.models import RunRecord, TransitionRecord


class MachineControlPort(Protocol):
    """The control surface a state sub-context may reach on its machine."""

    @property
    def current_state(self) -> str: ...

    @property
    def previous_state(self) -> str | None: ...

    def outgoing_of(self, name: str, /) -> frozenset[str]: ...

    def transition(self, target: str, /) -> None: ...

    def run(self, *args: Any, **kwargs: Any) -> Any: ...

    def emit(self, event: str, /, *args: Any) -> None: ...


class LoggerPort(Protocol):
    """Receives a record of every transition and run of a machine instance."""

    def log_transition(self, record: TransitionRecord, /) -> None: ...

    def log_run(self, record: RunRecord, /) -> None: ...


class IdGeneratorPort(Protocol):
    def new_id(self) -> str: ...


class ClockPort(Protocol):
    def now(self) -> float: ...
