from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from chine.domain.errors import InvalidTransitionTarget

if TYPE_CHECKING:
    from collections.abc import Iterable

    from chine.domain.ports import MachineControlPort


class StateContext:
    """
    Per-state view of a running machine, passed to every state callback.

    `data` belongs to this state only; `shared` is the instance-wide dict seen
    by every state of the same running machine. Position is read-only here:
    moving the machine goes through `transition()`.
    """

    __slots__ = ("_control", "data", "shared", "state_name")

    def __init__(
        self,
        state_name: str,
        control: MachineControlPort,
        shared: dict[Any, Any],
        data: dict[Any, Any] | None = None,
    ) -> None:
        self.state_name = state_name
        self.shared = shared
        self.data: dict[Any, Any] = {} if data is None else data
        self._control = control

    def __repr__(self) -> str:
        return f"StateContext(state_name={self.state_name!r}, data={self.data!r})"

    @property
    def current_state(self) -> str:
        return self._control.current_state

    @property
    def previous_state(self) -> str | None:
        return self._control.previous_state

    def transition(self, target: str) -> None:
        if not target:
            raise InvalidTransitionTarget(
                "A state name is required when transitioning.",
                source=self._control.current_state,
                target=target,
            )
        current = self._control.current_state
        if target not in self._control.outgoing_of(current):
            raise InvalidTransitionTarget(
                f"Cannot transition from {current!r} to {target!r}: "
                f"{target!r} is not in {current!r}'s outgoing routes.",
                source=current,
                target=target,
            )
        self._control.transition(target)

    def run(self, *args: Any, **kwargs: Any) -> Any:
        return self._control.run(*args, **kwargs)

    def emit(self, event: str, *args: Any) -> None:
        self._control.emit(event, *args)


@dataclass(slots=True)
class RuntimeContext:
    """Mutable execution state of one machine instance."""

    current_state: str
    previous_state: str | None = None
    has_run_current_state: bool = False
    data: dict[Any, Any] = field(default_factory=dict)
    contexts: dict[str, StateContext] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        control: MachineControlPort,
        state_names: Iterable[str],
        *,
        current_state: str,
        previous_state: str | None = None,
        has_run_current_state: bool = False,
        data: dict[Any, Any] | None = None,
        state_data: dict[str, dict[Any, Any]] | None = None,
    ) -> RuntimeContext:
        shared: dict[Any, Any] = {} if data is None else data
        per_state = state_data or {}
        runtime = cls(
            current_state=current_state,
            previous_state=previous_state,
            has_run_current_state=has_run_current_state,
            data=shared,
        )
        for name in state_names:
            runtime.contexts[name] = StateContext(name, control, shared, per_state.get(name))
        return runtime
