from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeAlias

from chine.domain.errors import InvalidState

if TYPE_CHECKING:
    from chine.domain.runtime import StateContext


LifecycleHook: TypeAlias = "Callable[[StateContext], None]"
RunHook: TypeAlias = Callable[..., Any]


@dataclass(frozen=True, slots=True)
class StateDefinition:
    """
    Immutable description of one state.

    `incoming` lists the states allowed to transition *into* this one and
    `outgoing` the states this one may transition *to*. Callbacks receive the
    state's `StateContext` as their first argument; `on_run` also receives
    whatever the caller passed to `Machine.run()`.
    """

    name: str
    incoming: frozenset[str] = frozenset()
    outgoing: frozenset[str] = frozenset()
    on_enter: LifecycleHook | None = None
    on_leave: LifecycleHook | None = None
    on_run: RunHook | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "incoming", _as_names(self.incoming))
        object.__setattr__(self, "outgoing", _as_names(self.outgoing))

    @property
    def is_terminal(self) -> bool:
        return not self.outgoing

    def validate(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidState(f"The state {self!r} does not have a name.")
        if not self.incoming and not self.outgoing:
            raise InvalidState(
                f"The state {self.name!r} has no incoming or outgoing routes.", name=self.name
            )
        if self.outgoing and self.on_run is None:
            raise InvalidState(
                f"The state {self.name!r} has outgoing routes but no run function.",
                name=self.name,
            )


class _Unset:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<unset>"


_UNSET: Any = _Unset()


class StateBuilder:
    """
    Transient, mutable builder handed to a state setup callback.

    Each accessor sets its field when called with an argument (returning the
    builder, so calls can be chained) and returns the current value when
    called without one:

        def setup(state: StateBuilder) -> None:
            state.name("wait").incoming("initial").outgoing("success", "initial")
            state.run(lambda ctx, text: ...)
    """

    def __init__(self) -> None:
        self._name: str | None = None
        self._incoming: frozenset[str] = frozenset()
        self._outgoing: frozenset[str] = frozenset()
        self._enter: LifecycleHook | None = None
        self._leave: LifecycleHook | None = None
        self._run: RunHook | None = None

    @classmethod
    def from_setup(cls, setup: Callable[[StateBuilder], object]) -> StateDefinition:
        builder = cls()
        setup(builder)
        return builder.build()

    def name(self, value: str = _UNSET) -> Any:
        if value is _UNSET:
            return self._name
        self._name = value
        return self

    def incoming(self, *names: str) -> Any:
        if not names:
            return self._incoming
        self._incoming = frozenset(names)
        return self

    def outgoing(self, *names: str) -> Any:
        if not names:
            return self._outgoing
        self._outgoing = frozenset(names)
        return self

    def enter(self, callback: LifecycleHook | None = _UNSET) -> Any:
        if callback is _UNSET:
            return self._enter
        self._enter = callback
        return self

    def leave(self, callback: LifecycleHook | None = _UNSET) -> Any:
        if callback is _UNSET:
            return self._leave
        self._leave = callback
        return self

    def run(self, callback: RunHook | None = _UNSET) -> Any:
        if callback is _UNSET:
            return self._run
        self._run = callback
        return self

    def build(self) -> StateDefinition:
        return StateDefinition(
            name=self._name or "",
            incoming=self._incoming,
            outgoing=self._outgoing,
            on_enter=self._enter,
            on_leave=self._leave,
            on_run=self._run,
        )


def _as_names(names: Iterable[str]) -> frozenset[str]:
    if isinstance(names, str):
        # A bare string is one name, not a sequence of characters.
        return frozenset((names,))
    return frozenset(names)
