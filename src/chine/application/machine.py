from __future__ import annotations

import copy
import time
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypeAlias
from uuid import uuid4

from chine.application.snapshots import check_snapshot_compatible, parse_snapshot
from chine.domain.errors import (
    AlreadyCompiled,
    AlreadyRan,
    DuplicateStateName,
    IncomingTransitionDenied,
    InvalidTransitionTarget,
    MachineNotCompiled,
    MissingInitialState,
    MissingRunFunction,
)
from chine.domain.events import EventBus, EventHandler, InMemoryEventBus
from chine.domain.models import MachineSnapshot, RunRecord, TransitionRecord
from chine.domain.runtime import RuntimeContext, StateContext
from chine.domain.state import StateBuilder, StateDefinition
from chine.domain.validation import validate_graph

if TYPE_CHECKING:
    from chine.domain.ports import ClockPort, IdGeneratorPort, LoggerPort


StateDeclaration: TypeAlias = StateDefinition | Callable[[StateBuilder], object]


class _Inherit:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<inherit>"


_INHERIT: Any = _Inherit()


class _SystemClock:
    def now(self) -> float:
        return time.time()


class _UuidGenerator:
    def new_id(self) -> str:
        return uuid4().hex


class Machine:
    """
    Finite-state machine: declare states, compile, then drive.

    Declaration phase: `state()` registers definitions; neighbors may be
    referenced before they are declared. `compile()` validates the whole graph
    and freezes it. Execution phase: `run()` invokes the current state's run
    function at most once per visit; `transition()` moves along a declared
    edge (`leave` -> move -> `enter`).

    The compiled graph is immutable and shared by every `clone()`; each clone
    owns its own runtime context (position and user data).
    """

    def __init__(
        self,
        initial_state: str,
        *,
        event_bus: EventBus | None = None,
        logger: LoggerPort | None = None,
        clock: ClockPort | None = None,
        id_generator: IdGeneratorPort | None = None,
    ) -> None:
        if not isinstance(initial_state, str) or not initial_state.strip():
            raise MissingInitialState()
        self._initial_state = initial_state
        self._states: Mapping[str, StateDefinition] = {}
        self._compiled = False
        self._runtime: RuntimeContext | None = None
        self._visit = 0

        self._event_bus: EventBus = event_bus if event_bus is not None else InMemoryEventBus()
        self._logger = logger
        self._clock: ClockPort = clock if clock is not None else _SystemClock()
        self._id_generator: IdGeneratorPort = (
            id_generator if id_generator is not None else _UuidGenerator()
        )
        self._machine_id = self._id_generator.new_id()

    def __repr__(self) -> str:
        position = self._runtime.current_state if self._runtime is not None else None
        return (
            f"Machine(initial_state={self._initial_state!r}, compiled={self._compiled}, "
            f"current_state={position!r}, states={len(self._states)})"
        )

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def initial_state(self) -> str:
        return self._initial_state

    @property
    def compiled(self) -> bool:
        return self._compiled

    @property
    def machine_id(self) -> str:
        return self._machine_id

    @property
    def states(self) -> Mapping[str, StateDefinition]:
        return MappingProxyType(dict(self._states)) if not self._compiled else self._states

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    @property
    def current_state(self) -> str:
        return self._require_runtime("inspect").current_state

    @property
    def previous_state(self) -> str | None:
        return self._require_runtime("inspect").previous_state

    @property
    def has_run_current_state(self) -> bool:
        return self._require_runtime("inspect").has_run_current_state

    @property
    def data(self) -> dict[Any, Any]:
        return self._require_runtime("inspect").data

    def context(self, name: str) -> StateContext:
        runtime = self._require_runtime("inspect")
        try:
            return runtime.contexts[name]
        except KeyError as e:
            raise KeyError(f"Unknown state {name!r}. Available: {sorted(runtime.contexts)}") from e

    def outgoing_of(self, name: str, /) -> frozenset[str]:
        return self._states[name].outgoing

    def allowed_transitions(self) -> tuple[str, ...]:
        runtime = self._require_runtime("inspect")
        source = runtime.current_state
        return tuple(
            sorted(
                target
                for target in self._states[source].outgoing
                if source in self._states[target].incoming
            )
        )

    # ------------------------------------------------------------------
    # Declaration phase
    # ------------------------------------------------------------------

    def state(self, declaration: StateDeclaration, /) -> Machine:
        """
        Register a state from a `StateDefinition` or a setup callback.

        A setup callback receives a fresh `StateBuilder` and is invoked once,
        synchronously. Returns the machine for chaining.
        """
        if self._compiled:
            raise AlreadyCompiled("You cannot modify a machine once it has been compiled.")

        if isinstance(declaration, StateDefinition):
            definition = declaration
        else:
            definition = StateBuilder.from_setup(declaration)
        definition.validate()

        if definition.name in self._states:
            raise DuplicateStateName(definition.name)
        states = dict(self._states)
        states[definition.name] = definition
        self._states = states
        return self

    def compile(self) -> Machine:
        if self._compiled:
            raise AlreadyCompiled()
        validate_graph(self._states, self._initial_state)

        frozen = MappingProxyType(dict(self._states))
        self._states = frozen
        self._runtime = self._build_runtime()
        self._compiled = True
        return self

    # ------------------------------------------------------------------
    # Execution phase
    # ------------------------------------------------------------------

    def run(self, *args: Any, **kwargs: Any) -> Any:
        """
        Invoke the current state's run function with the given arguments.

        A state runs at most once per visit; a transition starts a new visit.
        Returns whatever the run function returns.
        """
        runtime = self._require_runtime("run")
        name = runtime.current_state
        if runtime.has_run_current_state:
            raise AlreadyRan(name)
        state = self._states[name]
        if state.on_run is None:
            raise MissingRunFunction(name)

        visit = self._visit
        runtime.has_run_current_state = True
        try:
            self._log_run(name)
            return state.on_run(runtime.contexts[name], *args, **kwargs)
        except Exception:
            # The visit did not complete; let the caller retry it.
            if self._visit == visit:
                runtime.has_run_current_state = False
            raise

    def transition(self, target: str, /) -> None:
        runtime = self._require_runtime("transition")
        source = runtime.current_state

        target_state = self._states.get(target)
        if target_state is None:
            raise InvalidTransitionTarget(
                f"Cannot transition to state {target!r}, which doesn't exist.",
                source=source,
                target=target,
            )
        if source not in target_state.incoming:
            raise IncomingTransitionDenied(source=source, target=target)

        source_state = self._states[source]
        if source_state.on_leave is not None:
            source_state.on_leave(runtime.contexts[source])

        runtime.previous_state = source
        runtime.current_state = target
        runtime.has_run_current_state = False
        self._visit += 1

        # The move has happened; the target is entered even if logging fails.
        try:
            self._log_transition(source, target)
        finally:
            if target_state.on_enter is not None:
                target_state.on_enter(runtime.contexts[target])

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def on(self, event: str, handler: EventHandler, /) -> Machine:
        self._event_bus.subscribe(event, handler)
        return self

    def off(self, event: str, handler: EventHandler, /) -> Machine:
        self._event_bus.unsubscribe(event, handler)
        return self

    def emit(self, event: str, /, *args: Any) -> None:
        self._event_bus.publish(event, *args)

    # ------------------------------------------------------------------
    # Clone / snapshot
    # ------------------------------------------------------------------

    def clone(
        self,
        *,
        event_bus: EventBus | None = None,
        logger: LoggerPort | None = _INHERIT,
    ) -> Machine:
        """
        Return an independent instance of the same compiled graph.

        The clone starts over at the initial state with empty user data; it
        does not copy this instance's position. It gets its own event bus
        unless one is given, and shares this instance's logger unless
        overridden.
        """
        self._require_compiled("clone")
        result = self._spawn(event_bus=event_bus, logger=logger)
        result._runtime = result._build_runtime()
        return result

    def snapshot(self) -> MachineSnapshot:
        runtime = self._require_runtime("serialize")
        return MachineSnapshot(
            current_state=runtime.current_state,
            previous_state=runtime.previous_state,
            has_run_current_state=runtime.has_run_current_state,
            data=copy.deepcopy(runtime.data),
            state_data={
                name: copy.deepcopy(context.data) for name, context in runtime.contexts.items()
            },
        )

    def serialize(self) -> dict[str, Any]:
        return self.snapshot().to_dict()

    def unserialize(
        self,
        snapshot: MachineSnapshot | Mapping[str, Any],
        /,
        *,
        event_bus: EventBus | None = None,
        logger: LoggerPort | None = _INHERIT,
    ) -> Machine:
        """
        Restore a snapshot into a new instance of this machine's graph.

        The snapshot may come from another machine, as long as that machine
        was compiled from the same declarations.
        """
        self._require_compiled("unserialize")
        parsed = parse_snapshot(snapshot)
        check_snapshot_compatible(parsed, frozenset(self._states))

        result = self._spawn(event_bus=event_bus, logger=logger)
        result._runtime = RuntimeContext.build(
            result,
            result._states,
            current_state=parsed.current_state,
            previous_state=parsed.previous_state,
            has_run_current_state=parsed.has_run_current_state,
            data=copy.deepcopy(parsed.data),
            state_data=copy.deepcopy(parsed.state_data),
        )
        return result

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _spawn(self, *, event_bus: EventBus | None, logger: LoggerPort | None) -> Machine:
        result = type(self)(
            self._initial_state,
            event_bus=event_bus,
            logger=self._logger if logger is _INHERIT else logger,
            clock=self._clock,
            id_generator=self._id_generator,
        )
        result._states = self._states
        result._compiled = True
        return result

    def _build_runtime(self) -> RuntimeContext:
        return RuntimeContext.build(self, self._states, current_state=self._initial_state)

    def _require_compiled(self, operation: str) -> None:
        if not self._compiled:
            raise MachineNotCompiled(operation)

    def _require_runtime(self, operation: str) -> RuntimeContext:
        self._require_compiled(operation)
        assert self._runtime is not None
        return self._runtime

    def _log_run(self, name: str) -> None:
        if self._logger is None:
            return
        self._logger.log_run(
            RunRecord(machine_id=self._machine_id, state=name, timestamp=self._clock.now())
        )

    def _log_transition(self, source: str, target: str) -> None:
        if self._logger is None:
            return
        self._logger.log_transition(
            TransitionRecord(
                machine_id=self._machine_id,
                from_state=source,
                to_state=target,
                timestamp=self._clock.now(),
            )
        )
