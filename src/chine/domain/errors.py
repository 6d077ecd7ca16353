from __future__ import annotations

from typing import Literal

EdgeDirection = Literal["incoming", "outgoing"]


class ChineError(Exception):
    """Base class for every error raised by the engine."""


# ---------------------------------------------------------------------------
# Declaration / compile-time errors. Unrecoverable for the machine that raised
# them: fix the declarations and rebuild.
# ---------------------------------------------------------------------------


class MachineDefinitionError(ChineError):
    pass


class MissingInitialState(MachineDefinitionError):
    def __init__(self) -> None:
        super().__init__("A machine requires a non-empty initial state name.")


class AlreadyCompiled(MachineDefinitionError):
    def __init__(self, message: str = "The machine has already been compiled.") -> None:
        super().__init__(message)


class DuplicateStateName(MachineDefinitionError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Duplicate state name {name!r}.")


class InvalidState(MachineDefinitionError):
    def __init__(self, message: str, *, name: str | None = None) -> None:
        self.name = name
        super().__init__(message)


class GraphError(MachineDefinitionError):
    def __init__(self, message: str, *, state: str, neighbor: str, direction: EdgeDirection) -> None:
        self.state = state
        self.neighbor = neighbor
        self.direction = direction
        super().__init__(message)


class DanglingEdge(GraphError):
    def __init__(self, *, state: str, neighbor: str, direction: EdgeDirection) -> None:
        preposition = "from" if direction == "incoming" else "to"
        super().__init__(
            f"State {state!r} allows {direction} transitions {preposition} "
            f"nonexistent state {neighbor!r}.",
            state=state,
            neighbor=neighbor,
            direction=direction,
        )


class AsymmetricEdge(GraphError):
    def __init__(self, *, state: str, neighbor: str, direction: EdgeDirection) -> None:
        opposite = "outgoing" if direction == "incoming" else "incoming"
        preposition = "from" if direction == "incoming" else "to"
        super().__init__(
            f"State {state!r} allows {direction} transitions {preposition} {neighbor!r}, "
            f"but {state!r} is not in {neighbor!r}'s {opposite} routes.",
            state=state,
            neighbor=neighbor,
            direction=direction,
        )


class InvalidInitialState(MachineDefinitionError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Invalid initial state {name!r}: no such state is defined.")


class UnreachableEnterHandler(MachineDefinitionError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"The initial state {name!r} has an enter handler that will never be called "
            "(it declares no incoming routes)."
        )


# ---------------------------------------------------------------------------
# Runtime errors. Recoverable by the caller; the machine stays in its last
# well-defined state.
# ---------------------------------------------------------------------------


class MachineRuntimeError(ChineError):
    pass


class MachineNotCompiled(MachineRuntimeError):
    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Cannot {operation} a machine that has not been compiled.")


class InvalidTransitionTarget(MachineRuntimeError):
    def __init__(self, message: str, *, source: str, target: str) -> None:
        self.source = source
        self.target = target
        super().__init__(message)


class IncomingTransitionDenied(MachineRuntimeError):
    def __init__(self, *, source: str, target: str) -> None:
        self.source = source
        self.target = target
        super().__init__(
            f"Cannot transition from {source!r} to {target!r}: "
            f"{source!r} is not in {target!r}'s incoming routes."
        )


class AlreadyRan(MachineRuntimeError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"State {name!r} has already run; transition out of it before running again."
        )


class MissingRunFunction(MachineRuntimeError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"State {name!r} has no run function.")


class SnapshotError(MachineRuntimeError):
    def __init__(self, errors: tuple[str, ...]) -> None:
        self.errors = errors
        super().__init__("\n".join(errors))
