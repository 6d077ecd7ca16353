"""
chine

A finite-state-machine definition and execution engine: declare states with
explicit incoming/outgoing routes, compile the graph once, then drive any
number of independent instances of it.
"""

from __future__ import annotations

from chine._meta import __version__
from chine.api import create_machine, create_machine_from_config
from chine.application import LoggerConfig, Machine, MachineConfig
from chine.domain import InMemoryEventBus, StateBuilder, StateContext, StateDefinition
from chine.domain.errors import (
    AlreadyCompiled,
    AlreadyRan,
    AsymmetricEdge,
    ChineError,
    DanglingEdge,
    DuplicateStateName,
    GraphError,
    IncomingTransitionDenied,
    InvalidInitialState,
    InvalidState,
    InvalidTransitionTarget,
    MachineDefinitionError,
    MachineNotCompiled,
    MachineRuntimeError,
    MissingInitialState,
    MissingRunFunction,
    SnapshotError,
    UnreachableEnterHandler,
)
from chine.domain.models import MachineSnapshot

__all__ = [
    "AlreadyCompiled",
    "AlreadyRan",
    "AsymmetricEdge",
    "ChineError",
    "DanglingEdge",
    "DuplicateStateName",
    "GraphError",
    "InMemoryEventBus",
    "IncomingTransitionDenied",
    "InvalidInitialState",
    "InvalidState",
    "InvalidTransitionTarget",
    "LoggerConfig",
    "Machine",
    "MachineConfig",
    "MachineDefinitionError",
    "MachineNotCompiled",
    "MachineRuntimeError",
    "MachineSnapshot",
    "MissingInitialState",
    "MissingRunFunction",
    "SnapshotError",
    "StateBuilder",
    "StateContext",
    "StateDefinition",
    "UnreachableEnterHandler",
    "__version__",
    "create_machine",
    "create_machine_from_config",
]
