"""
Pure engine domain: state definitions, graph validation, runtime contexts.

Nothing here imports an outer layer or a third-party library.
"""

from __future__ import annotations

from chine.domain.events import EventBus, EventHandler, InMemoryEventBus
from chine.domain.runtime import RuntimeContext, StateContext
from chine.domain.state import StateBuilder, StateDefinition
from chine.domain.validation import validate_graph

__all__ = [
    "EventBus",
    "EventHandler",
    "InMemoryEventBus",
    "RuntimeContext",
    "StateBuilder",
    "StateContext",
    "StateDefinition",
    "validate_graph",
]
