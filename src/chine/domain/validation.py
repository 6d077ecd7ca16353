from __future__ import annotations

from typing import TYPE_CHECKING

from chine.domain.errors import (
    AsymmetricEdge,
    DanglingEdge,
    InvalidInitialState,
    UnreachableEnterHandler,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from chine.domain.state import StateDefinition


def validate_graph(states: Mapping[str, StateDefinition], initial_state: str) -> None:
    """
    Check that a set of state definitions forms a closed, symmetric graph.

    Every edge must be declared on both ends: if A lists B as outgoing, B must
    list A as incoming, and vice versa. Raises on the first violation; states
    are visited in declaration order and neighbors in sorted order so the
    reported error is deterministic.
    """
    for name, state in states.items():
        for neighbor in sorted(state.incoming):
            source = states.get(neighbor)
            if source is None:
                raise DanglingEdge(state=name, neighbor=neighbor, direction="incoming")
            if name not in source.outgoing:
                raise AsymmetricEdge(state=name, neighbor=neighbor, direction="incoming")

        for neighbor in sorted(state.outgoing):
            target = states.get(neighbor)
            if target is None:
                raise DanglingEdge(state=name, neighbor=neighbor, direction="outgoing")
            if name not in target.incoming:
                raise AsymmetricEdge(state=name, neighbor=neighbor, direction="outgoing")

    initial = states.get(initial_state)
    if initial is None:
        raise InvalidInitialState(initial_state)
    # Entry handlers only fire through transition(), so an initial state that
    # nothing can transition into would never run its handler.
    if initial.on_enter is not None and not initial.incoming:
        raise UnreachableEnterHandler(initial_state)

