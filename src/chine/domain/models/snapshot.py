from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class MachineSnapshot:
    """
    Data-only capture of a running machine's position and user data.

    Live bindings (transition/emit/run proxies, the machine itself) are never
    part of a snapshot; they are rebuilt when the snapshot is restored. User
    data is opaque: its keys and values are carried as-is. Parsing untrusted
    payloads back into a snapshot is `chine.application.snapshots.parse_snapshot`.
    """

    current_state: str
    previous_state: str | None = None
    has_run_current_state: bool = False
    data: dict[Any, Any] = field(default_factory=dict)
    state_data: dict[str, dict[Any, Any]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "current_state": self.current_state,
            "previous_state": self.previous_state,
            "has_run_current_state": self.has_run_current_state,
            "data": dict(self.data),
            "state_data": {name: dict(values) for name, values in self.state_data.items()},
        }
