from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class TransitionRecord:
    """One completed transition of a machine instance."""

    machine_id: str
    from_state: str
    to_state: str
    timestamp: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "machine_id": self.machine_id,
            "from_state": self.from_state,
            "to_state": self.to_state,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True, slots=True)
class RunRecord:
    """One invocation of a state's run function."""

    machine_id: str
    state: str
    timestamp: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "machine_id": self.machine_id,
            "state": self.state,
            "timestamp": self.timestamp,
        }
