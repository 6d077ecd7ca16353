from __future__ import annotations

from chine.domain.models.records import RunRecord, TransitionRecord
from chine.domain.models.snapshot import MachineSnapshot

__all__ = ["MachineSnapshot", "RunRecord", "TransitionRecord"]
