from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from chine.domain.errors import SnapshotError
from chine.domain.models import MachineSnapshot

_SNAPSHOT_ADAPTER: TypeAdapter[MachineSnapshot] = TypeAdapter(MachineSnapshot)


def parse_snapshot(payload: MachineSnapshot | Mapping[str, Any]) -> MachineSnapshot:
    """
    Validate a serialized machine snapshot.

    Accepts either a `MachineSnapshot` or the plain mapping produced by
    `Machine.serialize()` (e.g. after a JSON round trip).
    """
    if isinstance(payload, MachineSnapshot):
        return payload
    if not isinstance(payload, Mapping):
        raise SnapshotError((f"Snapshot must be a mapping, got {type(payload).__name__}.",))
    try:
        return _SNAPSHOT_ADAPTER.validate_python(dict(payload))
    except PydanticValidationError as exc:
        raise SnapshotError(
            tuple(
                f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
                for error in exc.errors()
            )
        ) from exc


def check_snapshot_compatible(snapshot: MachineSnapshot, state_names: frozenset[str]) -> None:
    """Ensure every state a snapshot refers to exists in the restoring graph."""
    errors: list[str] = []
    if snapshot.current_state not in state_names:
        errors.append(f"Unknown current state {snapshot.current_state!r}.")
    if snapshot.previous_state is not None and snapshot.previous_state not in state_names:
        errors.append(f"Unknown previous state {snapshot.previous_state!r}.")
    unknown = sorted(set(snapshot.state_data) - state_names)
    if unknown:
        errors.append(f"Snapshot carries data for unknown states: {unknown}")
    if errors:
        raise SnapshotError(tuple(errors))
