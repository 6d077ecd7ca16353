from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from chine.domain.models import RunRecord, TransitionRecord


class JsonlLogger:
    """
    Adapter: append machine transitions and runs to a JSON Lines file.

    Each line is a JSON object with a `type` key (`"transition"` or `"run"`)
    followed by the record's fields.
    """

    def __init__(self, log_dir: str | Path, file_name: str = "chine") -> None:
        self._log_dir = Path(log_dir)
        self._log_dir.mkdir(parents=True, exist_ok=True)
        self._path = self._log_dir / f"{file_name}.jsonl"

    @property
    def path(self) -> Path:
        return self._path

    def log_transition(self, record: TransitionRecord, /) -> None:
        self._write({"type": "transition", **record.to_dict()})

    def log_run(self, record: RunRecord, /) -> None:
        self._write({"type": "run", **record.to_dict()})

    def _write(self, entry: dict[str, Any]) -> None:
        with self._path.open("a", encoding="utf-8") as f:
            json.dump(entry, f)
            f.write("\n")
