from __future__ import annotations

from chine.adapters.logger.jsonl import JsonlLogger

__all__ = ["JsonlLogger"]
