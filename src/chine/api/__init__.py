"""
Public API layer: factories and registries used to assemble machines.
"""

from __future__ import annotations

from chine.api.factory import create_machine, create_machine_from_config
from chine.api.registries import DefaultLoggerRegistry, LoggerRegistry

__all__ = [
    "DefaultLoggerRegistry",
    "LoggerRegistry",
    "create_machine",
    "create_machine_from_config",
]
