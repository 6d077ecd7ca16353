from __future__ import annotations

from chine.application.config import LoggerConfig, LoggerName, MachineConfig
from chine.application.machine import Machine

__all__ = ["LoggerConfig", "LoggerName", "Machine", "MachineConfig"]
