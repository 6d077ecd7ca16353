from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

LoggerName = Literal["none", "jsonl"]
_LOGGER_NAMES: frozenset[str] = frozenset({"none", "jsonl"})


@dataclass(frozen=True, slots=True)
class LoggerConfig:
    """
    Transition/run logging configuration.

    - logger='none': logging disabled
    - logger='jsonl': append JSON lines under `logger_kwargs['log_dir']`
    """

    logger: LoggerName = "none"
    logger_kwargs: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.logger not in _LOGGER_NAMES:
            raise ValueError(
                f"LoggerConfig.logger must be one of {sorted(_LOGGER_NAMES)}, got {self.logger!r}"
            )
        if not isinstance(self.logger_kwargs, dict):
            raise ValueError("LoggerConfig.logger_kwargs must be a dict")


@dataclass(frozen=True, slots=True)
class MachineConfig:
    """Configuration for building a `Machine` through the api factory."""

    initial_state: str
    logger: LoggerConfig = field(default_factory=LoggerConfig)

    def __post_init__(self) -> None:
        if not isinstance(self.initial_state, str) or not self.initial_state.strip():
            raise ValueError("MachineConfig.initial_state must be a non-empty string")
