from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from chine.application.config import LoggerConfig
from chine.domain.ports import LoggerPort


class LoggerRegistry(Protocol):
    """Select/build a `LoggerPort` (or None) from `LoggerConfig`."""

    def build(self, config: LoggerConfig, /) -> LoggerPort | None: ...


@dataclass(frozen=True, slots=True)
class DefaultLoggerRegistry(LoggerRegistry):
    """
    Default logger registry.

    Supported values:
    - logger='none': disables logging
    - logger='jsonl': JSONL file logger (requires `log_dir`)
    """

    def build(self, config: LoggerConfig, /) -> LoggerPort | None:
        match config.logger:
            case "none":
                return None
            case "jsonl":
                log_dir = config.logger_kwargs.get("log_dir")
                if not isinstance(log_dir, str) or not log_dir.strip():
                    raise ValueError("LoggerConfig for 'jsonl' requires logger_kwargs['log_dir']")
                file_name = config.logger_kwargs.get("file_name", "chine")
                if not isinstance(file_name, str) or not file_name.strip():
                    raise ValueError(
                        "LoggerConfig.logger_kwargs['file_name'] must be a non-empty string"
                    )

                from chine.adapters.logger import JsonlLogger

                return JsonlLogger(log_dir=log_dir, file_name=file_name)
            case _:
                # LoggerConfig validation rejects unknown names; the registry is
                # also reachable with hand-built configs.
                raise ValueError(f"Unknown logger: {config.logger!r}")
