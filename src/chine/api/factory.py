from __future__ import annotations

from typing import TYPE_CHECKING

from chine.api.registries import DefaultLoggerRegistry, LoggerRegistry
from chine.application.machine import Machine

if TYPE_CHECKING:
    from chine.application.config import MachineConfig
    from chine.domain.events import EventBus
    from chine.domain.ports import LoggerPort


def create_machine(
    initial_state: str,
    *,
    event_bus: EventBus | None = None,
    logger: LoggerPort | None = None,
) -> Machine:
    """Convenience factory for an uncompiled `Machine`."""
    return Machine(initial_state, event_bus=event_bus, logger=logger)


def create_machine_from_config(
    config: MachineConfig,
    *,
    logger_registry: LoggerRegistry | None = None,
    event_bus: EventBus | None = None,
) -> Machine:
    """
    Construct an uncompiled `Machine` from config.

    The logger is built from `config.logger` through `logger_registry`
    (default: `DefaultLoggerRegistry`).
    """
    registry = logger_registry if logger_registry is not None else DefaultLoggerRegistry()
    return create_machine(
        config.initial_state,
        event_bus=event_bus,
        logger=registry.build(config.logger),
    )
