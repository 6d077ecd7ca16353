from __future__ import annotations

from pathlib import Path

import pytest

from chine import Machine, StateDefinition, create_machine, create_machine_from_config
from chine.adapters.logger import JsonlLogger
from chine.application.config import LoggerConfig, MachineConfig
from chine.domain.events import InMemoryEventBus
from tests.fakes_ports import CollectingLogger


class _StaticLoggerRegistry:
    def __init__(self, logger: CollectingLogger) -> None:
        self.logger = logger
        self.configs: list[LoggerConfig] = []

    def build(self, config: LoggerConfig, /) -> CollectingLogger:
        self.configs.append(config)
        return self.logger


@pytest.mark.unit
def test_create_machine_returns_uncompiled_machine() -> None:
    bus = InMemoryEventBus()

    machine = create_machine("initial", event_bus=bus)

    assert isinstance(machine, Machine)
    assert machine.initial_state == "initial"
    assert machine.compiled is False
    assert machine.event_bus is bus


@pytest.mark.unit
def test_create_machine_from_config_uses_logger_registry() -> None:
    logger = CollectingLogger()
    registry = _StaticLoggerRegistry(logger)
    config = MachineConfig(initial_state="a")

    machine = create_machine_from_config(config, logger_registry=registry)
    machine.state(
        StateDefinition(name="a", outgoing={"b"}, on_run=lambda ctx: ctx.transition("b"))
    ).state(StateDefinition(name="b", incoming={"a"})).compile()
    machine.run()

    assert registry.configs == [config.logger]
    assert [(r.from_state, r.to_state) for r in logger.transitions] == [("a", "b")]


@pytest.mark.unit
def test_create_machine_from_config_defaults_to_default_registry(tmp_path: Path) -> None:
    config = MachineConfig(
        initial_state="a",
        logger=LoggerConfig(logger="jsonl", logger_kwargs={"log_dir": str(tmp_path)}),
    )

    machine = create_machine_from_config(config)

    assert isinstance(machine._logger, JsonlLogger)
