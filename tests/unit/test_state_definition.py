from __future__ import annotations

import pytest

from chine.domain.errors import InvalidState
from chine.domain.state import StateBuilder, StateDefinition


def _noop(*_: object) -> None:
    return None


@pytest.mark.unit
def test_state_definition_coerces_neighbor_iterables_to_frozensets() -> None:
    state = StateDefinition(name="a", incoming=["b", "c", "b"], outgoing=("d",), on_run=_noop)  # type: ignore[arg-type]

    assert state.incoming == frozenset({"b", "c"})
    assert state.outgoing == frozenset({"d"})
    assert isinstance(state.incoming, frozenset)


@pytest.mark.unit
def test_state_definition_treats_bare_string_as_single_name() -> None:
    state = StateDefinition(name="a", incoming="initial")  # type: ignore[arg-type]

    assert state.incoming == frozenset({"initial"})


@pytest.mark.unit
def test_state_definition_is_immutable() -> None:
    state = StateDefinition(name="a", incoming={"b"})

    with pytest.raises(AttributeError):
        state.name = "other"  # type: ignore[misc]


@pytest.mark.unit
@pytest.mark.parametrize("name", ["", "   "])
def test_validate_rejects_missing_name(name: str) -> None:
    with pytest.raises(InvalidState, match="does not have a name"):
        StateDefinition(name=name, incoming={"b"}).validate()


@pytest.mark.unit
def test_validate_rejects_isolated_state() -> None:
    with pytest.raises(InvalidState, match="no incoming or outgoing routes") as excinfo:
        StateDefinition(name="lonely", on_run=_noop).validate()
    assert excinfo.value.name == "lonely"


@pytest.mark.unit
def test_validate_requires_run_function_when_state_has_outgoing_routes() -> None:
    with pytest.raises(InvalidState, match="no run function"):
        StateDefinition(name="a", outgoing={"b"}).validate()


@pytest.mark.unit
def test_validate_allows_terminal_state_without_run_function() -> None:
    state = StateDefinition(name="sink", incoming={"a"})

    state.validate()
    assert state.is_terminal


@pytest.mark.unit
def test_builder_accessors_set_and_read_fields() -> None:
    def enter(ctx: object) -> None:
        return None

    builder = StateBuilder()
    assert builder.name() is None
    assert builder.incoming() == frozenset()
    assert builder.run() is None

    result = builder.name("wait").incoming("initial").outgoing("success", "initial").enter(enter)

    assert result is builder
    assert builder.name() == "wait"
    assert builder.incoming() == frozenset({"initial"})
    assert builder.outgoing() == frozenset({"success", "initial"})
    assert builder.enter() is enter
    assert builder.leave() is None


@pytest.mark.unit
def test_builder_incoming_replaces_previous_names() -> None:
    builder = StateBuilder().incoming("a", "b")
    builder.incoming("c")

    assert builder.incoming() == frozenset({"c"})


@pytest.mark.unit
def test_from_setup_invokes_callback_once_and_builds_definition() -> None:
    calls: list[StateBuilder] = []

    def setup(state: StateBuilder) -> None:
        calls.append(state)
        state.name("initial").outgoing("next").run(_noop)

    definition = StateBuilder.from_setup(setup)

    assert len(calls) == 1
    assert definition == StateDefinition(name="initial", outgoing={"next"}, on_run=_noop)


@pytest.mark.unit
def test_from_setup_without_name_builds_invalid_definition() -> None:
    definition = StateBuilder.from_setup(lambda state: state.incoming("a"))

    with pytest.raises(InvalidState):
        definition.validate()
