# tests/unit/test_machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import threading

import pytest

from minimachine.core.errors import ConfigurationError, InvalidInitialStateError, InvalidTargetError
from minimachine.core.machine import MachineDefinition, create_machine
from minimachine.core.snapshot import Snapshot
from minimachine.core.states import StateNode
from minimachine.core.status import ActorStatus
from minimachine.core.transitions import Transition


def test_create_machine_exposes_configuration(toggle_machine):
    assert toggle_machine.id == "toggle"
    assert toggle_machine.initial == "inactive"
    assert toggle_machine.state_values == ("inactive", "active")
    assert isinstance(toggle_machine.get_state_node("active"), StateNode)
    assert toggle_machine.get_state_node("missing") is None


def test_initial_context_is_a_fresh_copy_each_time():
    machine = create_machine({"initial": "a", "context": {"items": [1]}, "states": {"a": {}}})
    first = machine.initial_context
    first["items"].append(2)
    first["extra"] = True
    assert machine.initial_context == {"items": [1]}
    assert machine.initial_context is not machine.initial_context


def test_definition_does_not_alias_caller_context():
    context = {"items": [1]}
    machine = create_machine({"initial": "a", "context": context, "states": {"a": {}}})
    context["items"].append(2)
    assert machine.initial_context == {"items": [1]}


def test_uncopyable_initial_context_values_are_shared(make_actor):
    lock = threading.Lock()
    machine = create_machine({"initial": "a", "context": {"lock": lock, "items": [1]}, "states": {"a": {}}})
    assert machine.initial_context["lock"] is lock
    assert machine.initial_context["items"] == [1]
    assert machine.get_initial_snapshot().context["lock"] is lock
    assert make_actor(machine).get_snapshot().context["lock"] is lock


def test_missing_context_defaults_to_empty():
    machine = create_machine({"initial": "a", "states": {"a": None}})
    assert machine.initial_context == {}
    assert machine.id == "machine"


def test_initial_snapshot():
    machine = create_machine({"initial": "a", "context": {"n": 1}, "states": {"a": {}}})
    assert machine.get_initial_snapshot() == Snapshot("a", {"n": 1}, ActorStatus.ACTIVE)


def test_state_transition_shadows_global():
    machine = create_machine(
        {
            "initial": "a",
            "states": {"a": {"on": {"RESET": "b"}}, "b": {}, "c": {}},
            "on": {"RESET": "c", "HOME": "a"},
        }
    )
    assert machine.get_transition("a", "RESET").target == "b"
    assert machine.get_transition("b", "RESET").target == "c"
    assert machine.get_transition("b", "HOME").target == "a"
    assert machine.get_transition("b", "UNKNOWN") is None


def test_definition_is_immutable(toggle_machine):
    with pytest.raises(AttributeError):
        toggle_machine._initial = "active"
    with pytest.raises(TypeError):
        toggle_machine.states["new"] = StateNode()
    with pytest.raises(TypeError):
        toggle_machine.global_transitions["X"] = Transition()


def test_direct_construction_from_records():
    machine = MachineDefinition(
        id="direct",
        initial="a",
        states={"a": StateNode(on={"GO": Transition(target="b")}), "b": StateNode()},
    )
    assert machine.get_transition("a", "GO").target == "b"


def test_unknown_initial_fails_fast():
    with pytest.raises(InvalidInitialStateError) as exc:
        create_machine({"initial": "nowhere", "states": {"a": {}}})
    assert exc.value.initial == "nowhere"
    assert exc.value.known == ["a"]
    assert isinstance(exc.value, ConfigurationError)


def test_undefined_target_fails_fast():
    with pytest.raises(InvalidTargetError) as exc:
        create_machine({"initial": "a", "states": {"a": {"on": {"GO": "b"}}}})
    assert (exc.value.source, exc.value.event_type, exc.value.target) == ("a", "GO", "b")


def test_undefined_global_target_fails_fast():
    with pytest.raises(InvalidTargetError):
        create_machine({"initial": "a", "states": {"a": {}}, "on": {"GO": "b"}})


@pytest.mark.parametrize(
    "config",
    [
        "not a mapping",
        {"states": {"a": {}}},
        {"initial": "a"},
        {"initial": "a", "states": {"a": {}}, "extra": 1},
        {"initial": "a", "states": ["a"]},
        {"initial": "a", "states": {}},
        {"initial": "a", "states": {"a": {}}, "context": [1, 2]},
    ],
)
def test_malformed_configuration_rejected(config):
    with pytest.raises(ConfigurationError):
        create_machine(config)


def test_definition_delegates_to_engine(toggle_machine):
    snapshot = toggle_machine.get_initial_snapshot()
    assert toggle_machine.can(snapshot, {"type": "TOGGLE"}) is True
    assert toggle_machine.can(snapshot, {"type": "INCREMENT"}) is False
    assert toggle_machine.transition(snapshot, "TOGGLE").target == "active"
