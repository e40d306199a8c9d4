# minimachine/core/machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from minimachine.core.engine import TransitionOutcome, can_transition, transition
from minimachine.core.errors import ConfigurationError
from minimachine.core.events import Event
from minimachine.core.snapshot import Snapshot, copy_context
from minimachine.core.states import StateNode, build_transition_map
from minimachine.core.status import ActorStatus
from minimachine.core.transitions import Transition
from minimachine.core.validations import Validator

_MACHINE_KEYS = frozenset({"id", "initial", "context", "states", "on"})


class MachineDefinition:
    """
    Immutable description of a machine: its states, their transitions,
    machine-level (global) transitions, the initial state and the initial
    context.

    A definition is shared read-only by every actor created from it. The
    initial context is copied on every read, so no caller ever holds a
    reference into the definition's own copy.
    """

    __slots__ = ("_id", "_initial", "_context", "_states", "_global_transitions")

    def __init__(
        self,
        id: str,
        initial: str,
        states: Mapping[str, Union[StateNode, Mapping[str, Any], None]],
        context: Optional[Mapping[str, Any]] = None,
        on: Optional[Mapping[str, Any]] = None,
        validator: Optional[Validator] = None,
    ) -> None:
        """
        :param id: Diagnostic label for the machine.
        :param initial: Name of the state actors start in.
        :param states: State name -> StateNode (or state configuration).
        :param context: Initial context; copied with :func:`copy_context`.
        :param on: Global transitions, used when the current state has no
            transition for an event type.
        :param validator: Optional validator; the default checks the initial
            state and every transition target.
        :raises ConfigurationError: If the definition is malformed.
        """
        if not isinstance(states, Mapping):
            raise ConfigurationError(f"'states' must be a mapping, got {states!r}")
        self._id = str(id)
        self._initial = initial
        if context is None:
            context = {}
        if not isinstance(context, Mapping):
            raise ConfigurationError(f"Machine context must be a mapping, got {context!r}")
        self._context = copy_context(context)
        self._states: Mapping[str, StateNode] = MappingProxyType(
            {name: StateNode.from_config(node) for name, node in states.items()}
        )
        self._global_transitions = build_transition_map(on)
        (validator or Validator()).validate_definition(self)

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, "_global_transitions"):
            raise AttributeError("MachineDefinition is immutable")
        object.__setattr__(self, name, value)

    @property
    def id(self) -> str:
        return self._id

    @property
    def initial(self) -> str:
        """The initial state value."""
        return self._initial

    @property
    def initial_context(self) -> Dict[str, Any]:
        """A fresh copy of the initial context. Uncopyable values are shared."""
        return copy_context(self._context)

    @property
    def states(self) -> Mapping[str, StateNode]:
        return self._states

    @property
    def global_transitions(self) -> Mapping[str, Transition]:
        return self._global_transitions

    @property
    def state_values(self) -> Tuple[str, ...]:
        return tuple(self._states)

    def get_state_node(self, value: str) -> Optional[StateNode]:
        return self._states.get(value)

    def get_transition(self, value: str, event_type: str) -> Optional[Transition]:
        """
        Find the transition handling ``event_type`` in state ``value``.

        A transition defined on the state shadows a global transition for the
        same event type.
        """
        node = self._states.get(value)
        if node is not None:
            transition = node.get_transition(event_type)
            if transition is not None:
                return transition
        return self._global_transitions.get(event_type)

    def get_initial_snapshot(self) -> Snapshot:
        return Snapshot(value=self._initial, context=self.initial_context, status=ActorStatus.ACTIVE)

    def transition(
        self, snapshot: Snapshot, event: Union[Event, Mapping[str, Any], str]
    ) -> Optional[TransitionOutcome]:
        """Shortcut for :func:`minimachine.core.engine.transition` on this definition."""
        return transition(self, snapshot, event)

    def can(self, snapshot: Snapshot, event: Union[Event, Mapping[str, Any], str]) -> bool:
        return can_transition(self, snapshot, event)

    def __repr__(self) -> str:
        return f"MachineDefinition(id={self._id!r}, initial={self._initial!r}, states={list(self._states)!r})"


def create_machine(config: Mapping[str, Any], validator: Optional[Validator] = None) -> MachineDefinition:
    """
    Build a machine definition from a configuration mapping.

    Example:
        machine = create_machine({
            "id": "toggle",
            "initial": "inactive",
            "context": {"count": 0},
            "states": {
                "inactive": {"on": {"TOGGLE": "active"}},
                "active": {"on": {"TOGGLE": {"target": "inactive"}}},
            },
        })

    :raises ConfigurationError: If the configuration is malformed.
    """
    if not isinstance(config, Mapping):
        raise ConfigurationError(f"Machine configuration must be a mapping, got {config!r}")
    unknown = set(config) - _MACHINE_KEYS
    if unknown:
        raise ConfigurationError(f"Unknown machine keys: {sorted(unknown)}")
    for key in ("initial", "states"):
        if key not in config:
            raise ConfigurationError(f"Machine configuration is missing {key!r}")
    return MachineDefinition(
        id=config.get("id", "machine"),
        initial=config["initial"],
        states=config["states"],
        context=config.get("context"),
        on=config.get("on"),
        validator=validator,
    )
