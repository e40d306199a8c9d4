# minimachine/core/states.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from minimachine.core.actions import Action, to_action
from minimachine.core.errors import ConfigurationError
from minimachine.core.transitions import Transition, as_tuple

_STATE_KEYS = frozenset({"entry", "exit", "on"})


def build_transition_map(config: Optional[Mapping[str, Any]]) -> Mapping[str, Transition]:
    """Build a read-only event type -> Transition map from configuration."""
    if config is None:
        return MappingProxyType({})
    if not isinstance(config, Mapping):
        raise ConfigurationError(f"'on' must be a mapping of event types to transitions, got {config!r}")
    return MappingProxyType({str(event_type): Transition.from_config(t) for event_type, t in config.items()})


@dataclass(frozen=True)
class StateNode:
    """
    Represents one state of a machine: actions run on becoming current
    (``entry``), actions run on ceasing to be current (``exit``), and the
    transitions handled while current (``on``).
    """

    entry: Tuple[Action, ...] = field(default_factory=tuple)
    exit: Tuple[Action, ...] = field(default_factory=tuple)
    on: Mapping[str, Transition] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entry", tuple(to_action(a) for a in as_tuple(self.entry)))
        object.__setattr__(self, "exit", tuple(to_action(a) for a in as_tuple(self.exit)))
        object.__setattr__(self, "on", build_transition_map(self.on))

    @classmethod
    def from_config(cls, config: Any) -> "StateNode":
        """
        Build a state node from a StateNode, None (an empty state) or a
        mapping with any of ``entry``, ``exit`` and ``on``.
        """
        if isinstance(config, StateNode):
            return config
        if config is None:
            return cls()
        if not isinstance(config, Mapping):
            raise ConfigurationError(f"Cannot build a state from {config!r}")
        unknown = set(config) - _STATE_KEYS
        if unknown:
            raise ConfigurationError(f"Unknown state keys: {sorted(unknown)}")
        return cls(entry=config.get("entry"), exit=config.get("exit"), on=config.get("on"))

    def get_transition(self, event_type: str) -> Optional[Transition]:
        return self.on.get(event_type)
