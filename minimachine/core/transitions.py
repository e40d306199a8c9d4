# minimachine/core/transitions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple

from minimachine.core.actions import Action, to_action
from minimachine.core.errors import ConfigurationError
from minimachine.core.guards import Guard, to_guard

_TRANSITION_KEYS = frozenset({"target", "actions", "guards", "reenter"})


def as_tuple(value: Any) -> Tuple[Any, ...]:
    """Normalize a single item, a sequence or None into a tuple."""
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return (value,)


@dataclass(frozen=True)
class Transition:
    """
    Defines what happens when an event is handled: an optional target state,
    the actions to run, the guards that must all pass, and whether exit and
    entry actions run even when the target is the current state.

    A transition with no target keeps the current state. Unless ``reenter``
    is set, such a transition runs only its own actions.
    """

    target: Optional[str] = None
    actions: Tuple[Action, ...] = field(default_factory=tuple)
    guards: Tuple[Guard, ...] = field(default_factory=tuple)
    reenter: bool = False

    def __post_init__(self) -> None:
        if self.target is not None and not isinstance(self.target, str):
            raise ConfigurationError(f"Transition target must be a state name, got {self.target!r}")
        object.__setattr__(self, "actions", tuple(to_action(a) for a in as_tuple(self.actions)))
        object.__setattr__(self, "guards", tuple(to_guard(g) for g in as_tuple(self.guards)))
        object.__setattr__(self, "reenter", bool(self.reenter))

    @classmethod
    def from_config(cls, config: Any) -> "Transition":
        """
        Build a transition from configuration.

        :param config: A Transition, a target state name, or a mapping with
            any of ``target``, ``actions``, ``guards`` and ``reenter``.
        :raises ConfigurationError: If the configuration has another shape
            or unknown keys.
        """
        if isinstance(config, Transition):
            return config
        if isinstance(config, str):
            return cls(target=config)
        if isinstance(config, Mapping):
            unknown = set(config) - _TRANSITION_KEYS
            if unknown:
                raise ConfigurationError(f"Unknown transition keys: {sorted(unknown)}")
            return cls(
                target=config.get("target"),
                actions=config.get("actions"),
                guards=config.get("guards"),
                reenter=config.get("reenter", False),
            )
        raise ConfigurationError(f"Cannot build a transition from {config!r}")
