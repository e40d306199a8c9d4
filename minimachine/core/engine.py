# minimachine/core/engine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Pure transition computation.

Given a definition, the current snapshot and an event, work out which state
comes next and which actions run to get there. Nothing here executes an
action or mutates anything; running the actions is the actor's job.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Tuple, Union

from minimachine.core.actions import Action
from minimachine.core.events import Event
from minimachine.core.guards import evaluate_guards
from minimachine.core.snapshot import Snapshot

if TYPE_CHECKING:
    from minimachine.core.machine import MachineDefinition

EventLike = Union[Event, Mapping[str, Any], str]


@dataclass(frozen=True)
class TransitionOutcome:
    """
    A matched transition: the state to end up in and the actions to run, in
    order. An outcome with no actions whose target equals the current state is
    still a match, unlike a ``None`` result from :func:`transition`.
    """

    target: str
    actions: Tuple[Action, ...] = field(default_factory=tuple)


def transition(
    definition: "MachineDefinition", snapshot: Snapshot, event: EventLike
) -> Optional[TransitionOutcome]:
    """
    Compute the outcome of ``event`` for ``snapshot``.

    Actions are ordered exit actions of the current state, then the
    transition's own actions, then entry actions of the target. Exit and
    entry actions are only included when the state changes or the transition
    sets ``reenter``.

    :return: The outcome, or None when no transition is defined for the event
        or a guard rejects it.
    """
    event = Event.coerce(event)
    current = snapshot.value

    candidate = definition.get_transition(current, event.type)
    if candidate is None:
        return None
    # Guards get a read-only view of the context.
    if not evaluate_guards(candidate.guards, MappingProxyType(snapshot.context), event):
        return None

    target = candidate.target if candidate.target is not None else current
    changed_or_reentering = target != current or candidate.reenter

    actions: List[Action] = []
    if changed_or_reentering:
        source_node = definition.get_state_node(current)
        if source_node is not None:
            actions.extend(source_node.exit)
    actions.extend(candidate.actions)
    if changed_or_reentering:
        target_node = definition.get_state_node(target)
        if target_node is not None:
            actions.extend(target_node.entry)

    return TransitionOutcome(target=target, actions=tuple(actions))


def can_transition(definition: "MachineDefinition", snapshot: Snapshot, event: EventLike) -> bool:
    """Dry run of :func:`transition`: True if the event would be handled."""
    return transition(definition, snapshot, event) is not None
