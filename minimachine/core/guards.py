# minimachine/core/guards.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional

from minimachine.core.errors import ConfigurationError
from minimachine.core.events import Event

Condition = Callable[[Mapping[str, Any], Event], bool]


@dataclass(frozen=True)
class Guard:
    """
    A named predicate over ``(context, event)`` gating a transition.
    Guards must be pure: they may not mutate the context they are given.
    """

    name: str
    condition: Condition

    def check(self, context: Mapping[str, Any], event: Event) -> bool:
        """
        Evaluate the guard condition.

        :return: True if the transition may proceed.
        """
        return bool(self.condition(context, event))


def guard(condition: Condition, name: Optional[str] = None) -> Guard:
    """Wrap ``condition`` in a Guard, naming it after the function by default."""
    if not callable(condition):
        raise ConfigurationError(f"Guard condition must be callable, got {condition!r}")
    return Guard(name or getattr(condition, "__name__", "guard"), condition)


def to_guard(obj: Any) -> Guard:
    if isinstance(obj, Guard):
        return obj
    return guard(obj)


def evaluate_guards(guards: Iterable[Guard], context: Mapping[str, Any], event: Event) -> bool:
    """
    Check all guards. Return True if all pass, False as soon as one fails.

    :param guards: Guards attached to a transition.
    :param context: Context to evaluate against.
    :param event: The triggering event.
    """
    for g in guards:
        if not g.check(context, event):
            return False
    return True
