# minimachine/core/actions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping, Optional, Union

from minimachine.core.errors import ActionError, ConfigurationError
from minimachine.core.events import Event

if TYPE_CHECKING:
    from minimachine.runtime.actor import Actor

AssignFn = Callable[[Dict[str, Any], Event], Optional[Mapping[str, Any]]]
EffectFn = Callable[[Dict[str, Any], Event, "Actor"], Any]


@dataclass(frozen=True)
class Assign:
    """
    An action whose result is shallow-merged into the actor's context.

    The wrapped function receives ``(context, event)`` and returns a mapping
    of the keys to update, or None to leave the context alone.
    """

    fn: AssignFn
    name: str = "assign"

    def compute(self, context: Dict[str, Any], event: Event) -> Dict[str, Any]:
        """
        Compute the partial update for ``context``.

        :raises ActionError: If the function returns something other than a mapping.
        """
        update = self.fn(context, event)
        if update is None:
            return {}
        if not isinstance(update, Mapping):
            raise ActionError(f"Assign action {self.name!r} returned {type(update).__name__}, expected a mapping")
        return dict(update)


@dataclass(frozen=True)
class Effect:
    """
    An action run for its side effects. The wrapped function receives
    ``(context, event, actor)``; whatever it returns is ignored.
    """

    fn: EffectFn
    name: str = "effect"

    def run(self, context: Dict[str, Any], event: Event, actor: "Actor") -> None:
        self.fn(context, event, actor)


Action = Union[Assign, Effect]


def assign(assignment: Union[AssignFn, Mapping[str, Any]], name: Optional[str] = None) -> Assign:
    """
    Build an assignment action.

    ``assignment`` is either a function ``(context, event) -> mapping`` or a
    mapping of keys to new values. Callable values in the mapping are
    evaluated per key with ``(context, event)``; other values are assigned
    as-is.

    Example:
        assign(lambda ctx, ev: {"count": ctx["count"] + 1})
        assign({"count": 0, "last": lambda ctx, ev: ev.type})
    """
    if isinstance(assignment, Mapping):
        assigners = dict(assignment)

        def _from_mapping(context: Dict[str, Any], event: Event) -> Dict[str, Any]:
            return {key: value(context, event) if callable(value) else value for key, value in assigners.items()}

        return Assign(_from_mapping, name or "assign")
    if not callable(assignment):
        raise ConfigurationError(f"assign() expects a callable or a mapping, got {assignment!r}")
    return Assign(assignment, name or getattr(assignment, "__name__", "assign"))


def effect(fn: EffectFn, name: Optional[str] = None) -> Effect:
    """Build an effect action from ``fn(context, event, actor)``."""
    if not callable(fn):
        raise ConfigurationError(f"effect() expects a callable, got {fn!r}")
    return Effect(fn, name or getattr(fn, "__name__", "effect"))


def to_action(obj: Any) -> Action:
    """
    Normalize a configured action. Assign and Effect instances pass through;
    bare callables become effects.
    """
    if isinstance(obj, (Assign, Effect)):
        return obj
    if callable(obj):
        return effect(obj)
    raise ConfigurationError(f"Action must be an Assign, an Effect or a callable, got {obj!r}")
