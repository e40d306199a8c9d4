# minimachine/core/snapshot.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import copy
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping

from minimachine.core.status import ActorStatus


def copy_context(context: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Deep-copy a context key by key. Values that cannot be copied, such as
    locks, timers or thread handles, are opaque to the machine and are shared
    as-is.
    """
    result = {}
    for key, value in context.items():
        try:
            result[key] = copy.deepcopy(value)
        except (TypeError, copy.Error):
            result[key] = value
    return result


@dataclass(frozen=True)
class Snapshot:
    """
    The externally observable state of an actor: the current state value, the
    context, and the actor status. Snapshots handed out by an actor carry a
    read-only view of their own copy of the context; it cannot be changed
    through the snapshot and never aliases the actor's live context.
    """

    value: str
    context: Mapping[str, Any] = field(default_factory=dict)
    status: ActorStatus = ActorStatus.ACTIVE

    def matches(self, value: str) -> bool:
        """Return True if this snapshot is in state ``value``."""
        return self.value == value

    def with_changes(self, **changes: Any) -> "Snapshot":
        """Return a copy of this snapshot with the given fields replaced."""
        return replace(self, **changes)
