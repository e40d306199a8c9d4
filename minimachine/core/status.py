# minimachine/core/status.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from enum import Enum


class ActorStatus(str, Enum):
    """Defines the possible statuses of an actor.

    Used to gate event acceptance and reported on every snapshot.
    """

    ACTIVE = "active"  # Accepting events
    DONE = "done"  # Reserved for final states; never produced
    STOPPED = "stopped"  # Paused by stop(), can be restarted
    ERROR = "error"  # An action faulted; terminal

    @property
    def is_terminal(self) -> bool:
        """Whether no status move leaves this status."""
        return self in (ActorStatus.DONE, ActorStatus.ERROR)

    def can_move_to(self, other: "ActorStatus") -> bool:
        """Check whether ``self -> other`` is an allowed status move."""
        return other in _ALLOWED_MOVES[self]

    def __str__(self) -> str:
        return self.value


_ALLOWED_MOVES = {
    ActorStatus.ACTIVE: frozenset({ActorStatus.STOPPED, ActorStatus.ERROR}),
    ActorStatus.STOPPED: frozenset({ActorStatus.ACTIVE}),
    ActorStatus.ERROR: frozenset(),
    ActorStatus.DONE: frozenset(),
}
