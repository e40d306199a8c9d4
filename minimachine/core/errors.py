# minimachine/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Iterable


class MachineError(Exception):
    """
    Base exception class for errors within the minimachine library.
    """


class ConfigurationError(MachineError):
    """
    Raised when a machine definition is malformed. Always raised at
    construction time, before any actor can be created from the definition.
    """


class InvalidInitialStateError(ConfigurationError):
    """
    Raised when the configured initial state is not one of the machine's states.
    """

    def __init__(self, initial: str, known: Iterable[str]) -> None:
        self.initial = initial
        self.known = list(known)
        super().__init__(f"Initial state {initial!r} is not defined; known states: {self.known}")


class InvalidTargetError(ConfigurationError):
    """
    Raised when a transition names a target state that does not exist.
    """

    def __init__(self, source: str, event_type: str, target: str) -> None:
        self.source = source
        self.event_type = event_type
        self.target = target
        super().__init__(f"Transition {source}.on[{event_type!r}] targets undefined state {target!r}")


class InvalidEventError(MachineError, ValueError):
    """
    Raised when an object cannot be interpreted as an event.
    """


class ActionError(MachineError):
    """
    Raised when an action misbehaves in a way the actor cannot interpret,
    such as an assignment returning something other than a mapping.
    """


class MailboxClosedError(MachineError):
    """
    Raised when an event is posted to a mailbox that has been closed.
    """
