"""
Core package providing machine definitions and the transition engine.

Architecture:
- Declarative definition records (states, transitions, guards, actions)
- Construction-time validation of definitions
- Pure transition computation over snapshots

Design Patterns:
- Value Object for events, snapshots and definition records
- Sum type for assignment and effect actions
- Interpreter for the transition engine

Cross-cutting:
- Configuration errors raised at construction, never at run time
- No mutation and no side effects in the engine
"""

from .actions import Action, Assign, Effect, assign, effect
from .engine import TransitionOutcome, can_transition, transition
from .errors import (
    ActionError,
    ConfigurationError,
    InvalidEventError,
    InvalidInitialStateError,
    InvalidTargetError,
    MachineError,
    MailboxClosedError,
)
from .events import Event
from .guards import Guard, guard
from .machine import MachineDefinition, create_machine
from .snapshot import Snapshot
from .states import StateNode
from .status import ActorStatus
from .transitions import Transition
from .validations import Validator

__all__ = [
    # Definition records
    "Action",
    "Assign",
    "Effect",
    "assign",
    "effect",
    "Guard",
    "guard",
    "Transition",
    "StateNode",
    "MachineDefinition",
    "create_machine",
    "Validator",
    # Runtime values
    "Event",
    "Snapshot",
    "ActorStatus",
    # Engine
    "TransitionOutcome",
    "transition",
    "can_transition",
    # Errors
    "MachineError",
    "ConfigurationError",
    "InvalidInitialStateError",
    "InvalidTargetError",
    "InvalidEventError",
    "ActionError",
    "MailboxClosedError",
]
