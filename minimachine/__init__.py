"""minimachine: a small finite state machine runtime

A declarative machine definition is turned into a pure transition function
and driven by an actor that applies events one at a time, runs the resulting
actions and notifies subscribers of each settled snapshot.

Responsibilities:
    - Machine definition and construction-time validation
    - Transition computation with guards, entry and exit actions
    - Actor lifecycle, context assignment and subscriptions

Interactions:
    - Client code through the public API below
    - Logging system for diagnostics (``logging.getLogger("minimachine")``)
    - Environment for development-mode settings

Cross-cutting Concerns:
    Thread Safety:
        - Definitions are immutable and safe to share
        - Actors assume a single caller; wrap in SynchronizedActor otherwise

    Error Handling:
        - Configuration errors raised at construction
        - Action faults move the actor to error status
        - Subscriber faults are logged, never propagated
"""

from minimachine.config import Settings, load_settings
from minimachine.core import (
    Action,
    ActionError,
    ActorStatus,
    Assign,
    ConfigurationError,
    Effect,
    Event,
    Guard,
    InvalidEventError,
    InvalidInitialStateError,
    InvalidTargetError,
    MachineDefinition,
    MachineError,
    MailboxClosedError,
    Snapshot,
    StateNode,
    Transition,
    TransitionOutcome,
    Validator,
    assign,
    can_transition,
    create_machine,
    effect,
    guard,
    transition,
)
from minimachine.runtime import Actor, AsyncMailbox, Subscription, SynchronizedActor, create_actor

__version__ = "0.1.0"

__all__ = [
    "Action",
    "ActionError",
    "Actor",
    "ActorStatus",
    "Assign",
    "AsyncMailbox",
    "ConfigurationError",
    "Effect",
    "Event",
    "Guard",
    "InvalidEventError",
    "InvalidInitialStateError",
    "InvalidTargetError",
    "MachineDefinition",
    "MachineError",
    "MailboxClosedError",
    "Settings",
    "Snapshot",
    "StateNode",
    "Subscription",
    "SynchronizedActor",
    "Transition",
    "TransitionOutcome",
    "Validator",
    "assign",
    "can_transition",
    "create_actor",
    "create_machine",
    "effect",
    "guard",
    "load_settings",
    "transition",
]
