"""
Runtime package for running machine definitions.

Architecture:
- Actor owns the live snapshot and executes actions
- Optional boundaries for threaded and asyncio callers

Design Patterns:
- Observer Pattern for snapshot subscriptions
- Proxy Pattern for the synchronized wrapper
- Mailbox for asyncio producers

Cross-cutting:
- Action faults recovered into error status
- Subscriber faults logged and isolated
"""

from .actor import Actor, Subscription, create_actor
from .async_support import AsyncMailbox
from .concurrency import SynchronizedActor

__all__ = ["Actor", "Subscription", "create_actor", "AsyncMailbox", "SynchronizedActor"]
