# minimachine/runtime/concurrency.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Optional

from minimachine.core.engine import EventLike
from minimachine.core.snapshot import Snapshot
from minimachine.core.status import ActorStatus
from minimachine.runtime.actor import Actor, SnapshotCallback, Subscription


def get_lock() -> threading.RLock:
    """
    Provide a new reentrant lock. Reentrancy lets actions and subscribers call
    back into a synchronized actor from the thread that holds the lock.
    """
    return threading.RLock()


@contextmanager
def with_lock(lock: threading.RLock):
    """
    A convenience context manager that acquires the given lock upon entry and
    releases it upon exit, ensuring safe access to shared resources.
    """
    lock.acquire()
    try:
        yield
    finally:
        lock.release()


class SynchronizedActor:
    """
    Serializes access to an actor from several threads.

    An Actor assumes a single caller at a time. This wrapper guards every
    public operation with one reentrant lock so that events sent from
    different threads are processed one after the other, never interleaved.
    Subscribers run on whichever thread triggered the change, while the lock
    is held.
    """

    def __init__(self, actor: Actor, lock: Optional[threading.RLock] = None) -> None:
        """
        :param actor: The actor to guard.
        :param lock: Optional lock to share with other code; must be reentrant
            if actions or subscribers call back into this wrapper.
        """
        self._actor = actor
        self._lock = lock if lock is not None else get_lock()

    @property
    def actor(self) -> Actor:
        return self._actor

    @property
    def id(self) -> str:
        return self._actor.id

    @property
    def status(self) -> ActorStatus:
        with with_lock(self._lock):
            return self._actor.status

    def send(self, event: EventLike) -> None:
        with with_lock(self._lock):
            self._actor.send(event)

    def get_snapshot(self) -> Snapshot:
        with with_lock(self._lock):
            return self._actor.get_snapshot()

    def subscribe(self, callback: SnapshotCallback) -> Subscription:
        with with_lock(self._lock):
            return self._actor.subscribe(callback)

    def matches(self, value: str) -> bool:
        with with_lock(self._lock):
            return self._actor.matches(value)

    def can(self, event: EventLike) -> bool:
        with with_lock(self._lock):
            return self._actor.can(event)

    def start(self) -> None:
        with with_lock(self._lock):
            self._actor.start()

    def stop(self) -> None:
        with with_lock(self._lock):
            self._actor.stop()
