# minimachine/runtime/async_support.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from minimachine.core.engine import EventLike
from minimachine.core.errors import MailboxClosedError
from minimachine.core.events import Event
from minimachine.runtime.actor import Actor

logger = logging.getLogger(__name__)

_CLOSE = object()


class AsyncMailbox:
    """
    Asynchronous buffer in front of an actor.

    Producers post events from any coroutine; a single consumer task feeds
    them to the actor in arrival order. The actor itself stays synchronous:
    each event is fully processed before the next one is taken from the
    queue.

    Example:
        async with AsyncMailbox(actor) as mailbox:
            await mailbox.post({"type": "TOGGLE"})
            await mailbox.drain()
    """

    def __init__(self, actor: Actor, maxsize: int = 0) -> None:
        """
        :param actor: The actor receiving the events.
        :param maxsize: Queue bound; ``post`` waits while the queue is full.
            Zero means unbounded.
        """
        self._actor = actor
        self._queue: asyncio.Queue = asyncio.Queue(maxsize)
        self._closed = False
        self._task: Optional[asyncio.Task] = None

    @property
    def actor(self) -> Actor:
        return self._actor

    @property
    def closed(self) -> bool:
        return self._closed

    def pending(self) -> int:
        """Number of events waiting to be processed."""
        return self._queue.qsize()

    async def post(self, event: EventLike) -> None:
        """Queue an event, waiting for room if the queue is bounded and full."""
        self._check_open()
        await self._queue.put(Event.coerce(event))

    def post_nowait(self, event: EventLike) -> None:
        """
        Queue an event without waiting.

        :raises asyncio.QueueFull: If the queue is bounded and full.
        """
        self._check_open()
        self._queue.put_nowait(Event.coerce(event))

    async def run(self) -> None:
        """Feed queued events to the actor until the mailbox is closed."""
        while True:
            item = await self._queue.get()
            try:
                if item is _CLOSE:
                    logger.debug("Mailbox for actor %r closed", self._actor.id)
                    return
                self._actor.send(item)
            finally:
                self._queue.task_done()

    async def drain(self) -> None:
        """Wait until every event posted so far has been processed."""
        await self._queue.join()

    async def close(self) -> None:
        """
        Stop accepting events. Events already queued are still processed
        before ``run`` returns.
        """
        if self._closed:
            return
        self._closed = True
        await self._queue.put(_CLOSE)

    async def __aenter__(self) -> "AsyncMailbox":
        self._task = asyncio.ensure_future(self.run())
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
        if self._task is not None:
            await self._task
            self._task = None

    def _check_open(self) -> None:
        if self._closed:
            raise MailboxClosedError(f"Mailbox for actor {self._actor.id!r} is closed")
