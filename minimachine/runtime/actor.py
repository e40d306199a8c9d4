# minimachine/runtime/actor.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
import uuid
from collections import deque
from types import MappingProxyType
from typing import Any, Callable, Deque, Dict, Iterable, Mapping, Optional, Union

from minimachine.config import Settings, load_settings
from minimachine.core.actions import Action, Assign, Effect
from minimachine.core.engine import EventLike, can_transition, transition
from minimachine.core.errors import ActionError
from minimachine.core.events import Event, init_event
from minimachine.core.machine import MachineDefinition, create_machine
from minimachine.core.snapshot import Snapshot, copy_context
from minimachine.core.status import ActorStatus

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[Snapshot], Any]
IdFactory = Callable[[], str]


def default_id_factory() -> str:
    return uuid.uuid4().hex


class Subscription:
    """
    Handle returned by :meth:`Actor.subscribe`. Calling it, or calling
    :meth:`unsubscribe`, removes exactly the registration it was created for.
    """

    def __init__(self, actor: "Actor", token: object) -> None:
        self._actor = actor
        self._token = token

    @property
    def active(self) -> bool:
        return self._actor._has_subscriber(self._token)

    def unsubscribe(self) -> None:
        self._actor._remove_subscriber(self._token)

    def __call__(self) -> None:
        self.unsubscribe()


class Actor:
    """
    A running instance of a machine definition.

    The actor holds the live state value, context and status; applies events
    one at a time using the pure transition engine; executes the resulting
    actions; and notifies subscribers with the settled snapshot.

    Event processing is synchronous and runs to completion. Events sent by
    actions or subscribers while an event is being processed are queued and
    handled, in order, once the current event has settled. The actor has no
    internal locking: callers sending from several threads must serialize
    access themselves (see ``SynchronizedActor``).
    """

    def __init__(
        self,
        definition: MachineDefinition,
        id: Optional[str] = None,
        id_factory: Optional[IdFactory] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        """
        Create the actor and run the initial state's entry actions.

        :param definition: The machine this actor runs.
        :param id: Explicit actor id; generated with ``id_factory`` if omitted.
        :param id_factory: Source of unique ids, defaults to random UUIDs.
        :param settings: Runtime settings, read from the environment if omitted.
        """
        self._definition = definition
        self._id = id if id is not None else (id_factory or default_id_factory)()
        self._settings = settings if settings is not None else load_settings()

        self._value = definition.initial
        self._context: Dict[str, Any] = definition.initial_context
        self._status = ActorStatus.ACTIVE
        self._error: Optional[BaseException] = None

        self._subscribers: Dict[object, SnapshotCallback] = {}
        self._cached_snapshot: Optional[Snapshot] = None
        self._processing = False
        self._notify_pending = False
        self._deferred: Deque[Event] = deque()

        self._enter_initial_state()

    @property
    def id(self) -> str:
        return self._id

    @property
    def definition(self) -> MachineDefinition:
        return self._definition

    @property
    def status(self) -> ActorStatus:
        return self._status

    @property
    def error(self) -> Optional[BaseException]:
        """The exception that put the actor in error status, if any."""
        return self._error

    def send(self, event: EventLike) -> None:
        """
        Process an event.

        Ignored when the actor is not active. Events with no matching
        transition, or whose guards fail, leave the actor untouched. An action
        that raises puts the actor in error status; context updates made by
        earlier actions of the same event are kept.
        """
        event = Event.coerce(event)
        if self._status is not ActorStatus.ACTIVE:
            if self._settings.dev_mode:
                logger.warning(
                    "Event %r was sent to actor %r with status %r; it will not be processed.",
                    event.type,
                    self._id,
                    self._status.value,
                )
            return

        if self._processing:
            self._deferred.append(event)
            return

        self._processing = True
        try:
            self._process(event)
            self._flush_notifications()
            while self._deferred and self._status is ActorStatus.ACTIVE:
                self._process(self._deferred.popleft())
                self._flush_notifications()
        finally:
            self._deferred.clear()
            self._processing = False

    def get_snapshot(self) -> Snapshot:
        """
        Return the current snapshot.

        The same object is returned until the actor changes. Its context is a
        read-only view of a copy taken when the snapshot was built, so the
        snapshot can be shared between subscribers.
        """
        if self._cached_snapshot is None:
            self._cached_snapshot = Snapshot(
                value=self._value,
                context=MappingProxyType(copy_context(self._context)),
                status=self._status,
            )
        return self._cached_snapshot

    def subscribe(self, callback: SnapshotCallback) -> Subscription:
        """
        Register ``callback`` for snapshot notifications.

        The callback is invoked once immediately with the current snapshot,
        then after every change. Exceptions it raises are logged and never
        reach the actor or other subscribers.

        :return: A Subscription; call it to unsubscribe.
        """
        if not callable(callback):
            raise TypeError(f"Subscriber must be callable, got {callback!r}")
        token = object()
        self._subscribers[token] = callback
        self._deliver(callback, self.get_snapshot())
        return Subscription(self, token)

    def matches(self, value: str) -> bool:
        return self._value == value

    def can(self, event: EventLike) -> bool:
        """Return True if ``event`` would trigger a transition right now. Runs no actions."""
        return can_transition(self._definition, self._live_snapshot(), event)

    def start(self) -> None:
        """Resume a stopped actor. No effect in any other status."""
        if self._status is ActorStatus.STOPPED:
            self._set_status(ActorStatus.ACTIVE)

    def stop(self) -> None:
        """Stop an active actor. Its state is kept and it can be restarted."""
        if self._status is ActorStatus.ACTIVE:
            self._set_status(ActorStatus.STOPPED)

    def _enter_initial_state(self) -> None:
        node = self._definition.get_state_node(self._value)
        if node is None or not node.entry:
            return
        event = init_event()
        self._processing = True
        try:
            self._apply(node.entry, event)
            self._flush_notifications()
            while self._deferred and self._status is ActorStatus.ACTIVE:
                self._process(self._deferred.popleft())
                self._flush_notifications()
        finally:
            self._deferred.clear()
            self._processing = False

    def _process(self, event: Event) -> None:
        try:
            outcome = transition(self._definition, self._live_snapshot(), event)
        except Exception as error:
            self._fail(error, event)
            return

        if outcome is None:
            logger.debug("Actor %r ignored event %r in state %r", self._id, event.type, self._value)
            return

        source = self._value
        if self._apply(outcome.actions, event):
            self._value = outcome.target
            logger.debug("Actor %r handled %r: %r -> %r", self._id, event.type, source, outcome.target)
            self._changed()

    def _apply(self, actions: Iterable[Action], event: Event) -> bool:
        """
        Run ``actions`` against a working copy of the context.

        :return: False if an action failed, in which case the actor is
            already in error status.
        """
        context = dict(self._context)
        try:
            for action in actions:
                context = self._execute(action, context, event)
        except Exception as error:
            self._context = context
            self._fail(error, event)
            return False
        self._context = context
        return True

    def _execute(self, action: Action, context: Dict[str, Any], event: Event) -> Dict[str, Any]:
        if isinstance(action, Assign):
            update = action.compute(context, event)
            if not update:
                return context
            merged = dict(context)
            merged.update(update)
            return merged
        if isinstance(action, Effect):
            action.run(context, event, self)
            return context
        raise ActionError(f"Unsupported action {action!r}")

    def _fail(self, error: Exception, event: Event) -> None:
        logger.error(
            "Actor %r failed while processing %r in state %r",
            self._id,
            event.type,
            self._value,
            exc_info=error,
        )
        self._error = error
        self._deferred.clear()
        # A fault wins over a stop() issued by an earlier action.
        self._status = ActorStatus.ERROR
        self._changed()

    def _set_status(self, status: ActorStatus) -> None:
        if not self._status.can_move_to(status):
            raise RuntimeError(f"Invalid status change {self._status.value} -> {status.value}")
        self._status = status
        self._changed()

    def _changed(self) -> None:
        self._cached_snapshot = None
        if self._processing:
            # Subscribers only see the snapshot once the current event settles.
            self._notify_pending = True
        else:
            self._notify()

    def _flush_notifications(self) -> None:
        while self._notify_pending:
            self._notify_pending = False
            self._notify()

    def _notify(self) -> None:
        if not self._subscribers:
            return
        snapshot = self.get_snapshot()
        for token, callback in list(self._subscribers.items()):
            # Skip callbacks unsubscribed earlier in this pass.
            if token in self._subscribers:
                self._deliver(callback, snapshot)

    def _deliver(self, callback: SnapshotCallback, snapshot: Snapshot) -> None:
        try:
            callback(snapshot)
        except Exception:
            logger.exception("Subscriber %r of actor %r raised", callback, self._id)

    def _live_snapshot(self) -> Snapshot:
        # Uncopied view for the engine; never handed out.
        return Snapshot(value=self._value, context=self._context, status=self._status)

    def _has_subscriber(self, token: object) -> bool:
        return token in self._subscribers

    def _remove_subscriber(self, token: object) -> None:
        self._subscribers.pop(token, None)

    def __repr__(self) -> str:
        return (
            f"Actor(id={self._id!r}, machine={self._definition.id!r}, "
            f"value={self._value!r}, status={self._status.value!r})"
        )


def create_actor(definition: Union[MachineDefinition, Mapping[str, Any]], **kwargs: Any) -> Actor:
    """
    Create an actor from a definition or from a machine configuration mapping.

    Keyword arguments are passed to :class:`Actor`.
    """
    if not isinstance(definition, MachineDefinition):
        definition = create_machine(definition)
    return Actor(definition, **kwargs)
