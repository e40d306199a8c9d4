# minimachine/core/events.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

from minimachine.core.errors import InvalidEventError

INIT_EVENT_TYPE = "minimachine.init"


class Event:
    """
    Represents a signal sent to an actor. An event is identified by its
    ``type`` and may carry arbitrary payload fields. Two events are equal when
    their types and payloads are equal; identity plays no part.
    """

    def __init__(self, type: str, payload: Optional[Mapping[str, Any]] = None, **fields: Any) -> None:
        """
        Create an event.

        :param type: Discriminant used to look up transitions.
        :param payload: Optional mapping of payload fields.
        :param fields: Additional payload fields, merged over ``payload``.
        """
        if not isinstance(type, str) or not type:
            raise InvalidEventError(f"Event type must be a non-empty string, got {type!r}")
        data: Dict[str, Any] = dict(payload or {})
        data.update(fields)
        if "type" in data:
            raise InvalidEventError("'type' is reserved and cannot be a payload field")
        object.__setattr__(self, "_type", type)
        object.__setattr__(self, "_payload", data)

    @classmethod
    def coerce(cls, obj: Union["Event", Mapping[str, Any], str]) -> "Event":
        """
        Interpret ``obj`` as an event.

        Accepts an Event (returned unchanged), a mapping with a ``"type"`` key
        whose remaining keys become the payload, or a bare type string.

        :raises InvalidEventError: If ``obj`` has none of these shapes.
        """
        if isinstance(obj, Event):
            return obj
        if isinstance(obj, str):
            return cls(obj)
        if isinstance(obj, Mapping):
            if "type" not in obj:
                raise InvalidEventError(f"Event mapping has no 'type' key: {dict(obj)!r}")
            fields = {k: v for k, v in obj.items() if k != "type"}
            return cls(obj["type"], fields)
        raise InvalidEventError(f"Cannot interpret {obj!r} as an event")

    @property
    def type(self) -> str:
        """The event type."""
        return self._type

    @property
    def payload(self) -> Dict[str, Any]:
        """A copy of the payload fields."""
        return dict(self._payload)

    def get(self, key: str, default: Any = None) -> Any:
        return self._payload.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        """Return the event as a plain mapping, ``type`` included."""
        return {"type": self._type, **self._payload}

    def __getitem__(self, key: str) -> Any:
        if key == "type":
            return self._type
        return self._payload[key]

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails.
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._payload[name]
        except KeyError:
            raise AttributeError(f"Event {self._type!r} has no field {name!r}") from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Event is immutable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self._type == other._type and self._payload == other._payload

    def __hash__(self) -> int:
        # Payload values may be unhashable.
        return hash(self._type)

    def __repr__(self) -> str:
        if not self._payload:
            return f"Event({self._type!r})"
        return f"Event({self._type!r}, {self._payload!r})"


def init_event() -> Event:
    """The event passed to the initial state's entry actions."""
    return Event(INIT_EVENT_TYPE)
