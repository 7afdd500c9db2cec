"""Event value object passed through an EventDispatcher tree.

Usage:
    event = Event("click", bubbles=True, cancelable=True)
    button.dispatch_event(event)
    if event.default_prevented:
        ...

Event objects are often reused by callers, so a listener should never rely
on an event's state outside of the call stack it was received in.
"""

from __future__ import annotations

from enum import IntEnum
import time
from typing import TYPE_CHECKING, Any

from .exceptions import EventStateError

if TYPE_CHECKING:
    from .dispatcher import EventDispatcher


class EventPhase(IntEnum):
    """Propagation stage an event is currently in."""

    NONE = 0
    CAPTURING = 1
    AT_TARGET = 2
    BUBBLING = 3


class Event:
    """Typed notification with DOM Level 2 propagation controls.

    ``type``, ``bubbles`` and ``cancelable`` are fixed for the life of the
    instance. Everything else is scratch state rewritten by the dispatcher.
    The stop and prevent flags are one-way and are *not* cleared when the
    same instance is dispatched again; use :meth:`clone` or a new instance
    when flags should start fresh.
    """

    def __init__(self, type: str, bubbles: bool = False, cancelable: bool = False) -> None:
        if not isinstance(type, str) or not type:
            raise ValueError("Event type must be a non-empty string.")
        self._type = type
        self._bubbles = bool(bubbles)
        # Advisory only; prevent_default() does not consult it.
        self._cancelable = bool(cancelable)
        self._time_stamp = int(time.time() * 1000)

        self._target: EventDispatcher | None = None
        self._current_target: EventDispatcher | None = None
        self._event_phase = EventPhase.NONE
        self._default_prevented = False
        self._propagation_stopped = False
        self._immediate_propagation_stopped = False
        self._removed = False

    @property
    def type(self) -> str:
        return self._type

    @property
    def bubbles(self) -> bool:
        """Whether the event travels through the dispatcher's ancestors."""
        return self._bubbles

    @property
    def cancelable(self) -> bool:
        return self._cancelable

    @property
    def time_stamp(self) -> int:
        """Creation time in epoch milliseconds."""
        return self._time_stamp

    @property
    def target(self) -> EventDispatcher | None:
        """The dispatcher the event was sent to."""
        return self._target

    @property
    def current_target(self) -> EventDispatcher | None:
        """The dispatcher whose listeners are running right now.

        For non-bubbling events this is always the same as ``target``.
        """
        return self._current_target

    @property
    def event_phase(self) -> EventPhase:
        return self._event_phase

    @property
    def default_prevented(self) -> bool:
        return self._default_prevented

    @property
    def propagation_stopped(self) -> bool:
        """True once stop_propagation() or stop_immediate_propagation() was called."""
        return self._propagation_stopped

    @property
    def immediate_propagation_stopped(self) -> bool:
        return self._immediate_propagation_stopped

    @property
    def removed(self) -> bool:
        """True while the running listener has asked to be removed."""
        return self._removed

    def prevent_default(self) -> None:
        self._default_prevented = True

    def stop_propagation(self) -> None:
        """Finish the current level, then stop visiting further dispatchers."""
        self._propagation_stopped = True

    def stop_immediate_propagation(self) -> None:
        """Skip the remaining listeners of the current level as well."""
        self._propagation_stopped = True
        self._immediate_propagation_stopped = True

    def remove(self) -> None:
        """Unregister the listener that is currently handling this event.

        Example:
            def on_click(event):
                ...
                event.remove()

            button.add_event_listener("click", on_click)
        """
        self._removed = True

    def clone(self) -> Event:
        """Return a new event with the same type, bubbles and cancelable values."""
        return type(self)(self._type, self._bubbles, self._cancelable)

    def set(self, **props: Any) -> Event:
        """Set payload attributes in one call and return ``self`` for chaining."""
        # Underscore names are backing fields; class attributes are properties and methods.
        protected = {
            name for name in props if name.startswith("_") or hasattr(type(self), name)
        }
        if protected:
            raise EventStateError(
                f"Cannot set read-only event fields: {', '.join(sorted(protected))}"
            )
        for name, value in props.items():
            setattr(self, name, value)
        return self

    def __str__(self) -> str:
        return f"[{type(self).__name__} (type={self._type})]"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(type={self._type!r}, bubbles={self._bubbles}, "
            f"cancelable={self._cancelable}, phase={self._event_phase.name}, "
            f"default_prevented={self._default_prevented}, "
            f"propagation_stopped={self._propagation_stopped})"
        )
