"""Listener registry and three-phase event propagation.

EventDispatcher implements the DOM Level 2 event flow (capture, at-target,
bubble) over a tree formed by each dispatcher's ``parent`` reference.

Usage:
    root = EventDispatcher()
    child = EventDispatcher()
    child.parent = root

    def on_click(event):
        print(f"{event.current_target} saw {event}")

    root.add_event_listener("click", on_click, use_capture=True)
    child.on("click", on_click, once=True)
    child.dispatch_event(Event("click", bubbles=True))

The tree is owned by the caller. Dispatchers never create or validate parent
links, and a cyclic parent chain makes a bubbling dispatch loop forever
unless ``max_depth`` is set.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterator
import logging
from types import BuiltinMethodType, MethodType
from typing import Any, Protocol, Union, runtime_checkable

from .event import Event, EventPhase
from .exceptions import PropagationDepthError

LOGGER = logging.getLogger(__name__)


@runtime_checkable
class EventHandler(Protocol):
    """Object listener exposing a DOM-style ``handle_event`` method."""

    def handle_event(self, event: Event) -> Any: ...


Listener = Union[Callable[[Event], Any], EventHandler]
DataListener = Callable[[Event, Any], Any]

# Insertion-ordered set of listeners per event type, keyed by identity token.
_Registry = dict[str, dict[Hashable, Listener]]


def _listener_key(listener: Listener) -> Hashable:
    """Identity token for a listener.

    Bound methods are rebuilt on every attribute access, so they are keyed by
    the instance they are bound to plus the underlying function. Everything
    else is keyed by object identity. The registry keeps the listener itself
    as the value, which keeps every id() in use valid.
    """
    if isinstance(listener, MethodType):
        return (id(listener.__self__), listener.__func__)
    if isinstance(listener, BuiltinMethodType) and listener.__self__ is not None:
        return (id(listener.__self__), listener.__name__)
    return id(listener)


class EventDispatcher:
    """Node of an event tree owning capture and bubble listener registries.

    Adding the same listener twice for the same type and phase registers it
    once. Listeners are matched by identity, never by ``__eq__``; bound
    methods match on (instance, function) so that ``obj.method`` can be
    passed again to remove it.
    """

    # Maximum number of ancestors visited per traversal; ``None`` is unbounded.
    max_depth: int | None = None
    # Log every level firing at DEBUG.
    trace: bool = False

    def __init__(self) -> None:
        self._listeners: _Registry = {}
        self._capture_listeners: _Registry = {}
        self.parent: EventDispatcher | None = None

    def add_event_listener(
        self, type: str, listener: Listener, use_capture: bool = False
    ) -> Listener:
        """Register ``listener`` for ``type`` and return it for chaining.

        Example:
            def handle_click(event):
                ...

            button.add_event_listener("click", handle_click)
        """
        if not callable(listener) and not isinstance(listener, EventHandler):
            raise TypeError(
                "Listener must be callable or provide a handle_event(event) method."
            )
        registry = self._capture_listeners if use_capture else self._listeners
        registry.setdefault(type, {})[_listener_key(listener)] = listener
        LOGGER.debug(
            "dispatcher.listener.added",
            extra={
                "event": "dispatcher.listener.added",
                "event_type": type,
                "use_capture": use_capture,
            },
        )
        return listener

    def on(
        self,
        type: str,
        listener: DataListener,
        once: bool = False,
        data: Any = None,
        use_capture: bool = False,
    ) -> Listener:
        """Register a wrapper calling ``listener(event, data)``.

        With ``once`` the wrapper removes itself after its first call. The
        returned wrapper is what was registered; keep it to remove the
        listener later, since ``listener`` itself is not in the registry.

        Example:
            wrapper = button.on("click", handle_click, data={"count": 3})
            ...
            button.off("click", wrapper)
        """

        def wrapper(event: Event) -> None:
            listener(event, data)
            if once:
                event.remove()

        return self.add_event_listener(type, wrapper, use_capture)

    def remove_event_listener(
        self, type: str, listener: Listener, use_capture: bool = False
    ) -> None:
        """Remove ``listener`` for ``type``; unknown listeners are ignored.

        The exact listener that was registered must be passed. A new closure
        or a different wrapper returned by :meth:`on` will not match.
        """
        registry = self._capture_listeners if use_capture else self._listeners
        listeners = registry.get(type)
        key = _listener_key(listener)
        if listeners is None or key not in listeners:
            return
        del listeners[key]
        if not listeners:
            del registry[type]
        LOGGER.debug(
            "dispatcher.listener.removed",
            extra={
                "event": "dispatcher.listener.removed",
                "event_type": type,
                "use_capture": use_capture,
            },
        )

    def off(self, type: str, listener: Listener, use_capture: bool = False) -> None:
        """Alias of :meth:`remove_event_listener`, the companion to :meth:`on`."""
        self.remove_event_listener(type, listener, use_capture)

    def remove_all_event_listeners(self, type: str | None = None) -> None:
        """Remove listeners for ``type`` in both phases, or every listener."""
        if type is None:
            self._listeners.clear()
            self._capture_listeners.clear()
        else:
            self._listeners.pop(type, None)
            self._capture_listeners.pop(type, None)

    def dispatch_event(
        self, event: Event | str, target: EventDispatcher | None = None
    ) -> bool:
        """Send ``event`` through the tree and return ``event.default_prevented``.

        A plain string is wrapped in a non-bubbling :class:`Event`. The
        ``target`` override is kept for callers that report a different
        originating dispatcher; new code should not need it.

        Exceptions raised by listeners are not caught: propagation stops and
        the exception reaches the caller.
        """
        if isinstance(event, str):
            event = Event(event)
        elif not isinstance(event, Event):
            raise TypeError(f"Expected an Event or event type string, got {event!r}")

        event._target = self if target is None else target

        if not event.bubbles or self.parent is None:
            self._fire_at_target(event)
            return event.default_prevented

        ancestors = self._ancestors()

        for node in reversed(ancestors):
            if event.propagation_stopped:
                break
            node._fire(event, EventPhase.CAPTURING, use_capture=True)

        if not event.propagation_stopped:
            self._fire_at_target(event)

        for node in ancestors:
            if event.propagation_stopped:
                break
            node._fire(event, EventPhase.BUBBLING, use_capture=False)

        return event.default_prevented

    def has_event_listener(self, type: str) -> bool:
        """Return True if either registry has a listener for ``type``."""
        return type in self._listeners or type in self._capture_listeners

    def will_trigger(self, type: str) -> bool:
        """Return True if this dispatcher or any ancestor listens for ``type``.

        A True result means a bubbling event of ``type`` dispatched here
        would reach at least one listener.
        """
        if self.has_event_listener(type):
            return True
        return any(node.has_event_listener(type) for node in self._iter_ancestors())

    def _iter_ancestors(self) -> Iterator[EventDispatcher]:
        limit = self.max_depth
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            if limit is not None and depth > limit:
                raise PropagationDepthError(limit)
            yield node
            node = node.parent

    def _ancestors(self) -> list[EventDispatcher]:
        """Parent chain ordered from the direct parent up to the root."""
        return list(self._iter_ancestors())

    def _fire_at_target(self, event: Event) -> None:
        self._fire(event, EventPhase.AT_TARGET, use_capture=True)
        self._fire(event, EventPhase.AT_TARGET, use_capture=False)

    def _fire(self, event: Event, phase: EventPhase, use_capture: bool) -> None:
        registry = self._capture_listeners if use_capture else self._listeners
        listeners = registry.get(event.type)
        if not listeners:
            return

        # Changes made by listeners apply from the next dispatch on.
        snapshot = list(listeners.values())

        event._current_target = self
        event._event_phase = phase
        event._removed = False

        if self.trace:
            LOGGER.debug(
                "dispatcher.level.fire",
                extra={
                    "event": "dispatcher.level.fire",
                    "event_type": event.type,
                    "phase": phase.name,
                    "use_capture": use_capture,
                    "listeners": len(snapshot),
                },
            )

        for listener in snapshot:
            if event.immediate_propagation_stopped:
                break
            if callable(listener):
                listener(event)
            else:
                listener.handle_event(event)
            if event._removed:
                self.remove_event_listener(event.type, listener, use_capture)
                event._removed = False

    def __str__(self) -> str:
        return f"[{type(self).__name__}]"
