"""Tests for Event state and control methods."""

from __future__ import annotations

import time
import unittest

from eventflow.dispatcher import EventDispatcher
from eventflow.event import Event, EventPhase
from eventflow.exceptions import EventStateError


class PointerEvent(Event):
    """Event subtype carrying a payload."""

    def __init__(
        self, type: str, bubbles: bool = False, cancelable: bool = False, x: int = 0
    ) -> None:
        super().__init__(type, bubbles, cancelable)
        self.x = x

    def clone(self) -> PointerEvent:
        return PointerEvent(self.type, self.bubbles, self.cancelable, x=self.x)


class EventConstructionTests(unittest.TestCase):
    """Validate the fixed fields and fresh scratch state."""

    def test_defaults(self) -> None:
        event = Event("tick")
        self.assertEqual(event.type, "tick")
        self.assertFalse(event.bubbles)
        self.assertFalse(event.cancelable)
        self.assertIsNone(event.target)
        self.assertIsNone(event.current_target)
        self.assertEqual(event.event_phase, EventPhase.NONE)
        self.assertFalse(event.default_prevented)
        self.assertFalse(event.propagation_stopped)
        self.assertFalse(event.immediate_propagation_stopped)
        self.assertFalse(event.removed)

    def test_time_stamp_is_epoch_milliseconds(self) -> None:
        before = int(time.time() * 1000)
        event = Event("tick")
        after = int(time.time() * 1000)
        self.assertGreaterEqual(event.time_stamp, before)
        self.assertLessEqual(event.time_stamp, after)

    def test_fixed_fields_are_read_only(self) -> None:
        event = Event("click", True, True)
        with self.assertRaises(AttributeError):
            event.type = "other"  # type: ignore[misc]
        with self.assertRaises(AttributeError):
            event.bubbles = False  # type: ignore[misc]
        with self.assertRaises(AttributeError):
            event.default_prevented = False  # type: ignore[misc]

    def test_empty_type_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Event("")

    def test_phase_values(self) -> None:
        self.assertEqual(int(EventPhase.CAPTURING), 1)
        self.assertEqual(int(EventPhase.AT_TARGET), 2)
        self.assertEqual(int(EventPhase.BUBBLING), 3)


class EventControlTests(unittest.TestCase):
    """Validate the one-way flags set by listener calls."""

    def test_prevent_default_is_idempotent(self) -> None:
        event = Event("submit", cancelable=True)
        event.prevent_default()
        event.prevent_default()
        self.assertTrue(event.default_prevented)
        self.assertFalse(event.propagation_stopped)

    def test_prevent_default_ignores_cancelable(self) -> None:
        event = Event("submit", cancelable=False)
        event.prevent_default()
        self.assertTrue(event.default_prevented)

    def test_stop_propagation_only_sets_propagation_flag(self) -> None:
        event = Event("click")
        event.stop_propagation()
        self.assertTrue(event.propagation_stopped)
        self.assertFalse(event.immediate_propagation_stopped)

    def test_stop_immediate_propagation_sets_both_flags(self) -> None:
        event = Event("click")
        event.stop_immediate_propagation()
        self.assertTrue(event.propagation_stopped)
        self.assertTrue(event.immediate_propagation_stopped)

    def test_remove_sets_removed(self) -> None:
        event = Event("click")
        event.remove()
        self.assertTrue(event.removed)


class EventCloneTests(unittest.TestCase):
    """Validate that clones copy only the fixed fields."""

    def test_clone_copies_fixed_fields_and_resets_state(self) -> None:
        dispatcher = EventDispatcher()
        dispatcher.add_event_listener("click", lambda e: e.stop_immediate_propagation())
        original = Event("click", True, True)
        original.prevent_default()
        dispatcher.dispatch_event(original)

        clone = original.clone()
        self.assertIsNot(clone, original)
        self.assertEqual(clone.type, "click")
        self.assertTrue(clone.bubbles)
        self.assertTrue(clone.cancelable)
        self.assertIsNone(clone.target)
        self.assertIsNone(clone.current_target)
        self.assertEqual(clone.event_phase, EventPhase.NONE)
        self.assertFalse(clone.default_prevented)
        self.assertFalse(clone.propagation_stopped)
        self.assertFalse(clone.immediate_propagation_stopped)

    def test_clone_dispatches_with_fresh_flags(self) -> None:
        root = EventDispatcher()
        leaf = EventDispatcher()
        leaf.parent = root
        calls: list[str] = []
        root.add_event_listener("click", lambda e: calls.append("root"))
        leaf.add_event_listener("click", lambda e: e.stop_propagation())

        first = Event("click", bubbles=True)
        leaf.dispatch_event(first)
        self.assertEqual(calls, [])

        leaf.remove_all_event_listeners()
        clone = first.clone()
        self.assertFalse(leaf.dispatch_event(clone))
        self.assertEqual(calls, ["root"])
        self.assertIs(clone.target, leaf)

    def test_clone_keeps_subclass(self) -> None:
        event = PointerEvent("move", bubbles=True, x=12)
        clone = event.clone()
        self.assertIsInstance(clone, PointerEvent)
        self.assertEqual(clone.x, 12)


class EventSetTests(unittest.TestCase):
    """Validate the chainable payload setter and string forms."""

    def test_set_assigns_payload_and_chains(self) -> None:
        event = Event("progress").set(loaded=5, total=10)
        self.assertEqual(event.loaded, 5)  # type: ignore[attr-defined]
        self.assertEqual(event.total, 10)  # type: ignore[attr-defined]

    def test_set_rejects_protected_fields(self) -> None:
        event = Event("progress")
        with self.assertRaises(EventStateError):
            event.set(type="other")
        with self.assertRaises(EventStateError):
            event.set(propagation_stopped=False)
        self.assertEqual(event.type, "progress")

    def test_set_rejects_backing_fields_and_methods(self) -> None:
        event = Event("click")
        with self.assertRaises(EventStateError):
            event.set(_type="other", _default_prevented=True)
        with self.assertRaises(EventStateError):
            event.set(prevent_default=None)
        with self.assertRaises(EventStateError):
            event.set(loaded=1, _removed=True)

        self.assertEqual(event.type, "click")
        self.assertFalse(event.default_prevented)
        self.assertFalse(event.removed)
        self.assertFalse(hasattr(event, "loaded"))
        event.prevent_default()
        self.assertTrue(event.default_prevented)

    def test_str_and_repr(self) -> None:
        event = Event("complete")
        self.assertEqual(str(event), "[Event (type=complete)]")
        self.assertIn("type='complete'", repr(event))
        self.assertEqual(str(PointerEvent("move")), "[PointerEvent (type=move)]")


if __name__ == "__main__":
    unittest.main()
