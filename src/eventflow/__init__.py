"""Top-level package for eventflow."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .config import apply_config, load_config
    from .dispatcher import EventDispatcher, EventHandler, Listener
    from .event import Event, EventPhase
    from .exceptions import (
        ConfigValidationError,
        EventFlowError,
        EventStateError,
        PropagationDepthError,
    )
    from .logging_utils import configure_logging

__all__ = [
    "ConfigValidationError",
    "Event",
    "EventDispatcher",
    "EventFlowError",
    "EventHandler",
    "EventPhase",
    "EventStateError",
    "Listener",
    "PropagationDepthError",
    "apply_config",
    "configure_logging",
    "load_config",
]


def __getattr__(name: str) -> Any:
    """Lazily import symbols so that importing the package stays cheap."""
    if name in {"Event", "EventPhase"}:
        from .event import Event, EventPhase

        return {"Event": Event, "EventPhase": EventPhase}[name]
    if name in {"EventDispatcher", "EventHandler", "Listener"}:
        from .dispatcher import EventDispatcher, EventHandler, Listener

        return {
            "EventDispatcher": EventDispatcher,
            "EventHandler": EventHandler,
            "Listener": Listener,
        }[name]
    if name in {
        "ConfigValidationError",
        "EventFlowError",
        "EventStateError",
        "PropagationDepthError",
    }:
        from .exceptions import (
            ConfigValidationError,
            EventFlowError,
            EventStateError,
            PropagationDepthError,
        )

        return {
            "ConfigValidationError": ConfigValidationError,
            "EventFlowError": EventFlowError,
            "EventStateError": EventStateError,
            "PropagationDepthError": PropagationDepthError,
        }[name]
    if name in {"apply_config", "load_config"}:
        from .config import apply_config, load_config

        return {"apply_config": apply_config, "load_config": load_config}[name]
    if name == "configure_logging":
        from .logging_utils import configure_logging

        return configure_logging
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
