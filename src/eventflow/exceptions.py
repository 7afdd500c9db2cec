"""Domain exception hierarchy for eventflow."""

from __future__ import annotations


class EventFlowError(RuntimeError):
    """Base class for all eventflow errors."""


class EventStateError(EventFlowError):
    """Raised when code tries to overwrite an event's fixed or dispatcher-owned fields."""


class PropagationDepthError(EventFlowError):
    """Raised when a parent chain is deeper than the configured traversal limit."""

    def __init__(self, limit: int) -> None:
        super().__init__(
            f"Parent chain exceeds max_depth={limit}; the dispatcher tree may contain a cycle."
        )
        self.limit = limit


class ConfigValidationError(EventFlowError):
    """Raised when configuration cannot be validated safely."""
