"""
Error hierarchy for board game states.

All of these signal programming errors on the caller's side: an action id that
did not come from the latest ``legal_actions()``, an undo that does not match
the last applied move, or a configuration outside the supported range. Nothing
here is meant to be retried.

Usage:
    from boardstate.core.errors import IllegalActionError

    try:
        state.apply_action(action)
    except IllegalActionError as e:
        logger.warning(f"Rejected move: {e}")
"""

from __future__ import annotations

from typing import Any, Optional

__all__ = [
    "BoardStateError",
    "ConfigurationError",
    "IllegalActionError",
    "InvalidStateError",
    "UndoError",
]


class BoardStateError(Exception):
    """Base exception for all board state errors.

    Attributes:
        message: Human-readable error description
        context: Additional context for debugging
    """

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value!r}" for key, value in self.context.items())
        return f"{self.message} ({details})"


class IllegalActionError(BoardStateError, ValueError):
    """Action id is not legal, out of range, or cannot be decoded."""

    def __init__(self, message: str, action: Optional[int] = None, **context: Any) -> None:
        if action is not None:
            context["action"] = action
        super().__init__(message, **context)
        self.action = action


class InvalidStateError(BoardStateError, RuntimeError):
    """Operation is not valid for the state in its current phase."""


class UndoError(InvalidStateError):
    """Undo requested against an empty history or a mismatching record."""


class ConfigurationError(BoardStateError, ValueError):
    """Game parameters or a custom board are outside the supported range."""
