"""
Exception hierarchy for formstate.

State transitions never raise: unknown action kinds and missing payload entries
are no-ops. Exceptions are reserved for inputs that cannot be interpreted at
all, such as a field path that does not follow the path grammar.
"""

from typing import Any, Dict, Optional


class FormStateError(Exception):
    """Base exception for all formstate errors.

    Attributes:
        message: Human-readable error description
        context: Additional key/value context for debugging
    """

    def __init__(self, message: str, *, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


class PathSyntaxError(FormStateError, ValueError):
    """Raised when a field path does not match the dot/bracket grammar."""

    def __init__(self, path: Any, reason: str):
        super().__init__(f"Invalid field path: {reason}", context={'path': path})
        self.path = path
