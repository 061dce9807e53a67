"""Errors raised by the activity recorder and renderer."""

from __future__ import annotations

from collections.abc import Iterable


class ActivityError(Exception):
    """Base class for activity trail failures."""


class ValidationError(ActivityError, ValueError):
    """Raised when an event description violates one or more constraints.

    ``errors`` keeps every violated constraint in the order it was found and
    ``fields`` names the offending input fields.
    """

    def __init__(self, errors: Iterable[tuple[str, str]]) -> None:
        pairs = list(errors)
        self.fields = [field_name for field_name, _ in pairs]
        self.errors = [message for _, message in pairs]
        super().__init__(", ".join(self.errors))


class PersistenceError(ActivityError):
    """Raised when the store rejects or cannot perform a write."""

    default_message = "Could not save the activity, please try again"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class NotFoundOrUnauthorized(ActivityError, LookupError):
    """Raised when an event is missing or not owned by the caller."""

    default_message = "Activity not found or access denied"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class RenderError(ActivityError):
    """Raised when an event cannot be turned into a display message."""


__all__ = [
    "ActivityError",
    "NotFoundOrUnauthorized",
    "PersistenceError",
    "RenderError",
    "ValidationError",
]
