"""Validation helpers for activity use cases."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from activity_trail.domain.entities import (
    EVENT_FIELDS,
    REFERENCE_FIELDS,
    ActivityEvent,
    ActivityType,
    parse_activity_type,
)
from activity_trail.domain.errors import ValidationError

CONTENT_REQUIRED_MESSAGE = "Content cannot be empty"

_FIELD_LABELS = {
    "task_id": "Task id",
    "old_column_id": "Previous column id",
    "new_column_id": "New column id",
    "original_column_id": "Original column id",
    "target_user_id": "Target user id",
    "content": "Content",
    "start_date": "Start date",
    "due_date": "Due date",
}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _normalize(value: Any) -> Any:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def content_errors(content: Any, *, max_length: int) -> list[tuple[str, str]]:
    """Return the constraints ``content`` violates, if any."""

    if not isinstance(content, str) or not content.strip():
        return [("content", CONTENT_REQUIRED_MESSAGE)]
    if len(content.strip()) > max_length:
        return [("content", f"Content too long (max {max_length} chars)")]
    return []


def ensure_valid_content(content: Any, *, max_length: int) -> str:
    """Return the trimmed ``content`` or raise :class:`ValidationError`."""

    errors = content_errors(content, max_length=max_length)
    if errors:
        raise ValidationError(errors)
    return content.strip()


def ensure_identifier(value: Any, *, field_name: str, label: str) -> str:
    """Return the trimmed identifier or raise :class:`ValidationError`."""

    if _is_blank(value) or not isinstance(value, str):
        raise ValidationError([(field_name, f"{label} is required")])
    return value.strip()


def build_activity_event(
    *,
    event_type: ActivityType | str,
    user_id: str,
    board_id: str,
    max_content_length: int,
    task_id: str | None = None,
    old_column_id: str | None = None,
    new_column_id: str | None = None,
    original_column_id: str | None = None,
    target_user_id: str | None = None,
    content: str | None = None,
    start_date: datetime | None = None,
    due_date: datetime | None = None,
) -> ActivityEvent:
    """Validate an event description and return the entity to persist.

    Every violated constraint is collected so callers can report them at once.
    """

    errors: list[tuple[str, str]] = []
    if not isinstance(user_id, str) or not user_id.strip():
        errors.append(("user_id", "User id is required"))
    if not isinstance(board_id, str) or not board_id.strip():
        errors.append(("board_id", "Board id is required"))

    kind = parse_activity_type(event_type)
    if kind is None:
        errors.append(("type", f"Unknown activity type '{event_type}'"))
        raise ValidationError(errors)

    values = {
        "task_id": task_id,
        "old_column_id": old_column_id,
        "new_column_id": new_column_id,
        "original_column_id": original_column_id,
        "target_user_id": target_user_id,
        "content": content,
        "start_date": start_date,
        "due_date": due_date,
    }
    fields = EVENT_FIELDS[kind]
    for field_name in REFERENCE_FIELDS:
        value = values[field_name]
        label = _FIELD_LABELS[field_name]
        if field_name not in fields.allowed:
            if not _is_blank(value):
                errors.append(
                    (field_name, f"{label} is not used by {kind.value} events")
                )
            continue
        if field_name == "content":
            if field_name in fields.required or not _is_blank(value):
                errors.extend(content_errors(value, max_length=max_content_length))
            continue
        if field_name in fields.required and _is_blank(value):
            errors.append((field_name, f"{label} is required for {kind.value} events"))

    if errors:
        raise ValidationError(errors)

    normalized = {name: _normalize(value) for name, value in values.items()}
    return ActivityEvent(
        id=None,
        event_type=kind,
        user_id=user_id.strip(),
        board_id=board_id.strip(),
        **normalized,
    )


__all__ = [
    "CONTENT_REQUIRED_MESSAGE",
    "build_activity_event",
    "content_errors",
    "ensure_identifier",
    "ensure_valid_content",
]
