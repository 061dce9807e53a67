"""Closed enumeration of activity kinds and the fields each kind carries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ActivityType(str, Enum):
    """Kinds of events recorded in a board's activity trail."""

    TASK_CREATED = "TASK_CREATED"
    TASK_UPDATED = "TASK_UPDATED"
    TASK_MOVED = "TASK_MOVED"
    TASK_ARCHIVED = "TASK_ARCHIVED"
    TASK_RESTORED = "TASK_RESTORED"
    TASK_DELETED = "TASK_DELETED"
    COMMENT_ADDED = "COMMENT_ADDED"
    MEETING_NOTE_ADDED = "MEETING_NOTE_ADDED"
    QUICK_NOTE_ADDED = "QUICK_NOTE_ADDED"
    BOARD_UPDATED = "BOARD_UPDATED"
    START_DATE_ADDED = "START_DATE_ADDED"
    START_DATE_UPDATED = "START_DATE_UPDATED"
    START_DATE_REMOVED = "START_DATE_REMOVED"
    DUE_DATE_ADDED = "DUE_DATE_ADDED"
    DUE_DATE_UPDATED = "DUE_DATE_UPDATED"
    DUE_DATE_REMOVED = "DUE_DATE_REMOVED"
    TASK_ASSIGNED = "TASK_ASSIGNED"
    TASK_UNASSIGNED = "TASK_UNASSIGNED"
    WATCHER_ADDED = "WATCHER_ADDED"
    WATCHER_REMOVED = "WATCHER_REMOVED"
    MEMBER_ADDED = "MEMBER_ADDED"
    MEMBER_REMOVED = "MEMBER_REMOVED"
    LABEL_ADDED = "LABEL_ADDED"
    LABEL_REMOVED = "LABEL_REMOVED"
    DEPENDENCY_ADDED = "DEPENDENCY_ADDED"
    DEPENDENCY_REMOVED = "DEPENDENCY_REMOVED"
    EPIC_CREATED = "EPIC_CREATED"
    EPIC_UPDATED = "EPIC_UPDATED"

    @property
    def is_comment(self) -> bool:
        """Return ``True`` for kinds whose content is user-authored text."""

        return self in COMMENT_TYPES


COMMENT_TYPES: frozenset[ActivityType] = frozenset(
    {
        ActivityType.COMMENT_ADDED,
        ActivityType.MEETING_NOTE_ADDED,
        ActivityType.QUICK_NOTE_ADDED,
    }
)

# Optional per-event fields, in the order they are stored.
REFERENCE_FIELDS: tuple[str, ...] = (
    "task_id",
    "old_column_id",
    "new_column_id",
    "original_column_id",
    "target_user_id",
    "content",
    "start_date",
    "due_date",
)


@dataclass(frozen=True)
class EventFields:
    """Reference fields that are meaningful (and mandatory) for one kind."""

    allowed: frozenset[str]
    required: frozenset[str]

    @classmethod
    def of(cls, *allowed: str, required: tuple[str, ...] = ()) -> "EventFields":
        return cls(allowed=frozenset(allowed), required=frozenset(required))


_TASK = ("task_id",)
_ON_TASK = EventFields.of("task_id", required=_TASK)
_TASK_TEXT = EventFields.of("task_id", "content", required=("task_id", "content"))
_TASK_USER = EventFields.of(
    "task_id", "target_user_id", required=("task_id", "target_user_id")
)

EVENT_FIELDS: dict[ActivityType, EventFields] = {
    ActivityType.TASK_CREATED: EventFields.of(
        "task_id", "original_column_id", required=_TASK
    ),
    ActivityType.TASK_UPDATED: _ON_TASK,
    ActivityType.TASK_MOVED: EventFields.of(
        "task_id",
        "old_column_id",
        "new_column_id",
        required=("task_id", "old_column_id", "new_column_id"),
    ),
    ActivityType.TASK_ARCHIVED: EventFields.of(
        "task_id", "original_column_id", required=_TASK
    ),
    ActivityType.TASK_RESTORED: EventFields.of(
        "task_id",
        "original_column_id",
        required=("task_id", "original_column_id"),
    ),
    ActivityType.TASK_DELETED: EventFields.of("content"),
    ActivityType.COMMENT_ADDED: _TASK_TEXT,
    ActivityType.MEETING_NOTE_ADDED: _TASK_TEXT,
    ActivityType.QUICK_NOTE_ADDED: _TASK_TEXT,
    ActivityType.BOARD_UPDATED: EventFields.of(),
    ActivityType.START_DATE_ADDED: EventFields.of(
        "task_id", "start_date", required=_TASK
    ),
    ActivityType.START_DATE_UPDATED: EventFields.of(
        "task_id", "start_date", required=_TASK
    ),
    ActivityType.START_DATE_REMOVED: _ON_TASK,
    ActivityType.DUE_DATE_ADDED: EventFields.of("task_id", "due_date", required=_TASK),
    ActivityType.DUE_DATE_UPDATED: EventFields.of(
        "task_id", "due_date", required=_TASK
    ),
    ActivityType.DUE_DATE_REMOVED: _ON_TASK,
    ActivityType.TASK_ASSIGNED: _TASK_USER,
    ActivityType.TASK_UNASSIGNED: _TASK_USER,
    ActivityType.WATCHER_ADDED: _TASK_USER,
    ActivityType.WATCHER_REMOVED: _TASK_USER,
    ActivityType.MEMBER_ADDED: EventFields.of(
        "target_user_id", required=("target_user_id",)
    ),
    ActivityType.MEMBER_REMOVED: EventFields.of(
        "target_user_id", required=("target_user_id",)
    ),
    ActivityType.LABEL_ADDED: _TASK_TEXT,
    ActivityType.LABEL_REMOVED: _TASK_TEXT,
    ActivityType.DEPENDENCY_ADDED: _TASK_TEXT,
    ActivityType.DEPENDENCY_REMOVED: _TASK_TEXT,
    ActivityType.EPIC_CREATED: _ON_TASK,
    ActivityType.EPIC_UPDATED: _ON_TASK,
}


def parse_activity_type(value: "ActivityType | str") -> ActivityType | None:
    """Return the enumeration member for ``value`` or ``None`` when unknown."""

    if isinstance(value, ActivityType):
        return value
    try:
        return ActivityType(str(value).strip().upper())
    except ValueError:
        return None


__all__ = [
    "ActivityType",
    "COMMENT_TYPES",
    "EVENT_FIELDS",
    "EventFields",
    "REFERENCE_FIELDS",
    "parse_activity_type",
]
