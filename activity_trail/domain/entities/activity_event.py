"""Domain entities describing recorded activity and its display context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .activity_type import ActivityType


@dataclass
class ActivityEvent:
    """One entry of a board's activity trail.

    ``event_type`` holds a raw string only when the stored value is not a
    member of :class:`ActivityType` (a row written by a newer schema).
    """

    id: str | None
    event_type: ActivityType | str
    user_id: str
    board_id: str
    created_at: datetime | None = None
    task_id: str | None = None
    old_column_id: str | None = None
    new_column_id: str | None = None
    original_column_id: str | None = None
    target_user_id: str | None = None
    content: str | None = None
    start_date: datetime | None = None
    due_date: datetime | None = None


@dataclass(frozen=True)
class ActivityReferences:
    """Display names joined in for an event.

    ``None`` means the referenced row no longer exists.
    """

    actor_name: str | None = None
    target_user_name: str | None = None
    task_title: str | None = None
    board_title: str | None = None
    old_column_title: str | None = None
    new_column_title: str | None = None
    original_column_title: str | None = None
    start_date_label: str | None = None
    due_date_label: str | None = None


@dataclass
class ActivityFeedEntry:
    """An event paired with its resolved references and rendered message."""

    event: ActivityEvent
    references: ActivityReferences = field(default_factory=ActivityReferences)
    message: str = ""


@dataclass
class ActivityFeedPage:
    """A bounded slice of an activity feed."""

    entries: list[ActivityFeedEntry]
    limit: int
    offset: int

    @property
    def total(self) -> int:
        return len(self.entries)


__all__ = [
    "ActivityEvent",
    "ActivityFeedEntry",
    "ActivityFeedPage",
    "ActivityReferences",
]
