"""Domain entities exposed by the application."""

from .activity_event import (
    ActivityEvent,
    ActivityFeedEntry,
    ActivityFeedPage,
    ActivityReferences,
)
from .activity_type import (
    COMMENT_TYPES,
    EVENT_FIELDS,
    REFERENCE_FIELDS,
    ActivityType,
    EventFields,
    parse_activity_type,
)

__all__ = [
    "ActivityEvent",
    "ActivityFeedEntry",
    "ActivityFeedPage",
    "ActivityReferences",
    "ActivityType",
    "COMMENT_TYPES",
    "EVENT_FIELDS",
    "EventFields",
    "REFERENCE_FIELDS",
    "parse_activity_type",
]
