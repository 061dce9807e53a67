"""Aggregate application use cases."""

from .activities import list_activity_feed, log_activity, record_activity

__all__ = [
    "list_activity_feed",
    "log_activity",
    "record_activity",
]
