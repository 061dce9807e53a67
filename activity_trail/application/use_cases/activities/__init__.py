"""Use cases for recording, editing and reading activity."""

from .comments import create_comment, delete_comment, edit_comment
from .list_activity_feed import list_activity_feed
from .purge_activity import purge_board_activity, purge_task_activity
from .record_activity import ActivityRecordResult, log_activity, record_activity

__all__ = [
    "ActivityRecordResult",
    "create_comment",
    "delete_comment",
    "edit_comment",
    "list_activity_feed",
    "log_activity",
    "purge_board_activity",
    "purge_task_activity",
    "record_activity",
]
