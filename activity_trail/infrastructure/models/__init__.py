"""ORM models used by the application infrastructure."""

from .activity import ActivityModel
from .board import BoardModel, ColumnModel
from .task import TaskModel
from .user import UserModel

__all__ = [
    "ActivityModel",
    "BoardModel",
    "ColumnModel",
    "TaskModel",
    "UserModel",
]
