"""SQLAlchemy model for board tasks."""

from sqlalchemy import Column, ForeignKey, String

from activity_trail.infrastructure.database import Base


class TaskModel(Base):
    """Task (card) living in a board column.

    Subtasks point at their epic through ``parent_task_id``.
    """

    __tablename__ = "task"

    id = Column(String(36), primary_key=True)
    board_id = Column(
        String(36),
        ForeignKey("board.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    parent_task_id = Column(
        String(36),
        ForeignKey("task.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    column_id = Column(String(36), nullable=True)
    title = Column(String(255), nullable=False)


__all__ = ["TaskModel"]
