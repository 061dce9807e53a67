"""SQLAlchemy model for recorded activity events."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Text

from activity_trail.infrastructure.database import Base


class ActivityModel(Base):
    """Database representation of one activity trail entry.

    Actor, target user and column identifiers are plain columns so the trail
    survives the deletion of those rows; tasks and boards own their events.
    """

    __tablename__ = "activity"
    __table_args__ = (
        Index("ix_activity_board_created", "board_id", "created_at"),
        Index("ix_activity_task_created", "task_id", "created_at"),
    )

    id = Column(String(36), primary_key=True)
    type = Column(String(50), nullable=False, index=True)
    user_id = Column(String(36), nullable=False, index=True)
    board_id = Column(
        String(36),
        ForeignKey("board.id", ondelete="CASCADE"),
        nullable=False,
    )
    task_id = Column(
        String(36),
        ForeignKey("task.id", ondelete="CASCADE"),
        nullable=True,
    )
    old_column_id = Column(String(36), nullable=True)
    new_column_id = Column(String(36), nullable=True)
    original_column_id = Column(String(36), nullable=True)
    target_user_id = Column(String(36), nullable=True)
    content = Column(Text, nullable=True)
    start_date = Column(DateTime(), nullable=True)
    due_date = Column(DateTime(), nullable=True)
    created_at = Column(DateTime(), nullable=False)


__all__ = ["ActivityModel"]
