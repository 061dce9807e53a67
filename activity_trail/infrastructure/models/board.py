"""SQLAlchemy models for boards and their columns."""

from sqlalchemy import Column, ForeignKey, String

from activity_trail.infrastructure.database import Base


class BoardModel(Base):
    """Kanban board owning tasks, columns and activity."""

    __tablename__ = "board"

    id = Column(String(36), primary_key=True)
    title = Column(String(255), nullable=False)


class ColumnModel(Base):
    """A column (list) of a board."""

    __tablename__ = "board_column"

    id = Column(String(36), primary_key=True)
    board_id = Column(
        String(36),
        ForeignKey("board.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(255), nullable=False)


__all__ = ["BoardModel", "ColumnModel"]
