"""Use cases removing the events owned by a deleted task or board."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from activity_trail.domain.errors import PersistenceError
from activity_trail.infrastructure.repositories import ActivityRepository
from .validators import ensure_identifier

logger = logging.getLogger(__name__)


def purge_task_activity(session: Session, task_id: str) -> int:
    """Delete every event of ``task_id`` and return how many were removed."""

    task_id = ensure_identifier(task_id, field_name="task_id", label="Task id")
    try:
        removed = ActivityRepository(session).delete_for_task(task_id)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Failed to purge activity of task %s", task_id)
        raise PersistenceError() from exc
    logger.info("Purged %d activity entries of task %s", removed, task_id)
    return removed


def purge_board_activity(session: Session, board_id: str) -> int:
    """Delete every event scoped to ``board_id`` and return the count."""

    board_id = ensure_identifier(board_id, field_name="board_id", label="Board id")
    try:
        removed = ActivityRepository(session).delete_for_board(board_id)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Failed to purge activity of board %s", board_id)
        raise PersistenceError() from exc
    logger.info("Purged %d activity entries of board %s", removed, board_id)
    return removed


__all__ = ["purge_board_activity", "purge_task_activity"]
