"""Use cases for comment-kind events: create, edit and delete."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from activity_trail.config import get_settings
from activity_trail.domain.entities import COMMENT_TYPES, ActivityEvent, ActivityType
from activity_trail.domain.errors import NotFoundOrUnauthorized, PersistenceError
from activity_trail.infrastructure.repositories import ActivityRepository
from .record_activity import record_activity
from .validators import ensure_identifier, ensure_valid_content

logger = logging.getLogger(__name__)


def create_comment(
    session: Session,
    *,
    user_id: str,
    task_id: str,
    board_id: str,
    content: str,
) -> ActivityEvent:
    """Add a comment to a task on behalf of ``user_id``."""

    return record_activity(
        session,
        event_type=ActivityType.COMMENT_ADDED,
        user_id=user_id,
        board_id=board_id,
        task_id=task_id,
        content=content,
    )


def edit_comment(
    session: Session,
    *,
    activity_id: str,
    user_id: str,
    content: str,
) -> ActivityEvent:
    """Rewrite the body of a comment owned by ``user_id``.

    Only ``content`` changes. A comment that does not exist, is not a comment
    kind, or belongs to someone else raises :class:`NotFoundOrUnauthorized`.
    """

    settings = get_settings()
    activity_id = ensure_identifier(activity_id, field_name="activity_id", label="Activity id")
    user_id = ensure_identifier(user_id, field_name="user_id", label="User id")
    normalized = ensure_valid_content(
        content, max_length=settings.comment_edit_max_length
    )

    repository = ActivityRepository(session)
    try:
        updated = repository.update_content(
            activity_id, user_id=user_id, content=normalized, types=COMMENT_TYPES
        )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Failed to update activity %s", activity_id)
        raise PersistenceError() from exc

    if updated is None:
        raise NotFoundOrUnauthorized()
    return updated


def delete_comment(session: Session, *, activity_id: str, user_id: str) -> None:
    """Remove a comment owned by ``user_id``."""

    activity_id = ensure_identifier(activity_id, field_name="activity_id", label="Activity id")
    user_id = ensure_identifier(user_id, field_name="user_id", label="User id")

    repository = ActivityRepository(session)
    try:
        removed = repository.delete_owned(
            activity_id, user_id=user_id, types=COMMENT_TYPES
        )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Failed to delete activity %s", activity_id)
        raise PersistenceError() from exc

    if not removed:
        raise NotFoundOrUnauthorized()


__all__ = ["create_comment", "delete_comment", "edit_comment"]
