"""Use cases for appending events to the activity trail."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from activity_trail.config import get_settings
from activity_trail.domain.entities import ActivityEvent, ActivityType
from activity_trail.domain.errors import ActivityError, PersistenceError
from activity_trail.infrastructure.repositories import ActivityRepository
from .validators import build_activity_event

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActivityRecordResult:
    """Outcome of an advisory activity write.

    Mutation handlers inspect this instead of catching exceptions; a failed
    record never changes the result of the action that triggered it.
    """

    event: ActivityEvent | None
    error: ActivityError | None = None

    @property
    def recorded(self) -> bool:
        return self.event is not None


def record_activity(
    session: Session,
    *,
    event_type: ActivityType | str,
    user_id: str,
    board_id: str,
    task_id: str | None = None,
    old_column_id: str | None = None,
    new_column_id: str | None = None,
    original_column_id: str | None = None,
    target_user_id: str | None = None,
    content: str | None = None,
    start_date: datetime | None = None,
    due_date: datetime | None = None,
) -> ActivityEvent:
    """Validate and append one event, returning the stored row.

    Raises :class:`ValidationError` when the description is invalid and
    :class:`PersistenceError` when the store rejects the write.
    """

    settings = get_settings()
    event = build_activity_event(
        event_type=event_type,
        user_id=user_id,
        board_id=board_id,
        max_content_length=settings.comment_create_max_length,
        task_id=task_id,
        old_column_id=old_column_id,
        new_column_id=new_column_id,
        original_column_id=original_column_id,
        target_user_id=target_user_id,
        content=content,
        start_date=start_date,
        due_date=due_date,
    )

    repository = ActivityRepository(session)
    try:
        saved = repository.create(event)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception(
            "Failed to persist %s activity for board %s",
            event.event_type.value,
            event.board_id,
        )
        raise PersistenceError() from exc

    logger.debug(
        "Recorded %s activity %s on board %s",
        saved.event_type,
        saved.id,
        saved.board_id,
    )
    return saved


def log_activity(
    session: Session,
    *,
    event_type: ActivityType | str,
    user_id: str,
    board_id: str,
    task_id: str | None = None,
    old_column_id: str | None = None,
    new_column_id: str | None = None,
    original_column_id: str | None = None,
    target_user_id: str | None = None,
    content: str | None = None,
    start_date: datetime | None = None,
    due_date: datetime | None = None,
) -> ActivityRecordResult:
    """Record an event on behalf of a mutation handler without raising."""

    try:
        event = record_activity(
            session,
            event_type=event_type,
            user_id=user_id,
            board_id=board_id,
            task_id=task_id,
            old_column_id=old_column_id,
            new_column_id=new_column_id,
            original_column_id=original_column_id,
            target_user_id=target_user_id,
            content=content,
            start_date=start_date,
            due_date=due_date,
        )
    except ActivityError as exc:
        logger.warning(
            "Activity %s for board %s was not recorded: %s",
            event_type,
            board_id,
            exc,
        )
        return ActivityRecordResult(event=None, error=exc)
    return ActivityRecordResult(event=event)


__all__ = ["ActivityRecordResult", "log_activity", "record_activity"]
