"""Use case assembling a rendered, reverse-chronological activity feed."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from activity_trail.config import get_settings
from activity_trail.domain.entities import (
    ActivityFeedEntry,
    ActivityFeedPage,
    ActivityType,
    parse_activity_type,
)
from activity_trail.domain.errors import PersistenceError, ValidationError
from activity_trail.domain.rendering import render_or_placeholder
from activity_trail.infrastructure.repositories import ActivityRepository
from activity_trail.utils import ensure_app_timezone

logger = logging.getLogger(__name__)

DATE_LABEL_FORMAT = "%d/%m/%Y"


def _date_label(value: datetime | None) -> str | None:
    localized = ensure_app_timezone(value)
    return localized.strftime(DATE_LABEL_FORMAT) if localized else None


def list_activity_feed(
    session: Session,
    *,
    board_id: str | None = None,
    task_id: str | None = None,
    task_ids: Iterable[str] | None = None,
    epic_id: str | None = None,
    user_id: str | None = None,
    event_type: ActivityType | str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> ActivityFeedPage:
    """Return the newest events matching the filters with their messages.

    ``epic_id`` narrows the feed to the epic task and its direct subtasks.
    """

    settings = get_settings()
    errors: list[tuple[str, str]] = []

    kind: ActivityType | None = None
    if event_type is not None:
        kind = parse_activity_type(event_type)
        if kind is None:
            errors.append(("type", f"Unknown activity type '{event_type}'"))
    if limit is None:
        limit = settings.feed_default_limit
    if limit < 1 or limit > settings.feed_max_limit:
        errors.append(
            ("limit", f"Limit must be between 1 and {settings.feed_max_limit}")
        )
    if offset < 0:
        errors.append(("offset", "Offset cannot be negative"))
    start_date = ensure_app_timezone(start_date)
    end_date = ensure_app_timezone(end_date)
    if start_date is not None and end_date is not None and start_date > end_date:
        errors.append(("start_date", "Start date must not be after end date"))
    if errors:
        raise ValidationError(errors)

    repository = ActivityRepository(session)
    try:
        rows = repository.list_with_references(
            board_id=board_id,
            task_id=task_id,
            task_ids=task_ids,
            epic_id=epic_id,
            user_id=user_id,
            event_type=kind,
            start_date=start_date,
            end_date=end_date,
            limit=limit,
            offset=offset,
        )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Failed to load the activity feed")
        raise PersistenceError("Could not load the activity feed, please try again") from exc

    entries: list[ActivityFeedEntry] = []
    for event, references in rows:
        references = replace(
            references,
            start_date_label=_date_label(event.start_date),
            due_date_label=_date_label(event.due_date),
        )
        entries.append(
            ActivityFeedEntry(
                event=event,
                references=references,
                message=render_or_placeholder(event, references),
            )
        )

    return ActivityFeedPage(entries=entries, limit=limit, offset=offset)


__all__ = ["DATE_LABEL_FORMAT", "list_activity_feed"]
