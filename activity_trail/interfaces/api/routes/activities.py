"""Endpoints for reading the activity feed and managing comments."""

from __future__ import annotations

from datetime import datetime
from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from activity_trail.application.use_cases.activities import (
    create_comment as create_comment_uc,
    delete_comment as delete_comment_uc,
    edit_comment as edit_comment_uc,
    list_activity_feed,
)
from activity_trail.domain.entities import ActivityFeedEntry, ActivityType
from activity_trail.domain.errors import (
    NotFoundOrUnauthorized,
    PersistenceError,
    ValidationError,
)
from activity_trail.infrastructure.database import get_db
from activity_trail.interfaces.api.dependencies import get_current_actor_id
from activity_trail.interfaces.api.schemas import (
    ActivityFeedRead,
    ActivityMutationResponse,
    ActivityRead,
    CommentCreate,
    CommentUpdate,
)

router = APIRouter(prefix="/activities", tags=["activities"])


def _entry_to_schema(entry: ActivityFeedEntry) -> ActivityRead:
    event = entry.event
    refs = entry.references
    event_type = event.event_type
    return ActivityRead(
        id=event.id or "",
        type=event_type.value if isinstance(event_type, ActivityType) else str(event_type),
        user_id=event.user_id,
        board_id=event.board_id,
        task_id=event.task_id,
        old_column_id=event.old_column_id,
        new_column_id=event.new_column_id,
        original_column_id=event.original_column_id,
        target_user_id=event.target_user_id,
        content=event.content,
        start_date=event.start_date,
        due_date=event.due_date,
        created_at=event.created_at,
        actor_name=refs.actor_name,
        target_user_name=refs.target_user_name,
        task_title=refs.task_title,
        board_title=refs.board_title,
        old_column_title=refs.old_column_title,
        new_column_title=refs.new_column_title,
        original_column_title=refs.original_column_title,
        message=entry.message,
    )


def _raise_http_error(exc: Exception) -> NoReturn:
    if isinstance(exc, ValidationError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if isinstance(exc, NotFoundOrUnauthorized):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    if isinstance(exc, PersistenceError):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    raise exc


@router.get("/", response_model=ActivityFeedRead)
def read_activity_feed(
    board_id: str | None = None,
    task_id: str | None = None,
    epic_id: str | None = None,
    user_id: str | None = None,
    activity_type: str | None = Query(None, alias="type"),
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    limit: int | None = Query(None, ge=1, description="Maximum number of entries"),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    _: str = Depends(get_current_actor_id),
) -> ActivityFeedRead:
    """Return the newest activity matching the filters, newest first."""

    try:
        page = list_activity_feed(
            db,
            board_id=board_id,
            task_id=task_id,
            epic_id=epic_id,
            user_id=user_id,
            event_type=activity_type,
            start_date=start_date,
            end_date=end_date,
            limit=limit,
            offset=offset,
        )
    except (ValidationError, PersistenceError) as exc:
        _raise_http_error(exc)

    return ActivityFeedRead(
        activities=[_entry_to_schema(entry) for entry in page.entries],
        total=page.total,
        limit=page.limit,
        offset=page.offset,
    )


@router.post(
    "/comments",
    response_model=ActivityMutationResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_comment(
    payload: CommentCreate,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor_id),
) -> ActivityMutationResponse:
    """Add a comment to a task."""

    try:
        event = create_comment_uc(
            db,
            user_id=actor_id,
            task_id=payload.task_id,
            board_id=payload.board_id,
            content=payload.content,
        )
    except (ValidationError, PersistenceError) as exc:
        _raise_http_error(exc)
    return ActivityMutationResponse(success=True, message="Comment added", id=event.id)


@router.put("/{activity_id}", response_model=ActivityMutationResponse)
def update_comment(
    activity_id: str,
    payload: CommentUpdate,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor_id),
) -> ActivityMutationResponse:
    """Rewrite a comment written by the caller."""

    try:
        event = edit_comment_uc(
            db, activity_id=activity_id, user_id=actor_id, content=payload.content
        )
    except (ValidationError, NotFoundOrUnauthorized, PersistenceError) as exc:
        _raise_http_error(exc)
    return ActivityMutationResponse(success=True, message="Comment updated", id=event.id)


@router.delete("/{activity_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    activity_id: str,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor_id),
) -> Response:
    """Delete a comment written by the caller."""

    try:
        delete_comment_uc(db, activity_id=activity_id, user_id=actor_id)
    except (ValidationError, NotFoundOrUnauthorized, PersistenceError) as exc:
        _raise_http_error(exc)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
