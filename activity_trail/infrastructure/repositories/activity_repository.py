"""Persistence layer for activity trail records."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from uuid import uuid4

from sqlalchemy import or_, select
from sqlalchemy.orm import Query, Session, aliased

from activity_trail.domain.entities import (
    ActivityEvent,
    ActivityReferences,
    ActivityType,
    parse_activity_type,
)
from activity_trail.infrastructure.models import (
    ActivityModel,
    BoardModel,
    ColumnModel,
    TaskModel,
    UserModel,
)
from activity_trail.utils import (
    ensure_utc_naive_datetime,
    from_utc_naive_datetime,
    now_in_app_timezone,
)


class ActivityRepository:
    """Provide append, lookup and owner-scoped mutation helpers for events."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, event: ActivityEvent) -> ActivityEvent:
        model = ActivityModel()
        model.id = event.id or uuid4().hex
        self._apply_entity_to_model(model, event)
        model.created_at = ensure_utc_naive_datetime(now_in_app_timezone())
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_content(
        self,
        activity_id: str,
        *,
        user_id: str,
        content: str,
        types: Iterable[ActivityType] | None = None,
    ) -> ActivityEvent | None:
        """Rewrite ``content`` of an owned event and return the stored row.

        Returns ``None`` when no event matches ``(activity_id, user_id)``.
        """

        model = self._owned_query(activity_id, user_id=user_id, types=types).first()
        if model is None:
            return None

        model.content = content
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete_owned(
        self,
        activity_id: str,
        *,
        user_id: str,
        types: Iterable[ActivityType] | None = None,
    ) -> bool:
        """Delete an owned event.

        Returns ``True`` when a record was removed and ``False`` when no event
        matches ``(activity_id, user_id)``.
        """

        model = self._owned_query(activity_id, user_id=user_id, types=types).first()
        if model is None:
            return False

        self.session.delete(model)
        self.session.commit()
        return True

    def delete_for_task(self, task_id: str) -> int:
        """Remove every event attached to ``task_id``."""

        removed = (
            self.session.query(ActivityModel)
            .filter(ActivityModel.task_id == task_id)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return removed

    def delete_for_board(self, board_id: str) -> int:
        """Remove every event scoped to ``board_id``."""

        removed = (
            self.session.query(ActivityModel)
            .filter(ActivityModel.board_id == board_id)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return removed

    def list_with_references(
        self,
        *,
        board_id: str | None = None,
        task_id: str | None = None,
        task_ids: Iterable[str] | None = None,
        epic_id: str | None = None,
        user_id: str | None = None,
        event_type: ActivityType | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        limit: int | None = 50,
        offset: int = 0,
    ) -> list[tuple[ActivityEvent, ActivityReferences]]:
        """Return events newest first, each joined with its display names."""

        actor = aliased(UserModel)
        target_user = aliased(UserModel)
        old_column = aliased(ColumnModel)
        new_column = aliased(ColumnModel)
        original_column = aliased(ColumnModel)

        query = (
            self.session.query(
                ActivityModel,
                actor.name.label("actor_name"),
                target_user.name.label("target_user_name"),
                TaskModel.title.label("task_title"),
                BoardModel.title.label("board_title"),
                old_column.title.label("old_column_title"),
                new_column.title.label("new_column_title"),
                original_column.title.label("original_column_title"),
            )
            .outerjoin(actor, actor.id == ActivityModel.user_id)
            .outerjoin(target_user, target_user.id == ActivityModel.target_user_id)
            .outerjoin(TaskModel, TaskModel.id == ActivityModel.task_id)
            .outerjoin(BoardModel, BoardModel.id == ActivityModel.board_id)
            .outerjoin(old_column, old_column.id == ActivityModel.old_column_id)
            .outerjoin(new_column, new_column.id == ActivityModel.new_column_id)
            .outerjoin(
                original_column,
                original_column.id == ActivityModel.original_column_id,
            )
        )

        if board_id is not None:
            query = query.filter(ActivityModel.board_id == board_id)
        if task_id is not None:
            query = query.filter(ActivityModel.task_id == task_id)
        if task_ids is not None:
            query = query.filter(ActivityModel.task_id.in_(list(task_ids)))
        if epic_id is not None:
            subtask = aliased(TaskModel)
            subtasks = select(subtask.id).where(subtask.parent_task_id == epic_id)
            query = query.filter(
                or_(ActivityModel.task_id == epic_id, ActivityModel.task_id.in_(subtasks))
            )
        if user_id is not None:
            query = query.filter(ActivityModel.user_id == user_id)
        if event_type is not None:
            query = query.filter(ActivityModel.type == event_type.value)
        if start_date is not None:
            query = query.filter(
                ActivityModel.created_at >= ensure_utc_naive_datetime(start_date)
            )
        if end_date is not None:
            query = query.filter(
                ActivityModel.created_at <= ensure_utc_naive_datetime(end_date)
            )

        query = query.order_by(ActivityModel.created_at.desc(), ActivityModel.id.desc())
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        return [
            (
                self._to_entity(row.ActivityModel),
                ActivityReferences(
                    actor_name=row.actor_name,
                    target_user_name=row.target_user_name,
                    task_title=row.task_title,
                    board_title=row.board_title,
                    old_column_title=row.old_column_title,
                    new_column_title=row.new_column_title,
                    original_column_title=row.original_column_title,
                ),
            )
            for row in query.all()
        ]

    def _owned_query(
        self,
        activity_id: str,
        *,
        user_id: str,
        types: Iterable[ActivityType] | None,
    ) -> Query:
        query = self.session.query(ActivityModel).filter(
            ActivityModel.id == activity_id,
            ActivityModel.user_id == user_id,
        )
        if types is not None:
            query = query.filter(
                ActivityModel.type.in_([member.value for member in types])
            )
        return query

    @staticmethod
    def _apply_entity_to_model(model: ActivityModel, event: ActivityEvent) -> None:
        event_type = event.event_type
        model.type = event_type.value if isinstance(event_type, ActivityType) else event_type
        model.user_id = event.user_id
        model.board_id = event.board_id
        model.task_id = event.task_id
        model.old_column_id = event.old_column_id
        model.new_column_id = event.new_column_id
        model.original_column_id = event.original_column_id
        model.target_user_id = event.target_user_id
        model.content = event.content
        model.start_date = ensure_utc_naive_datetime(event.start_date)
        model.due_date = ensure_utc_naive_datetime(event.due_date)

    @staticmethod
    def _to_entity(model: ActivityModel) -> ActivityEvent:
        return ActivityEvent(
            id=model.id,
            event_type=parse_activity_type(model.type) or model.type,
            user_id=model.user_id,
            board_id=model.board_id,
            created_at=from_utc_naive_datetime(model.created_at),
            task_id=model.task_id,
            old_column_id=model.old_column_id,
            new_column_id=model.new_column_id,
            original_column_id=model.original_column_id,
            target_user_id=model.target_user_id,
            content=model.content,
            start_date=from_utc_naive_datetime(model.start_date),
            due_date=from_utc_naive_datetime(model.due_date),
        )


__all__ = ["ActivityRepository"]
