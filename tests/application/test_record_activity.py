"""Tests for recording activity events."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest

from activity_trail.application.use_cases.activities import (
    create_comment,
    list_activity_feed,
    log_activity,
    record_activity,
)
from activity_trail.domain.entities import ActivityType
from activity_trail.domain.errors import PersistenceError, ValidationError
from activity_trail.infrastructure.models import ActivityModel
from activity_trail.infrastructure.repositories import activity_repository


def _count(session) -> int:
    return session.query(ActivityModel).count()


def test_record_persists_exactly_one_row(session, board, ticking_clock):
    event = record_activity(
        session,
        event_type=ActivityType.TASK_MOVED,
        user_id=board.ana,
        board_id=board.id,
        task_id=board.task,
        old_column_id=board.todo,
        new_column_id=board.done,
    )

    assert _count(session) == 1
    assert event.id
    assert event.event_type is ActivityType.TASK_MOVED
    assert event.user_id == board.ana
    assert event.board_id == board.id
    assert event.created_at is not None
    assert event.created_at > ticking_clock

    stored = session.get(ActivityModel, event.id)
    assert stored.type == "TASK_MOVED"
    assert stored.old_column_id == board.todo
    assert stored.new_column_id == board.done


def test_record_accepts_type_names_and_trims_identifiers(session, board):
    event = record_activity(
        session,
        event_type="task_assigned",
        user_id=f"  {board.ana} ",
        board_id=board.id,
        task_id=board.task,
        target_user_id=board.ben,
    )

    assert event.event_type is ActivityType.TASK_ASSIGNED
    assert event.user_id == board.ana


def test_comment_content_is_trimmed(session, board):
    event = create_comment(
        session,
        user_id=board.ana,
        task_id=board.task,
        board_id=board.id,
        content="   Looks good  ",
    )

    assert event.content == "Looks good"


def test_comment_longer_than_creation_limit_is_rejected(session, board):
    with pytest.raises(ValidationError) as exc_info:
        create_comment(
            session,
            user_id=board.ana,
            task_id=board.task,
            board_id=board.id,
            content="x" * 2001,
        )

    assert exc_info.value.fields == ["content"]
    assert "max 2000" in str(exc_info.value)
    assert _count(session) == 0


def test_comment_at_creation_limit_is_accepted(session, board):
    create_comment(
        session,
        user_id=board.ana,
        task_id=board.task,
        board_id=board.id,
        content="x" * 2000,
    )

    assert _count(session) == 1


def test_creation_limit_is_configurable(session, board, settings_override):
    settings_override(comment_create_max_length=5)

    with pytest.raises(ValidationError):
        create_comment(
            session,
            user_id=board.ana,
            task_id=board.task,
            board_id=board.id,
            content="too long",
        )


@pytest.mark.parametrize("content", ["", "   ", "\n\t ", None])
def test_blank_comment_is_rejected(session, board, content):
    with pytest.raises(ValidationError) as exc_info:
        record_activity(
            session,
            event_type=ActivityType.COMMENT_ADDED,
            user_id=board.ana,
            board_id=board.id,
            task_id=board.task,
            content=content,
        )

    assert "content" in exc_info.value.fields
    assert _count(session) == 0


def test_all_violations_are_reported_together(session, board):
    with pytest.raises(ValidationError) as exc_info:
        record_activity(
            session,
            event_type=ActivityType.COMMENT_ADDED,
            user_id=" ",
            board_id="",
            content="   ",
        )

    error = exc_info.value
    assert error.fields == ["user_id", "board_id", "task_id", "content"]
    assert str(error) == ", ".join(error.errors)


def test_fields_outside_the_type_are_rejected(session, board):
    with pytest.raises(ValidationError) as exc_info:
        record_activity(
            session,
            event_type=ActivityType.TASK_UPDATED,
            user_id=board.ana,
            board_id=board.id,
            task_id=board.task,
            target_user_id=board.ben,
        )

    assert exc_info.value.fields == ["target_user_id"]
    assert _count(session) == 0


def test_required_references_are_enforced(session, board):
    with pytest.raises(ValidationError) as exc_info:
        record_activity(
            session,
            event_type=ActivityType.TASK_MOVED,
            user_id=board.ana,
            board_id=board.id,
            task_id=board.task,
            new_column_id=board.done,
        )

    assert exc_info.value.fields == ["old_column_id"]


def test_unknown_type_is_a_validation_error(session, board):
    with pytest.raises(ValidationError) as exc_info:
        record_activity(
            session,
            event_type="TASK_TELEPORTED",
            user_id=board.ana,
            board_id=board.id,
        )

    assert "type" in exc_info.value.fields


def test_dates_are_stored_for_date_events(session, board):
    due = datetime(2024, 6, 30, 17, 0, tzinfo=timezone.utc)

    event = record_activity(
        session,
        event_type=ActivityType.DUE_DATE_ADDED,
        user_id=board.ana,
        board_id=board.id,
        task_id=board.task,
        due_date=due,
    )

    assert event.due_date == due
    assert event.start_date is None


def test_store_failure_raises_persistence_error(session, board, caplog):
    with caplog.at_level(logging.ERROR):
        with pytest.raises(PersistenceError) as exc_info:
            record_activity(
                session,
                event_type=ActivityType.BOARD_UPDATED,
                user_id=board.ana,
                board_id="board-that-does-not-exist",
            )

    assert "try again" in str(exc_info.value)
    assert "FOREIGN KEY" not in str(exc_info.value)
    assert "Failed to persist" in caplog.text
    assert _count(session) == 0


def test_log_activity_returns_the_stored_event(session, board):
    result = log_activity(
        session,
        event_type=ActivityType.MEMBER_ADDED,
        user_id=board.ana,
        board_id=board.id,
        target_user_id=board.cleo,
    )

    assert result.recorded is True
    assert result.error is None
    assert result.event.target_user_id == board.cleo


def test_log_activity_never_raises_on_validation_failure(session, board, caplog):
    with caplog.at_level(logging.WARNING):
        result = log_activity(
            session,
            event_type=ActivityType.COMMENT_ADDED,
            user_id=board.ana,
            board_id=board.id,
            task_id=board.task,
            content="   ",
        )

    assert result.recorded is False
    assert isinstance(result.error, ValidationError)
    assert "was not recorded" in caplog.text


def test_log_activity_never_raises_on_store_failure(session, board):
    result = log_activity(
        session,
        event_type=ActivityType.TASK_UPDATED,
        user_id=board.ana,
        board_id=board.id,
        task_id="task-that-does-not-exist",
    )

    assert result.recorded is False
    assert isinstance(result.error, PersistenceError)

    # The session is still usable for the caller's own work.
    follow_up = log_activity(
        session,
        event_type=ActivityType.TASK_UPDATED,
        user_id=board.ana,
        board_id=board.id,
        task_id=board.task,
    )
    assert follow_up.recorded is True


def test_recorded_move_renders_with_column_names(session, board):
    record_activity(
        session,
        event_type=ActivityType.TASK_MOVED,
        user_id=board.ana,
        board_id=board.id,
        task_id=board.task,
        old_column_id=board.todo,
        new_column_id=board.done,
    )

    page = list_activity_feed(session, board_id=board.id)

    message = page.entries[0].message
    assert "Ana" in message
    assert "To Do" in message
    assert "Done" in message


def test_recorded_comment_renders_as_a_comment(session, board):
    create_comment(
        session,
        user_id=board.ana,
        task_id=board.task,
        board_id=board.id,
        content="Looks good",
    )

    page = list_activity_feed(session, task_id=board.task)

    assert page.entries[0].message == 'Ana commented on "Fix login": "Looks good"'


def test_whitespace_comment_writes_nothing(session, board):
    with pytest.raises(ValidationError):
        create_comment(
            session,
            user_id=board.ana,
            task_id=board.task,
            board_id=board.id,
            content="   ",
        )

    assert list_activity_feed(session, board_id=board.id).entries == []


def test_timestamps_keep_order_across_daylight_saving_fallback(
    session, board, settings_override, monkeypatch
):
    try:
        ZoneInfo("America/New_York")
    except ZoneInfoNotFoundError:
        pytest.skip("tz database not available")
    settings_override(app_timezone="America/New_York")
    # 01:30 EDT and then 01:10 EST, forty minutes later.
    instants = iter(
        [
            datetime(2024, 11, 3, 5, 30, tzinfo=timezone.utc),
            datetime(2024, 11, 3, 6, 10, tzinfo=timezone.utc),
        ]
    )
    monkeypatch.setattr(activity_repository, "now_in_app_timezone", lambda: next(instants))

    first = record_activity(
        session,
        event_type=ActivityType.TASK_UPDATED,
        user_id=board.ana,
        board_id=board.id,
        task_id=board.task,
    )
    second = record_activity(
        session,
        event_type=ActivityType.TASK_UPDATED,
        user_id=board.ben,
        board_id=board.id,
        task_id=board.task,
    )

    assert second.created_at - first.created_at == timedelta(minutes=40)
    assert session.get(ActivityModel, first.id).created_at == datetime(2024, 11, 3, 5, 30)
    assert session.get(ActivityModel, second.id).created_at == datetime(2024, 11, 3, 6, 10)

    page = list_activity_feed(session, board_id=board.id)
    assert [entry.event.id for entry in page.entries] == [second.id, first.id]

    later_only = list_activity_feed(
        session,
        board_id=board.id,
        start_date=datetime(2024, 11, 3, 5, 50, tzinfo=timezone.utc),
    )
    assert [entry.event.id for entry in later_only.entries] == [second.id]
