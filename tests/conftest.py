"""Shared fixtures: an in-memory database seeded with a small board."""

from __future__ import annotations

import os
import pathlib
import sys
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["APP_TIMEZONE"] = "UTC"

import pytest


@pytest.fixture(autouse=True)
def reset_database():
    """Recreate every table so each test starts from an empty store."""

    from activity_trail.infrastructure import database

    database.initialize_database()
    database.Base.metadata.drop_all(bind=database.engine)
    database.Base.metadata.create_all(bind=database.engine)
    yield


@pytest.fixture(autouse=True)
def ticking_clock(monkeypatch):
    """Give every recorded event a distinct, increasing timestamp."""

    from activity_trail.infrastructure.repositories import activity_repository

    start = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)
    ticks = iter(range(1, 100_000))

    def fake_now() -> datetime:
        return start + timedelta(seconds=next(ticks))

    monkeypatch.setattr(activity_repository, "now_in_app_timezone", fake_now)
    return start


@pytest.fixture()
def settings_override(monkeypatch):
    """Return a helper that sets environment overrides and reloads settings."""

    from activity_trail.config import reset_settings_cache
    from activity_trail.utils import get_app_timezone

    def apply(**values: str) -> None:
        for name, value in values.items():
            monkeypatch.setenv(name.upper(), str(value))
        reset_settings_cache()
        get_app_timezone.cache_clear()

    yield apply
    reset_settings_cache()
    get_app_timezone.cache_clear()


@pytest.fixture()
def session():
    from activity_trail.infrastructure import database

    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def board(session):
    """Seed two boards with users, columns and tasks and return their ids."""

    from activity_trail.infrastructure.models import (
        BoardModel,
        ColumnModel,
        TaskModel,
        UserModel,
    )

    session.add_all(
        [
            UserModel(id="user-ana", name="Ana", email="ana@example.com"),
            UserModel(id="user-ben", name="Ben", email="ben@example.com"),
            UserModel(id="user-cleo", name="Cleo", email="cleo@example.com"),
            BoardModel(id="board-1", title="Roadmap"),
            BoardModel(id="board-2", title="Marketing"),
        ]
    )
    session.flush()
    session.add_all(
        [
            ColumnModel(id="col-todo", board_id="board-1", title="To Do"),
            ColumnModel(id="col-doing", board_id="board-1", title="In Progress"),
            ColumnModel(id="col-done", board_id="board-1", title="Done"),
            ColumnModel(id="col-ideas", board_id="board-2", title="Ideas"),
            TaskModel(id="task-1", board_id="board-1", column_id="col-todo", title="Fix login"),
            TaskModel(id="task-2", board_id="board-1", column_id="col-todo", title="Write docs"),
            TaskModel(id="task-3", board_id="board-2", column_id="col-ideas", title="Launch post"),
        ]
    )
    session.commit()
    return SimpleNamespace(
        id="board-1",
        other_id="board-2",
        ana="user-ana",
        ben="user-ben",
        cleo="user-cleo",
        todo="col-todo",
        doing="col-doing",
        done="col-done",
        task="task-1",
        second_task="task-2",
        other_task="task-3",
    )
