"""Pydantic schemas for activity endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ActivityRead(BaseModel):
    """One feed entry with its rendered message."""

    id: str = Field(..., description="Unique identifier of the activity")
    type: str = Field(..., description="Kind of event that was recorded")
    user_id: str = Field(..., description="User who performed the action")
    board_id: str
    task_id: str | None = None
    old_column_id: str | None = None
    new_column_id: str | None = None
    original_column_id: str | None = None
    target_user_id: str | None = None
    content: str | None = None
    start_date: datetime | None = None
    due_date: datetime | None = None
    created_at: datetime | None = None
    actor_name: str | None = None
    target_user_name: str | None = None
    task_title: str | None = None
    board_title: str | None = None
    old_column_title: str | None = None
    new_column_title: str | None = None
    original_column_title: str | None = None
    message: str = Field(..., description="Human readable description of the event")

    model_config = ConfigDict(from_attributes=True)


class ActivityFeedRead(BaseModel):
    """A page of the activity feed."""

    activities: list[ActivityRead] = Field(default_factory=list)
    total: int
    limit: int
    offset: int


class CommentCreate(BaseModel):
    """Payload used to add a comment to a task."""

    task_id: str
    board_id: str
    content: str


class CommentUpdate(BaseModel):
    """Payload used to rewrite a comment."""

    content: str


class ActivityMutationResponse(BaseModel):
    """Confirmation returned after a comment is created or edited."""

    success: bool
    message: str
    id: str | None = None


__all__ = [
    "ActivityFeedRead",
    "ActivityMutationResponse",
    "ActivityRead",
    "CommentCreate",
    "CommentUpdate",
]
