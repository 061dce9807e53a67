"""Turn stored activity events into human readable sentences.

Every :class:`ActivityType` member maps to exactly one template. A template
receives the event and the display names resolved for it and only reads the
fields that are meaningful for its kind (see ``EVENT_FIELDS``). Referents that
were deleted after the event was written render as generic placeholders so
the trail always stays readable.

Comment-kind messages include a short plain-text preview of the body: tags are
stripped, entities decoded, whitespace collapsed and the result cut to
``COMMENT_PREVIEW_LENGTH`` characters.
"""

from __future__ import annotations

import html
import logging
import re
from collections.abc import Callable
from typing import Final

from activity_trail.domain.entities import (
    ActivityEvent,
    ActivityReferences,
    ActivityType,
    parse_activity_type,
)
from activity_trail.domain.errors import RenderError

logger = logging.getLogger(__name__)

ACTOR_PLACEHOLDER: Final[str] = "A removed user"
USER_PLACEHOLDER: Final[str] = "a removed user"
TASK_PLACEHOLDER: Final[str] = "a deleted task"
COLUMN_PLACEHOLDER: Final[str] = "a deleted column"
BOARD_PLACEHOLDER: Final[str] = "a deleted board"
UNRECOGNIZED_ACTIVITY_MESSAGE: Final[str] = "Unrecognized activity"
COMMENT_PREVIEW_LENGTH: Final[int] = 80

_BLOCK_TAG_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"</p>|<br\s*/?>", re.IGNORECASE
)
_TAG_PATTERN: Final[re.Pattern[str]] = re.compile(r"<[^>]*>")
_WHITESPACE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\s+")

_Template = Callable[[ActivityEvent, ActivityReferences], str]


def _present(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _quoted(value: str | None, placeholder: str) -> str:
    text = _present(value)
    return f'"{text}"' if text else placeholder


def _plain(value: str | None, placeholder: str) -> str:
    return _present(value) or placeholder


def comment_preview(content: str | None, *, length: int = COMMENT_PREVIEW_LENGTH) -> str:
    """Return a single-line plain text excerpt of ``content``."""

    if not content:
        return ""
    text = _BLOCK_TAG_PATTERN.sub(" ", content)
    text = _TAG_PATTERN.sub("", text)
    text = html.unescape(text).replace("\xa0", " ")
    text = _WHITESPACE_PATTERN.sub(" ", text).strip()
    if len(text) <= length:
        return text
    return text[: length - 1].rstrip() + "…"


def _task(refs: ActivityReferences) -> str:
    return _quoted(refs.task_title, TASK_PLACEHOLDER)


def _target_user(refs: ActivityReferences) -> str:
    return _plain(refs.target_user_name, USER_PLACEHOLDER)


def _board(refs: ActivityReferences) -> str:
    return _quoted(refs.board_title, BOARD_PLACEHOLDER)


def _with_preview(sentence: str, event: ActivityEvent) -> str:
    preview = comment_preview(event.content)
    return f'{sentence}: "{preview}"' if preview else sentence


def _with_date(sentence: str, label: str | None) -> str:
    text = _present(label)
    return f"{sentence} to {text}" if text else sentence


def _task_created(event: ActivityEvent, refs: ActivityReferences) -> str:
    sentence = f"created {_task(refs)}"
    if event.original_column_id:
        sentence += f" in {_plain(refs.original_column_title, COLUMN_PLACEHOLDER)}"
    return sentence


def _task_updated(event: ActivityEvent, refs: ActivityReferences) -> str:
    return f"updated {_task(refs)}"


def _task_moved(event: ActivityEvent, refs: ActivityReferences) -> str:
    old_column = _plain(refs.old_column_title, COLUMN_PLACEHOLDER)
    new_column = _plain(refs.new_column_title, COLUMN_PLACEHOLDER)
    return f"moved {_task(refs)} from {old_column} to {new_column}"


def _task_archived(event: ActivityEvent, refs: ActivityReferences) -> str:
    sentence = f"archived {_task(refs)}"
    if event.original_column_id:
        sentence += f" from {_plain(refs.original_column_title, COLUMN_PLACEHOLDER)}"
    return sentence


def _task_restored(event: ActivityEvent, refs: ActivityReferences) -> str:
    column = _plain(refs.original_column_title, COLUMN_PLACEHOLDER)
    return f"restored {_task(refs)} to {column}"


def _task_deleted(event: ActivityEvent, refs: ActivityReferences) -> str:
    title = _present(event.content)
    return f'deleted the task "{title}"' if title else "deleted a task"


def _comment_added(event: ActivityEvent, refs: ActivityReferences) -> str:
    return _with_preview(f"commented on {_task(refs)}", event)


def _meeting_note_added(event: ActivityEvent, refs: ActivityReferences) -> str:
    return _with_preview(f"added a meeting note to {_task(refs)}", event)


def _quick_note_added(event: ActivityEvent, refs: ActivityReferences) -> str:
    return _with_preview(f"added a quick note to {_task(refs)}", event)


def _board_updated(event: ActivityEvent, refs: ActivityReferences) -> str:
    return f"updated the board {_board(refs)}"


def _start_date_added(event: ActivityEvent, refs: ActivityReferences) -> str:
    return _with_date(f"set the start date of {_task(refs)}", refs.start_date_label)


def _start_date_updated(event: ActivityEvent, refs: ActivityReferences) -> str:
    return _with_date(
        f"changed the start date of {_task(refs)}", refs.start_date_label
    )


def _start_date_removed(event: ActivityEvent, refs: ActivityReferences) -> str:
    return f"removed the start date of {_task(refs)}"


def _due_date_added(event: ActivityEvent, refs: ActivityReferences) -> str:
    return _with_date(f"set the due date of {_task(refs)}", refs.due_date_label)


def _due_date_updated(event: ActivityEvent, refs: ActivityReferences) -> str:
    return _with_date(f"changed the due date of {_task(refs)}", refs.due_date_label)


def _due_date_removed(event: ActivityEvent, refs: ActivityReferences) -> str:
    return f"removed the due date of {_task(refs)}"


def _task_assigned(event: ActivityEvent, refs: ActivityReferences) -> str:
    return f"assigned {_target_user(refs)} to {_task(refs)}"


def _task_unassigned(event: ActivityEvent, refs: ActivityReferences) -> str:
    return f"unassigned {_target_user(refs)} from {_task(refs)}"


def _watcher_added(event: ActivityEvent, refs: ActivityReferences) -> str:
    return f"added {_target_user(refs)} as a watcher of {_task(refs)}"


def _watcher_removed(event: ActivityEvent, refs: ActivityReferences) -> str:
    return f"removed {_target_user(refs)} as a watcher of {_task(refs)}"


def _member_added(event: ActivityEvent, refs: ActivityReferences) -> str:
    return f"added {_target_user(refs)} to the board {_board(refs)}"


def _member_removed(event: ActivityEvent, refs: ActivityReferences) -> str:
    return f"removed {_target_user(refs)} from the board {_board(refs)}"


def _label_added(event: ActivityEvent, refs: ActivityReferences) -> str:
    return f"added the label {_quoted(event.content, 'a label')} to {_task(refs)}"


def _label_removed(event: ActivityEvent, refs: ActivityReferences) -> str:
    return f"removed the label {_quoted(event.content, 'a label')} from {_task(refs)}"


def _dependency_added(event: ActivityEvent, refs: ActivityReferences) -> str:
    blocker = _quoted(event.content, "another task")
    return f"marked {_task(refs)} as blocked by {blocker}"


def _dependency_removed(event: ActivityEvent, refs: ActivityReferences) -> str:
    blocker = _quoted(event.content, "another task")
    return f"removed the dependency of {_task(refs)} on {blocker}"


def _epic_created(event: ActivityEvent, refs: ActivityReferences) -> str:
    return f"created the epic {_task(refs)}"


def _epic_updated(event: ActivityEvent, refs: ActivityReferences) -> str:
    return f"updated the epic {_task(refs)}"


_TEMPLATES: dict[ActivityType, _Template] = {
    ActivityType.TASK_CREATED: _task_created,
    ActivityType.TASK_UPDATED: _task_updated,
    ActivityType.TASK_MOVED: _task_moved,
    ActivityType.TASK_ARCHIVED: _task_archived,
    ActivityType.TASK_RESTORED: _task_restored,
    ActivityType.TASK_DELETED: _task_deleted,
    ActivityType.COMMENT_ADDED: _comment_added,
    ActivityType.MEETING_NOTE_ADDED: _meeting_note_added,
    ActivityType.QUICK_NOTE_ADDED: _quick_note_added,
    ActivityType.BOARD_UPDATED: _board_updated,
    ActivityType.START_DATE_ADDED: _start_date_added,
    ActivityType.START_DATE_UPDATED: _start_date_updated,
    ActivityType.START_DATE_REMOVED: _start_date_removed,
    ActivityType.DUE_DATE_ADDED: _due_date_added,
    ActivityType.DUE_DATE_UPDATED: _due_date_updated,
    ActivityType.DUE_DATE_REMOVED: _due_date_removed,
    ActivityType.TASK_ASSIGNED: _task_assigned,
    ActivityType.TASK_UNASSIGNED: _task_unassigned,
    ActivityType.WATCHER_ADDED: _watcher_added,
    ActivityType.WATCHER_REMOVED: _watcher_removed,
    ActivityType.MEMBER_ADDED: _member_added,
    ActivityType.MEMBER_REMOVED: _member_removed,
    ActivityType.LABEL_ADDED: _label_added,
    ActivityType.LABEL_REMOVED: _label_removed,
    ActivityType.DEPENDENCY_ADDED: _dependency_added,
    ActivityType.DEPENDENCY_REMOVED: _dependency_removed,
    ActivityType.EPIC_CREATED: _epic_created,
    ActivityType.EPIC_UPDATED: _epic_updated,
}

_UNMAPPED = set(ActivityType) - set(_TEMPLATES)
if _UNMAPPED:  # pragma: no cover - import-time guard
    raise RuntimeError(
        "Activity types without a message template: "
        + ", ".join(sorted(member.value for member in _UNMAPPED))
    )


def render_activity(
    event: ActivityEvent, references: ActivityReferences | None = None
) -> str:
    """Return the display sentence for ``event``.

    Raises :class:`RenderError` when the event kind is not a known
    :class:`ActivityType` member.
    """

    event_type = parse_activity_type(event.event_type)
    template = _TEMPLATES.get(event_type) if event_type is not None else None
    if template is None:
        raise RenderError(f"No message template for activity type {event.event_type!r}")

    refs = references or ActivityReferences()
    actor = _plain(refs.actor_name, ACTOR_PLACEHOLDER)
    return f"{actor} {template(event, refs)}"


def render_or_placeholder(
    event: ActivityEvent, references: ActivityReferences | None = None
) -> str:
    """Render ``event`` for a feed, logging and masking unknown kinds."""

    try:
        return render_activity(event, references)
    except RenderError:
        logger.error(
            "Activity %s has unrecognized type %r; rendering placeholder",
            event.id,
            event.event_type,
        )
        return UNRECOGNIZED_ACTIVITY_MESSAGE


__all__ = [
    "ACTOR_PLACEHOLDER",
    "BOARD_PLACEHOLDER",
    "COLUMN_PLACEHOLDER",
    "COMMENT_PREVIEW_LENGTH",
    "TASK_PLACEHOLDER",
    "UNRECOGNIZED_ACTIVITY_MESSAGE",
    "USER_PLACEHOLDER",
    "comment_preview",
    "render_activity",
    "render_or_placeholder",
]
