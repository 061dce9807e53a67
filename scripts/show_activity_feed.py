"""Print the rendered activity feed of a board or task."""

from __future__ import annotations

import argparse

from activity_trail.application.use_cases.activities import list_activity_feed
from activity_trail.domain.errors import ActivityError
from activity_trail.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the feed query."""

    parser = argparse.ArgumentParser(
        description="Show the most recent activity recorded for a board or task.",
    )
    parser.add_argument("--board", dest="board_id", default=None, help="Board id to filter by")
    parser.add_argument("--task", dest="task_id", default=None, help="Task id to filter by")
    parser.add_argument(
        "--epic", dest="epic_id", default=None, help="Epic id; includes its subtasks"
    )
    parser.add_argument("--user", dest="user_id", default=None, help="Only show actions by this user")
    parser.add_argument("--type", dest="event_type", default=None, help="Activity type, e.g. TASK_MOVED")
    parser.add_argument("--limit", type=int, default=None, help="Number of entries to show")
    parser.add_argument("--offset", type=int, default=0, help="Number of entries to skip")
    return parser.parse_args()


def main() -> None:
    """Query the feed with the provided arguments and print one line per event."""

    args = parse_args()
    initialize_database()

    session = SessionLocal()
    try:
        page = list_activity_feed(
            session,
            board_id=args.board_id,
            task_id=args.task_id,
            epic_id=args.epic_id,
            user_id=args.user_id,
            event_type=args.event_type,
            limit=args.limit,
            offset=args.offset,
        )
    except ActivityError as exc:
        raise SystemExit(f"Could not load the activity feed: {exc}") from exc
    finally:
        session.close()

    if not page.entries:
        print("No activity found.")
        return

    for entry in page.entries:
        created_at = entry.event.created_at
        timestamp = created_at.strftime("%m/%d/%Y, %H:%M:%S") if created_at else "-"
        print(f"[{timestamp}] {entry.message}")


if __name__ == "__main__":
    main()
