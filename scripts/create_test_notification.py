"""Send a ``test`` notification to every administrator and report unread counts."""

from __future__ import annotations

import argparse

from notification_hub.application.use_cases.notifications import (
    count_unread,
    notify,
    resolve_recipients,
)
from notification_hub.domain.entities import ALL_ADMINS, Actor
from notification_hub.domain.errors import NotificationError
from notification_hub.config import get_settings
from notification_hub.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the test notification."""

    parser = argparse.ArgumentParser(
        description="Fan a test notification out to all administrators.",
    )
    parser.add_argument(
        "--type",
        default="test",
        help="Notification type (default: test)",
    )
    parser.add_argument(
        "--content",
        default="This is a test notification",
        help="Notification text",
    )
    parser.add_argument(
        "--related-id",
        default=None,
        help="Optional id of the related entity",
    )
    parser.add_argument(
        "--check-only",
        action="store_true",
        help="Only print the admin roster and unread counts without sending anything.",
    )
    return parser.parse_args()


def main() -> None:
    """Send the notification and print the resulting unread count per admin."""

    args = parse_args()
    initialize_database()

    settings = get_settings()
    session = SessionLocal()
    try:
        if not args.check_only:
            actor = Actor(
                id=None,
                name=settings.system_actor_name,
                avatar_url=settings.system_actor_avatar,
            )
            created = notify(
                session,
                ALL_ADMINS,
                args.type,
                args.content,
                related_id=args.related_id,
                actor=actor,
            )
            print(f"Created {len(created)} notification(s)")

        admin_ids = resolve_recipients(session, ALL_ADMINS)
        if not admin_ids:
            print("No administrators found")
        for admin_id in admin_ids:
            print(f"  Admin {admin_id}: {count_unread(session, admin_id)} unread")
    except NotificationError as exc:
        raise SystemExit(f"Could not send the test notification: {exc}") from exc
    finally:
        session.close()


if __name__ == "__main__":
    main()
