"""Query and read-state use cases for a recipient's notifications."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from notification_hub.config import get_settings
from notification_hub.domain.entities import Notification
from notification_hub.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


def list_notifications(
    session: Session, recipient_id: int, *, limit: int | None = None
) -> list[Notification]:
    """Return the recipient's notifications, most recent first."""

    if limit is None:
        limit = get_settings().notification_list_limit
    return NotificationRepository(session).list_by_recipient(recipient_id, limit=limit)


def count_unread(session: Session, recipient_id: int) -> int:
    """Return how many of the recipient's notifications are still unread."""

    return NotificationRepository(session).count_unread(recipient_id)


def mark_notification_read(session: Session, notification_id: int) -> Notification:
    """Mark one notification as read; already read notifications are returned as is."""

    notification = NotificationRepository(session).mark_read(notification_id)
    logger.debug(
        "Notification %s of recipient %s marked as read",
        notification.id,
        notification.recipient_id,
    )
    return notification


def mark_all_notifications_read(session: Session, recipient_id: int) -> int:
    """Mark every unread notification of ``recipient_id`` as read."""

    updated = NotificationRepository(session).mark_all_read(recipient_id)
    if updated:
        logger.info(
            "Marked %s notifications of recipient %s as read", updated, recipient_id
        )
    return updated


__all__ = [
    "count_unread",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
]
