"""Fan a single domain event out to per-recipient notifications."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from notification_hub.domain.entities import (
    Actor,
    Audience,
    Notification,
    NotificationEvent,
)
from notification_hub.domain.errors import PersistenceError
from notification_hub.infrastructure.repositories import NotificationRepository

from .recipients import resolve_recipients

logger = logging.getLogger(__name__)


def fan_out(
    repository: NotificationRepository,
    event: NotificationEvent,
    recipients: Iterable[int],
) -> list[Notification]:
    """Create one independent notification per recipient.

    A storage failure for one recipient is logged and that recipient left out
    of the result; the remaining recipients are still attempted.
    """

    created: list[Notification] = []
    attempted = 0
    for recipient_id in recipients:
        attempted += 1
        try:
            notification = repository.insert(
                recipient_id,
                event.type,
                event.content,
                related_id=event.related_id,
                actor=event.actor,
            )
        except PersistenceError as exc:
            logger.warning(
                "Skipping %s notification for recipient %s: %s",
                event.type,
                recipient_id,
                exc,
            )
            continue
        created.append(notification)

    if attempted:
        logger.info(
            "Created %s/%s %s notifications", len(created), attempted, event.type
        )
    return created


def notify(
    session: Session,
    audience: Audience,
    type: str,
    content: str,
    related_id: str | int | None = None,
    actor: Actor | None = None,
) -> list[Notification]:
    """Resolve ``audience`` and fan the event out to every recipient.

    Resolution errors propagate before any notification is written.
    """

    recipients = resolve_recipients(session, audience)
    if not recipients:
        logger.info("No recipients to notify about %s", type)
        return []

    event = NotificationEvent(
        type=type, content=content, related_id=related_id, actor=actor
    )
    return fan_out(NotificationRepository(session), event, recipients)


__all__ = ["fan_out", "notify"]
