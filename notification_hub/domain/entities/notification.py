"""Domain entities describing admin notifications."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Actor:
    """The user whose action triggered a notification."""

    id: int | None
    name: str | None
    avatar_url: str | None = None


@dataclass(frozen=True)
class NotificationEvent:
    """A domain event to be fanned out to a set of recipients."""

    type: str
    content: str
    related_id: str | int | None = None
    actor: Actor | None = None


@dataclass
class Notification:
    """Per-recipient record of a domain event.

    Every field except ``read`` is fixed at creation time and ``read`` only
    ever moves from ``False`` to ``True``.
    """

    id: int | None
    recipient_id: int
    type: str
    content: str
    related_id: str | None = None
    actor: Actor | None = None
    read: bool = False
    created_at: datetime | None = None


__all__ = ["Actor", "Notification", "NotificationEvent"]
