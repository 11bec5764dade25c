"""Producer-facing helpers that notify every administrator about domain events."""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from notification_hub.config import get_settings
from notification_hub.domain.entities import ALL_ADMINS, Actor, Notification
from notification_hub.domain.errors import ResolutionError
from notification_hub.infrastructure.repositories import UserRepository

from .fan_out import notify

logger = logging.getLogger(__name__)

EVENT_ICON = "/images/event-icon.png"
EVENT_LEAVE_ICON = "/images/event-leave-icon.png"
LOCATION_ICON = "/images/location-icon.png"
REPORT_CARD_ICON = "/images/report-card-icon.png"
PACKAGE_ICON = "/images/package-icon.png"
DONATE_ICON = "/images/donate-icon.png"


def _actor_avatar(session: Session, user_id: int | None, default: str) -> str:
    """Return the profile photo of ``user_id`` or ``default`` when unavailable."""

    if user_id is None:
        return default
    try:
        user = UserRepository(session).get(user_id)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.warning("Could not load profile photo for user %s: %s", user_id, exc)
        return default
    if user is None or not user.profile_photo:
        return default
    return user.profile_photo


def _format_amount(amount: object) -> str:
    if isinstance(amount, (int, float, Decimal)) and not isinstance(amount, bool):
        return f"₱{amount:,.2f}"
    return str(amount)


def notify_new_user(
    session: Session, *, user_id: int, name: str, role_label: str
) -> list[Notification]:
    """Tell admins that a user registered (``role_label`` e.g. ``scholar``)."""

    content = f"New {role_label} registered: {name}"
    actor = Actor(
        id=user_id,
        name=name,
        avatar_url=_actor_avatar(session, user_id, get_settings().system_actor_avatar),
    )
    return notify(session, ALL_ADMINS, "new_user", content, related_id=user_id, actor=actor)


def notify_event_participant(
    session: Session, *, event_id: int, user_id: int, user_name: str, event_title: str
) -> list[Notification]:
    """Tell admins that ``user_name`` joined an event."""

    content = f'{user_name} has joined event: "{event_title}"'
    actor = Actor(id=user_id, name=user_name, avatar_url=_actor_avatar(session, user_id, EVENT_ICON))
    return notify(
        session, ALL_ADMINS, "event_participant", content, related_id=event_id, actor=actor
    )


def notify_event_leave(
    session: Session, *, event_id: int, user_id: int, user_name: str, event_title: str
) -> list[Notification]:
    """Tell admins that ``user_name`` left an event."""

    content = f'{user_name} has left event: "{event_title}"'
    actor = Actor(
        id=user_id, name=user_name, avatar_url=_actor_avatar(session, user_id, EVENT_LEAVE_ICON)
    )
    return notify(session, ALL_ADMINS, "event_leave", content, related_id=event_id, actor=actor)


def notify_scholar_location_update(
    session: Session, *, scholar_id: int, scholar_name: str, content: str
) -> list[Notification]:
    """Tell admins that a scholar shared or changed their location."""

    actor = Actor(
        id=scholar_id,
        name=scholar_name,
        avatar_url=_actor_avatar(session, scholar_id, LOCATION_ICON),
    )
    return notify(
        session, ALL_ADMINS, "scholar_location", content, related_id=scholar_id, actor=actor
    )


def notify_report_card_update(
    session: Session,
    *,
    report_card_id: int,
    scholar_id: int,
    scholar_name: str,
    content: str,
    status: str,
) -> list[Notification]:
    """Tell admins that a scholar submitted a report card or its status changed."""

    logger.info(
        "Report card %s of scholar %s is now %s", report_card_id, scholar_id, status
    )
    actor = Actor(
        id=scholar_id,
        name=scholar_name,
        avatar_url=_actor_avatar(session, scholar_id, REPORT_CARD_ICON),
    )
    return notify(
        session, ALL_ADMINS, "report_card", content, related_id=report_card_id, actor=actor
    )


def notify_distribution(
    session: Session,
    *,
    distribution_id: int,
    item_name: str | None,
    quantity: int | float,
    unit: str,
    recipient_name: str,
    recipient_type: str,
) -> list[Notification]:
    """Tell admins that inventory items were handed out."""

    if not item_name:
        logger.warning("Distribution %s has no item name", distribution_id)
        item_name = "Unknown Item"
    content = (
        f"{quantity} {unit} of {item_name} has been distributed to "
        f"{recipient_name} ({recipient_type})"
    )
    actor = Actor(id=None, name=get_settings().system_actor_name, avatar_url=PACKAGE_ICON)
    return notify(
        session, ALL_ADMINS, "distribution", content, related_id=distribution_id, actor=actor
    )


def notify_scholar_donation(
    session: Session,
    *,
    donation_id: int,
    scholar_name: str,
    donor_id: int | None,
    donor_name: str | None,
    amount: object,
) -> list[Notification]:
    """Tell admins that a scholar donation awaits verification.

    Unlike the other helpers this one never raises: a roster failure is logged
    and no notification is created.
    """

    donor = donor_name or "Anonymous"
    content = (
        f"New scholar donation: {_format_amount(amount)} for {scholar_name} "
        f"from {donor} is waiting for verification."
    )
    actor = Actor(id=donor_id, name=donor, avatar_url=DONATE_ICON)
    try:
        return notify(
            session, ALL_ADMINS, "scholar_donation", content, related_id=donation_id, actor=actor
        )
    except ResolutionError:
        logger.exception("Could not notify admins about scholar donation %s", donation_id)
        return []


__all__ = [
    "notify_distribution",
    "notify_event_leave",
    "notify_event_participant",
    "notify_new_user",
    "notify_report_card_update",
    "notify_scholar_donation",
    "notify_scholar_location_update",
]
