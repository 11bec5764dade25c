"""Display categories for admin notifications.

Notifications are grouped into tabs by sniffing their ``type`` and free-text
``content``. Several rules can match the same notification, so the rules are
kept in a single ordered table and evaluated top to bottom; the first match
wins. ``NotificationCategory.ALL`` doubles as the catch-all for unmatched
notifications and as the name of the unfiltered tab.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from notification_hub.domain.entities import Notification


class NotificationCategory(str, Enum):
    """Tabs used to filter notifications in the admin panel."""

    USER = "user"
    DONATION = "donation"
    DISTRIBUTION = "distribution"
    STUDENT = "student"
    EVENT = "event"
    ALL = "all"


_DONATION_CONTENT_MARKERS: tuple[str, ...] = (
    "donation",
    "regular donation",
    "in-kind donation",
    "scholar donation",
)


@dataclass(frozen=True)
class CategoryRule:
    """One row of the classification table."""

    name: str
    matches: Callable[[str, str], bool]
    category: Callable[[str, str], NotificationCategory]


def _always(category: NotificationCategory) -> Callable[[str, str], NotificationCategory]:
    return lambda _type, _content: category


def _new_user_category(_type: str, content: str) -> NotificationCategory:
    if "scholar" in content:
        return NotificationCategory.STUDENT
    return NotificationCategory.USER


CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(
        name="new_user",
        matches=lambda type_, _content: type_ == "new_user",
        category=_new_user_category,
    ),
    CategoryRule(
        name="user_updated",
        matches=lambda type_, _content: type_ == "user_updated",
        category=_always(NotificationCategory.USER),
    ),
    CategoryRule(
        name="contact_form",
        matches=lambda type_, _content: type_ == "contact_form",
        category=_always(NotificationCategory.USER),
    ),
    CategoryRule(
        name="event",
        matches=lambda type_, _content: (
            type_ in ("event_participant", "event_leave") or "event" in type_
        ),
        category=_always(NotificationCategory.EVENT),
    ),
    CategoryRule(
        name="location",
        matches=lambda type_, content: (
            type_ == "scholar_location" or "location" in type_ or "location" in content
        ),
        category=_always(NotificationCategory.STUDENT),
    ),
    CategoryRule(
        name="report_card",
        matches=lambda type_, content: (
            type_ == "report_card" or "report card" in content.lower()
        ),
        category=_always(NotificationCategory.STUDENT),
    ),
    CategoryRule(
        name="donation",
        matches=lambda type_, content: (
            "donation" in type_
            or type_ in ("donation_verified", "donation_rejected")
            or any(marker in content for marker in _DONATION_CONTENT_MARKERS)
        ),
        category=_always(NotificationCategory.DONATION),
    ),
    CategoryRule(
        name="distribution",
        matches=lambda type_, _content: type_ == "distribution",
        category=_always(NotificationCategory.DISTRIBUTION),
    ),
    CategoryRule(
        name="student",
        matches=lambda type_, _content: (
            type_ == "student_application" or "student" in type_ or "scholar" in type_
        ),
        category=_always(NotificationCategory.STUDENT),
    ),
)


def classify_values(type_: str, content: str) -> NotificationCategory:
    """Classify a raw ``(type, content)`` pair."""

    type_ = type_ or ""
    content = content or ""
    for rule in CATEGORY_RULES:
        if rule.matches(type_, content):
            return rule.category(type_, content)
    return NotificationCategory.ALL


def classify(notification: Notification) -> NotificationCategory:
    """Return the display category of ``notification``."""

    return classify_values(notification.type, notification.content)


def filter_by_category(
    notifications: Iterable[Notification], category: NotificationCategory
) -> list[Notification]:
    """Return the notifications shown under ``category``'s tab."""

    if category is NotificationCategory.ALL:
        return list(notifications)
    return [n for n in notifications if classify(n) is category]


def unread_counts_by_category(
    notifications: Sequence[Notification], total_unread: int
) -> dict[NotificationCategory, int]:
    """Count unread notifications per tab.

    The ``all`` tab reports ``total_unread`` (the recipient's server-side
    unread count) rather than the unread notifications that matched no rule.
    """

    counts = {category: 0 for category in NotificationCategory}
    for notification in notifications:
        if notification.read:
            continue
        category = classify(notification)
        if category is not NotificationCategory.ALL:
            counts[category] += 1
    counts[NotificationCategory.ALL] = total_unread
    return counts


__all__ = [
    "CATEGORY_RULES",
    "CategoryRule",
    "NotificationCategory",
    "classify",
    "classify_values",
    "filter_by_category",
    "unread_counts_by_category",
]
