"""Public helpers for emitting and reading admin notifications."""

from .events import (
    notify_distribution,
    notify_event_leave,
    notify_event_participant,
    notify_new_user,
    notify_report_card_update,
    notify_scholar_donation,
    notify_scholar_location_update,
)
from .fan_out import fan_out, notify
from .read_state import (
    count_unread,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)
from .recipients import resolve_recipients

__all__ = [
    "count_unread",
    "fan_out",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "notify",
    "notify_distribution",
    "notify_event_leave",
    "notify_event_participant",
    "notify_new_user",
    "notify_report_card_update",
    "notify_scholar_donation",
    "notify_scholar_location_update",
    "resolve_recipients",
]
