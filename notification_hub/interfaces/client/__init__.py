"""Polling client for the admin notification panel."""

from .gateway import HttpNotificationGateway, NotificationGateway
from .poller import DEFAULT_POLL_INTERVAL, NotificationPoller, SyncResult

__all__ = [
    "DEFAULT_POLL_INTERVAL",
    "HttpNotificationGateway",
    "NotificationGateway",
    "NotificationPoller",
    "SyncResult",
]
