"""Exceptions raised by the notification pipeline."""

from __future__ import annotations


class NotificationError(Exception):
    """Base class for notification pipeline failures."""


class ResolutionError(NotificationError):
    """The recipient roster could not be looked up."""


class PersistenceError(NotificationError):
    """The notification store failed to read or write a record."""

    def __init__(self, message: str, *, recipient_id: int | None = None) -> None:
        super().__init__(message)
        self.recipient_id = recipient_id


class NotificationNotFound(NotificationError):
    """A read transition targeted a notification id that does not exist."""

    def __init__(self, notification_id: int) -> None:
        super().__init__(f"Notification with id {notification_id} not found")
        self.notification_id = notification_id


class ClientSyncError(NotificationError):
    """A polling client call to the notification service failed."""

    def __init__(self, operation: str, detail: str) -> None:
        super().__init__(f"{operation} failed: {detail}")
        self.operation = operation
        self.detail = detail


__all__ = [
    "ClientSyncError",
    "NotificationError",
    "NotificationNotFound",
    "PersistenceError",
    "ResolutionError",
]
