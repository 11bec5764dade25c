from .notification import (
    ActorRead,
    MarkAllReadResponse,
    NotificationRead,
    NotifyRequest,
    UnreadCountRead,
)

__all__ = [
    "ActorRead",
    "MarkAllReadResponse",
    "NotificationRead",
    "NotifyRequest",
    "UnreadCountRead",
]
