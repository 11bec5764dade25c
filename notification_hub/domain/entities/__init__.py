"""Domain entities exposed by the application."""

from .audience import ALL_ADMINS, Audience, AudienceKind
from .notification import Actor, Notification, NotificationEvent
from .role import Role
from .user import User

__all__ = [
    "ALL_ADMINS",
    "Actor",
    "Audience",
    "AudienceKind",
    "Notification",
    "NotificationEvent",
    "Role",
    "User",
]
