"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from notification_hub.config import get_settings
from notification_hub.domain.entities import ALL_ADMINS, Actor, Audience, Notification


class ActorRead(BaseModel):
    """Who triggered the notification."""

    id: int | None = None
    name: str | None = None
    avatar_url: str | None = None


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    recipient_id: int
    type: str
    content: str
    related_id: str | None = None
    actor: ActorRead | None = None
    read: bool = False
    created_at: datetime

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationRead":
        actor = notification.actor
        return cls(
            id=notification.id or 0,
            recipient_id=notification.recipient_id,
            type=notification.type,
            content=notification.content,
            related_id=notification.related_id,
            actor=ActorRead(id=actor.id, name=actor.name, avatar_url=actor.avatar_url)
            if actor
            else None,
            read=notification.read,
            created_at=notification.created_at,
        )

    def to_entity(self) -> Notification:
        actor = self.actor
        return Notification(
            id=self.id,
            recipient_id=self.recipient_id,
            type=self.type,
            content=self.content,
            related_id=self.related_id,
            actor=Actor(id=actor.id, name=actor.name, avatar_url=actor.avatar_url)
            if actor
            else None,
            read=self.read,
            created_at=self.created_at,
        )


class NotifyRequest(BaseModel):
    """Payload sent by producers to fan a notification out."""

    audience: Literal["all_admins"] | list[int] = Field(
        ..., description="'all_admins' or an explicit list of recipient ids"
    )
    type: str = Field(..., min_length=1, max_length=50)
    content: str = Field(..., min_length=1)
    related_id: str | int | None = None
    actor: ActorRead | None = None

    def audience_selector(self) -> Audience:
        if self.audience == "all_admins":
            return ALL_ADMINS
        return list(self.audience)

    def actor_entity(self) -> Actor:
        """Return the sender, defaulting to the configured system actor."""

        if self.actor is None:
            settings = get_settings()
            return Actor(
                id=None,
                name=settings.system_actor_name,
                avatar_url=settings.system_actor_avatar,
            )
        return Actor(id=self.actor.id, name=self.actor.name, avatar_url=self.actor.avatar_url)


class UnreadCountRead(BaseModel):
    recipient_id: int
    unread: int


class MarkAllReadResponse(BaseModel):
    recipient_id: int
    updated: int


__all__ = [
    "ActorRead",
    "MarkAllReadResponse",
    "NotificationRead",
    "NotifyRequest",
    "UnreadCountRead",
]
