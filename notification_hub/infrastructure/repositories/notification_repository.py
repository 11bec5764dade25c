"""Persistence helpers for notification entities."""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from notification_hub.domain.entities import Actor, Notification
from notification_hub.domain.errors import NotificationNotFound, PersistenceError
from notification_hub.infrastructure.models import NotificationModel
from notification_hub.utils import ensure_app_timezone, utc_now_naive


class NotificationRepository:
    """Store of per-recipient :class:`Notification` records.

    Rows are only ever inserted or flipped to ``read``; every write commits on
    its own so a failure for one recipient never rolls back another's row.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def insert(
        self,
        recipient_id: int,
        type: str,
        content: str,
        related_id: str | int | None = None,
        actor: Actor | None = None,
    ) -> Notification:
        model = NotificationModel(
            recipient_id=recipient_id,
            type=type,
            content=content,
            related_id=None if related_id is None else str(related_id),
            actor_id=actor.id if actor else None,
            actor_name=actor.name if actor else None,
            actor_avatar=actor.avatar_url if actor else None,
            read=False,
            created_at=utc_now_naive(),
        )
        # Every column is known once the flush assigns the id, so the entity is
        # built before commit and no reload can fail after the row is stored.
        try:
            self.session.add(model)
            self.session.flush()
            notification = self._to_entity(model)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            msg = f"Could not store notification for recipient {recipient_id}"
            raise PersistenceError(msg, recipient_id=recipient_id) from exc
        return notification

    def list_by_recipient(
        self, recipient_id: int, *, limit: int | None = None
    ) -> list[Notification]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.recipient_id == recipient_id)
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        try:
            models = query.all()
        except SQLAlchemyError as exc:
            self.session.rollback()
            msg = f"Could not list notifications for recipient {recipient_id}"
            raise PersistenceError(msg, recipient_id=recipient_id) from exc
        return [self._to_entity(model) for model in models]

    def count_unread(self, recipient_id: int) -> int:
        query = (
            self.session.query(func.count(NotificationModel.id))
            .filter(NotificationModel.recipient_id == recipient_id)
            .filter(NotificationModel.read.is_(False))
        )
        try:
            return int(query.scalar() or 0)
        except SQLAlchemyError as exc:
            self.session.rollback()
            msg = f"Could not count unread notifications for recipient {recipient_id}"
            raise PersistenceError(msg, recipient_id=recipient_id) from exc

    def mark_read(self, notification_id: int) -> Notification:
        # The ``read = false`` guard keeps concurrent calls on the same row idempotent.
        try:
            self.session.query(NotificationModel).filter(
                NotificationModel.id == notification_id,
                NotificationModel.read.is_(False),
            ).update({NotificationModel.read: True}, synchronize_session=False)
            self.session.commit()
            model = self.session.get(NotificationModel, notification_id)
        except SQLAlchemyError as exc:
            self.session.rollback()
            msg = f"Could not mark notification {notification_id} as read"
            raise PersistenceError(msg) from exc
        if model is None:
            raise NotificationNotFound(notification_id)
        return self._to_entity(model)

    def mark_all_read(self, recipient_id: int) -> int:
        try:
            updated = (
                self.session.query(NotificationModel)
                .filter(
                    NotificationModel.recipient_id == recipient_id,
                    NotificationModel.read.is_(False),
                )
                .update({NotificationModel.read: True}, synchronize_session=False)
            )
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            msg = f"Could not mark notifications of recipient {recipient_id} as read"
            raise PersistenceError(msg, recipient_id=recipient_id) from exc
        return int(updated or 0)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        actor = None
        if model.actor_id is not None or model.actor_name or model.actor_avatar:
            actor = Actor(
                id=model.actor_id,
                name=model.actor_name,
                avatar_url=model.actor_avatar,
            )
        return Notification(
            id=model.id,
            recipient_id=model.recipient_id,
            type=model.type,
            content=model.content,
            related_id=model.related_id,
            actor=actor,
            read=bool(model.read),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
