"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.sql import expression

from notification_hub.infrastructure.database import Base
from notification_hub.utils import utc_now_naive


class NotificationModel(Base):
    """Database representation of one recipient's notification."""

    __tablename__ = "notification"
    __table_args__ = (Index("ix_notification_recipient_read", "recipient_id", "read"),)

    id = Column(Integer, primary_key=True, index=True)
    recipient_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    type = Column(String(50), nullable=False)
    content = Column(Text, nullable=False)
    related_id = Column(String(64), nullable=True)
    actor_id = Column(Integer, nullable=True)
    actor_name = Column(String(120), nullable=True)
    actor_avatar = Column(String(255), nullable=True)
    read = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    created_at = Column(DateTime(), nullable=False, default=utc_now_naive)


__all__ = ["NotificationModel"]
