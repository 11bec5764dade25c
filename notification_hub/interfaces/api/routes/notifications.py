"""Endpoints exposing the notification feed and its read state."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from notification_hub.application.use_cases.notifications import (
    count_unread,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    notify,
)
from notification_hub.domain.errors import (
    NotificationNotFound,
    PersistenceError,
    ResolutionError,
)
from notification_hub.infrastructure.database import get_db
from notification_hub.interfaces.api.schemas import (
    MarkAllReadResponse,
    NotificationRead,
    NotifyRequest,
    UnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])

logger = logging.getLogger(__name__)


def _storage_unavailable(exc: Exception) -> HTTPException:
    logger.error("Notification storage failure: %s", exc)
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Notification storage unavailable",
    )


@router.post(
    "/",
    response_model=list[NotificationRead],
    status_code=status.HTTP_201_CREATED,
)
def send_notification(
    payload: NotifyRequest,
    db: Session = Depends(get_db),
) -> list[NotificationRead]:
    """Fan a producer event out to the selected recipients."""

    try:
        created = notify(
            db,
            payload.audience_selector(),
            payload.type,
            payload.content,
            related_id=payload.related_id,
            actor=payload.actor_entity(),
        )
    except ResolutionError as exc:
        raise _storage_unavailable(exc) from exc
    return [NotificationRead.from_entity(notification) for notification in created]


@router.get("/recipients/{recipient_id}", response_model=list[NotificationRead])
def get_notifications(
    recipient_id: int,
    limit: int | None = Query(default=None, gt=0),
    db: Session = Depends(get_db),
) -> list[NotificationRead]:
    """Return the recipient's notifications, most recent first."""

    try:
        notifications = list_notifications(db, recipient_id, limit=limit)
    except PersistenceError as exc:
        raise _storage_unavailable(exc) from exc
    return [NotificationRead.from_entity(notification) for notification in notifications]


@router.get("/recipients/{recipient_id}/unread-count", response_model=UnreadCountRead)
def get_unread_count(
    recipient_id: int,
    db: Session = Depends(get_db),
) -> UnreadCountRead:
    try:
        unread = count_unread(db, recipient_id)
    except PersistenceError as exc:
        raise _storage_unavailable(exc) from exc
    return UnreadCountRead(recipient_id=recipient_id, unread=unread)


@router.post(
    "/{notification_id}/read",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def read_notification(
    notification_id: int,
    db: Session = Depends(get_db),
) -> Response:
    """Mark a single notification as read. Repeating the call is harmless."""

    try:
        mark_notification_read(db, notification_id)
    except NotificationNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except PersistenceError as exc:
        raise _storage_unavailable(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/recipients/{recipient_id}/read-all", response_model=MarkAllReadResponse)
def read_all_notifications(
    recipient_id: int,
    db: Session = Depends(get_db),
) -> MarkAllReadResponse:
    """Mark every unread notification of the recipient as read."""

    try:
        updated = mark_all_notifications_read(db, recipient_id)
    except PersistenceError as exc:
        raise _storage_unavailable(exc) from exc
    return MarkAllReadResponse(recipient_id=recipient_id, updated=updated)
