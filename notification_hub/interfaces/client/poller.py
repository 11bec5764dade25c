"""Polling client that mirrors one recipient's notifications locally.

Local read flags are updated optimistically. A failed call leaves the local
state as it is and is reported through :class:`SyncResult`; the next poll is
what brings the local view back in line with the server.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Collection
from dataclasses import dataclass, replace

from notification_hub.domain.categorization import (
    NotificationCategory,
    filter_by_category,
    unread_counts_by_category,
)
from notification_hub.domain.entities import Notification
from notification_hub.domain.errors import ClientSyncError

from .gateway import NotificationGateway

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 30.0


@dataclass(frozen=True)
class SyncResult:
    """Outcome of a client command or poll."""

    ok: bool
    affected_ids: tuple[int, ...] = ()
    error: ClientSyncError | None = None


class NotificationPoller:
    """Keep a recipient's notification panel in sync with the service."""

    def __init__(
        self,
        gateway: NotificationGateway,
        recipient_id: int,
        *,
        interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._gateway = gateway
        self.recipient_id = recipient_id
        self.interval = interval
        self.notifications: list[Notification] = []
        self.unread_count = 0
        self.panel_open = False
        self._task: asyncio.Task[None] | None = None
        self._stop: asyncio.Event | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def refresh(self) -> SyncResult:
        """Fetch the recipient's notifications and unread count."""

        try:
            notifications = await self._gateway.list_notifications(self.recipient_id)
            unread = await self._gateway.unread_count(self.recipient_id)
        except ClientSyncError as exc:
            logger.warning(
                "Polling notifications for recipient %s failed: %s", self.recipient_id, exc
            )
            return SyncResult(ok=False, error=exc)

        self.notifications = notifications
        self.unread_count = unread
        return SyncResult(
            ok=True,
            affected_ids=tuple(n.id for n in notifications if n.id is not None),
        )

    def start(self) -> None:
        """Schedule the polling loop on the running event loop."""

        if self.running:
            return
        self._stop = asyncio.Event()
        self._task = asyncio.create_task(self._run(self._stop))

    async def stop(self) -> None:
        """Stop polling; an in-flight fetch is allowed to finish first."""

        task, stop = self._task, self._stop
        if task is None or stop is None:
            return
        stop.set()
        await task
        self._task = None
        self._stop = None

    async def _run(self, stop: asyncio.Event) -> None:
        while not stop.is_set():
            await self.refresh()
            try:
                await asyncio.wait_for(stop.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                continue

    async def __aenter__(self) -> "NotificationPoller":
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    def open_panel(self) -> None:
        self.panel_open = True

    async def close_panel(self) -> SyncResult:
        """Close the panel; every unread notification is committed as read."""

        if not self.panel_open:
            return SyncResult(ok=True)
        self.panel_open = False
        return await self.mark_all_read()

    async def mark_all_read(self) -> SyncResult:
        if not any(not n.read for n in self.notifications):
            return SyncResult(ok=True)

        error = None
        try:
            await self._gateway.mark_all_read(self.recipient_id)
        except ClientSyncError as exc:
            logger.warning(
                "Marking notifications of recipient %s as read failed: %s",
                self.recipient_id,
                exc,
            )
            error = exc

        affected = self._mark_local_read(None)
        self.unread_count = 0
        return SyncResult(ok=error is None, affected_ids=affected, error=error)

    async def click(self, notification_id: int) -> SyncResult:
        """Mark one notification as read after the admin opened it."""

        error = None
        try:
            await self._gateway.mark_read(notification_id)
        except ClientSyncError as exc:
            logger.warning("Marking notification %s as read failed: %s", notification_id, exc)
            error = exc

        affected = self._mark_local_read({notification_id})
        self.unread_count = max(0, self.unread_count - len(affected))
        return SyncResult(ok=error is None, affected_ids=affected, error=error)

    def revert(self, result: SyncResult) -> None:
        """Undo the optimistic update of a failed command."""

        if result.ok or not result.affected_ids:
            return
        ids = set(result.affected_ids)
        self.notifications = [
            replace(n, read=False) if n.id in ids else n for n in self.notifications
        ]
        self.unread_count += len(ids)

    def unread_for(self, category: NotificationCategory) -> int:
        return unread_counts_by_category(self.notifications, self.unread_count)[category]

    def visible(self, category: NotificationCategory = NotificationCategory.ALL) -> list[Notification]:
        return filter_by_category(self.notifications, category)

    def _mark_local_read(self, ids: Collection[int] | None) -> tuple[int, ...]:
        affected: list[int] = []
        updated: list[Notification] = []
        for notification in self.notifications:
            if not notification.read and (ids is None or notification.id in ids):
                affected.append(notification.id)
                notification = replace(notification, read=True)
            updated.append(notification)
        self.notifications = updated
        return tuple(affected)


__all__ = ["DEFAULT_POLL_INTERVAL", "NotificationPoller", "SyncResult"]
