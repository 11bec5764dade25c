"""Transport used by the polling client to reach the notification API."""

from __future__ import annotations

from typing import Protocol

import httpx

from notification_hub.domain.entities import Notification
from notification_hub.domain.errors import ClientSyncError
from notification_hub.interfaces.api.schemas import NotificationRead


class NotificationGateway(Protocol):
    """Operations the polling client needs from the notification service.

    Implementations raise :class:`ClientSyncError` for every failure.
    """

    async def list_notifications(self, recipient_id: int) -> list[Notification]: ...

    async def unread_count(self, recipient_id: int) -> int: ...

    async def mark_read(self, notification_id: int) -> None: ...

    async def mark_all_read(self, recipient_id: int) -> int: ...


class HttpNotificationGateway:
    """:class:`NotificationGateway` backed by the service's HTTP routes."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def list_notifications(self, recipient_id: int) -> list[Notification]:
        operation = "list_notifications"
        response = await self._request(
            operation, "GET", f"/notifications/recipients/{recipient_id}"
        )
        try:
            return [
                NotificationRead.model_validate(item).to_entity()
                for item in response.json()
            ]
        except (TypeError, ValueError) as exc:
            raise ClientSyncError(operation, f"invalid payload: {exc}") from exc

    async def unread_count(self, recipient_id: int) -> int:
        operation = "unread_count"
        response = await self._request(
            operation, "GET", f"/notifications/recipients/{recipient_id}/unread-count"
        )
        return self._read_int(operation, response, "unread")

    async def mark_read(self, notification_id: int) -> None:
        await self._request("mark_read", "POST", f"/notifications/{notification_id}/read")

    async def mark_all_read(self, recipient_id: int) -> int:
        operation = "mark_all_read"
        response = await self._request(
            operation, "POST", f"/notifications/recipients/{recipient_id}/read-all"
        )
        return self._read_int(operation, response, "updated")

    async def _request(self, operation: str, method: str, url: str) -> httpx.Response:
        try:
            response = await self._client.request(method, url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            detail = f"HTTP {exc.response.status_code}"
            raise ClientSyncError(operation, detail) from exc
        except httpx.HTTPError as exc:
            raise ClientSyncError(operation, str(exc) or exc.__class__.__name__) from exc
        return response

    @staticmethod
    def _read_int(operation: str, response: httpx.Response, key: str) -> int:
        try:
            return int(response.json()[key])
        except (KeyError, TypeError, ValueError) as exc:
            raise ClientSyncError(operation, f"invalid payload: {exc}") from exc


__all__ = ["HttpNotificationGateway", "NotificationGateway"]
