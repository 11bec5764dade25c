"""Producer → store → polling client scenario over the real HTTP routes."""

from __future__ import annotations

import httpx
import pytest

from main import create_app
from notification_hub.application.use_cases.notifications import notify
from notification_hub.domain.categorization import NotificationCategory
from notification_hub.domain.entities import ALL_ADMINS
from notification_hub.infrastructure.repositories import NotificationRepository
from notification_hub.interfaces.client import HttpNotificationGateway, NotificationPoller

pytestmark = pytest.mark.anyio


async def test_dismissing_the_panel_only_clears_that_admins_feed(session, admins):
    created = notify(
        session, ALL_ADMINS, "new_user", "Jane Doe has registered as a scholar", related_id=42
    )
    assert len(created) == 3

    repository = NotificationRepository(session)
    assert [repository.count_unread(admin_id) for admin_id in admins] == [1, 1, 1]

    transport = httpx.ASGITransport(app=create_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        poller = NotificationPoller(HttpNotificationGateway(client), admins[0])
        await poller.refresh()

        assert poller.unread_count == 1
        assert poller.unread_for(NotificationCategory.STUDENT) == 1

        poller.open_panel()
        result = await poller.close_panel()
        assert result.ok

        await poller.refresh()
        assert poller.unread_count == 0

    assert [repository.count_unread(admin_id) for admin_id in admins] == [0, 1, 1]


async def test_gateway_reports_http_failures_as_sync_errors(admins):
    transport = httpx.ASGITransport(app=create_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        poller = NotificationPoller(HttpNotificationGateway(client), admins[0])
        poller.notifications = []

        result = await poller.click(12345)

    assert not result.ok
    assert result.error.operation == "mark_read"
    assert result.error.detail == "HTTP 404"
