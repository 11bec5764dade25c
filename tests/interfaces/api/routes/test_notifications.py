"""Tests for the notification HTTP routes."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError

from main import create_app
from notification_hub.infrastructure.repositories import UserRepository


@pytest.fixture()
def client():
    with TestClient(create_app()) as test_client:
        yield test_client


def _send(client: TestClient, **overrides) -> list[dict]:
    payload = {
        "audience": "all_admins",
        "type": "new_user",
        "content": "Jane Doe has registered as a scholar",
        "related_id": 42,
    }
    payload.update(overrides)
    response = client.post("/notifications/", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_send_fans_out_to_all_admins(client: TestClient, admins) -> None:
    created = _send(client, actor={"id": 5, "name": "Jane Doe", "avatar_url": "/uploads/jane.png"})

    assert sorted(item["recipient_id"] for item in created) == sorted(admins)
    assert all(item["read"] is False for item in created)
    assert all(item["related_id"] == "42" for item in created)
    assert created[0]["actor"] == {"id": 5, "name": "Jane Doe", "avatar_url": "/uploads/jane.png"}


def test_send_to_explicit_recipients(client: TestClient, admins) -> None:
    created = _send(client, audience=[admins[2]], type="test", related_id=None)

    assert [item["recipient_id"] for item in created] == [admins[2]]


def test_send_without_actor_uses_system_actor(client: TestClient, admins) -> None:
    created = _send(client, type="test", content="ping", related_id=None)

    assert len(created) == len(admins)
    assert all(
        item["actor"] == {"id": None, "name": "System", "avatar_url": "/images/notify-icon.png"}
        for item in created
    )

    listed = client.get(f"/notifications/recipients/{admins[1]}").json()
    assert listed[0]["actor"]["name"] == "System"


def test_send_with_empty_roster_returns_empty_list(client: TestClient) -> None:
    assert _send(client) == []


def test_list_and_unread_count(client: TestClient, admins) -> None:
    _send(client, content="first")
    _send(client, content="second")

    listed = client.get(f"/notifications/recipients/{admins[0]}")
    assert listed.status_code == 200
    assert [item["content"] for item in listed.json()] == ["second", "first"]

    limited = client.get(f"/notifications/recipients/{admins[0]}", params={"limit": 1})
    assert [item["content"] for item in limited.json()] == ["second"]

    count = client.get(f"/notifications/recipients/{admins[0]}/unread-count")
    assert count.json() == {"recipient_id": admins[0], "unread": 2}


def test_mark_read_twice_and_unknown_id(client: TestClient, admins) -> None:
    notification_id = _send(client)[0]["id"]

    assert client.post(f"/notifications/{notification_id}/read").status_code == 204
    assert client.post(f"/notifications/{notification_id}/read").status_code == 204

    missing = client.post("/notifications/9999/read")
    assert missing.status_code == 404


def test_read_all_is_idempotent(client: TestClient, admins) -> None:
    _send(client)
    _send(client)

    first = client.post(f"/notifications/recipients/{admins[1]}/read-all")
    second = client.post(f"/notifications/recipients/{admins[1]}/read-all")

    assert first.json() == {"recipient_id": admins[1], "updated": 2}
    assert second.json() == {"recipient_id": admins[1], "updated": 0}
    other = client.get(f"/notifications/recipients/{admins[0]}/unread-count")
    assert other.json()["unread"] == 2


def test_roster_failure_returns_503(client: TestClient, admins, monkeypatch) -> None:
    def broken_roster(self, alias):
        raise SQLAlchemyError("database unavailable")

    monkeypatch.setattr(UserRepository, "list_ids_by_role_alias", broken_roster)

    response = client.post(
        "/notifications/",
        json={"audience": "all_admins", "type": "test", "content": "ping"},
    )
    assert response.status_code == 503


def test_invalid_payload_is_rejected(client: TestClient) -> None:
    response = client.post(
        "/notifications/",
        json={"audience": "everyone", "type": "test", "content": "ping"},
    )
    assert response.status_code == 422
