"""Tests for recipient resolution and best-effort fan-out."""

from __future__ import annotations

import logging

import pytest
from sqlalchemy.exc import SQLAlchemyError

from notification_hub.application.use_cases.notifications import (
    fan_out,
    notify,
    resolve_recipients,
)
from notification_hub.domain.entities import ALL_ADMINS, Actor, NotificationEvent
from notification_hub.domain.errors import PersistenceError, ResolutionError
from notification_hub.infrastructure.models import NotificationModel
from notification_hub.infrastructure.repositories import (
    NotificationRepository,
    UserRepository,
)


class FailingRepository(NotificationRepository):
    """Repository that refuses to store rows for selected recipients."""

    def __init__(self, session, failing: set[int]) -> None:
        super().__init__(session)
        self.failing = failing

    def insert(self, recipient_id, type, content, related_id=None, actor=None):
        if recipient_id in self.failing:
            raise PersistenceError("disk full", recipient_id=recipient_id)
        return super().insert(recipient_id, type, content, related_id=related_id, actor=actor)


def _row_count(session) -> int:
    return session.query(NotificationModel).count()


def test_resolve_all_admins_skips_other_roles_and_inactive_users(session, make_user):
    admin = make_user("Ana Reyes")
    make_user("Vic Volunteer", role="volunteer")
    make_user("Ina Inactive", is_active=False)
    make_user("Del Deleted", deleted=True)
    other_case = make_user("Oscar Upper", role="ADMIN")

    assert sorted(resolve_recipients(session, ALL_ADMINS)) == sorted([admin, other_case])


def test_resolve_explicit_list_is_returned_as_given(session):
    assert resolve_recipients(session, [5, 3, 5]) == [5, 3, 5]
    assert resolve_recipients(session, []) == []


def test_fan_out_creates_one_notification_per_admin(session, admins):
    created = notify(
        session,
        ALL_ADMINS,
        "new_user",
        "Jane Doe has registered as a scholar",
        related_id=42,
    )

    assert sorted(n.recipient_id for n in created) == sorted(admins)
    assert len({n.id for n in created}) == 3
    assert all(n.read is False for n in created)
    assert {(n.type, n.content, n.related_id) for n in created} == {
        ("new_user", "Jane Doe has registered as a scholar", "42")
    }


def test_empty_roster_writes_nothing(session, make_user):
    make_user("Vic Volunteer", role="volunteer")

    assert notify(session, ALL_ADMINS, "new_user", "New volunteer registered: Vic") == []
    assert _row_count(session) == 0


def test_fan_out_with_no_recipients_returns_empty(session):
    event = NotificationEvent(type="test", content="ping")

    assert fan_out(NotificationRepository(session), event, []) == []
    assert _row_count(session) == 0


def test_partial_failure_is_isolated(session, admins, caplog):
    r1, r2, r3 = admins
    actor = Actor(id=7, name="Bob", avatar_url="/images/donate-icon.png")
    event = NotificationEvent(type="donation", content="New donation from Bob", related_id="d-1", actor=actor)

    with caplog.at_level(logging.WARNING):
        created = fan_out(FailingRepository(session, {r2}), event, admins)

    assert [n.recipient_id for n in created] == [r1, r3]
    for notification in created:
        assert (notification.type, notification.content, notification.related_id) == (
            "donation",
            "New donation from Bob",
            "d-1",
        )
        assert notification.actor == actor
        assert notification.read is False
    stored = NotificationRepository(session)
    assert stored.list_by_recipient(r2) == []
    assert stored.list_by_recipient(r1) == [created[0]]
    assert stored.list_by_recipient(r3) == [created[1]]
    assert any(str(r2) in record.getMessage() for record in caplog.records)


def test_storage_failure_rolls_back_and_continues(session, admins):
    event = NotificationEvent(type="test", content="ping")

    # A missing recipient id violates the NOT NULL constraint.
    created = fan_out(NotificationRepository(session), event, [admins[0], None, admins[2]])

    assert [n.recipient_id for n in created] == [admins[0], admins[2]]
    assert _row_count(session) == 2


def test_repeated_fan_out_is_not_deduplicated(session, admins):
    for _ in range(2):
        notify(session, ALL_ADMINS, "event_participant", 'Jane has joined event: "Fun Run"', related_id=3)

    repository = NotificationRepository(session)
    assert all(repository.count_unread(admin_id) == 2 for admin_id in admins)


def test_explicit_audience_only_reaches_listed_recipients(session, admins):
    created = notify(session, [admins[1]], "contact_form", "New message from Jane")

    assert [n.recipient_id for n in created] == [admins[1]]
    assert NotificationRepository(session).count_unread(admins[0]) == 0


def test_resolution_failure_propagates_before_any_write(session, admins, monkeypatch):
    def broken_roster(self, alias):
        raise SQLAlchemyError("database unavailable")

    monkeypatch.setattr(UserRepository, "list_ids_by_role_alias", broken_roster)

    with pytest.raises(ResolutionError):
        notify(session, ALL_ADMINS, "new_user", "New scholar registered: Jane")
    assert _row_count(session) == 0
