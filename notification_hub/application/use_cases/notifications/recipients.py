"""Resolve audience selectors into recipient ids."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from notification_hub.config import get_settings
from notification_hub.domain.entities import Audience, AudienceKind
from notification_hub.domain.errors import ResolutionError
from notification_hub.infrastructure.repositories import UserRepository

logger = logging.getLogger(__name__)


def resolve_recipients(session: Session, audience: Audience) -> list[int]:
    """Return the recipient ids selected by ``audience``.

    ``ALL_ADMINS`` is looked up against the roster on every call; explicit id
    lists are returned unchanged. An empty roster yields an empty list.
    """

    if audience is AudienceKind.ALL_ADMINS:
        alias = get_settings().admin_role_alias
        try:
            admin_ids = UserRepository(session).list_ids_by_role_alias(alias)
        except SQLAlchemyError as exc:
            session.rollback()
            raise ResolutionError("Could not load the administrator roster") from exc
        logger.debug("Resolved %s admin recipients", len(admin_ids))
        return admin_ids

    if isinstance(audience, (str, bytes)):
        raise TypeError(f"Unsupported audience selector: {audience!r}")
    return [int(recipient_id) for recipient_id in audience]


__all__ = ["resolve_recipients"]
