"""Shared fixtures: a throwaway sqlite database and roster factories."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "notification_hub_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["APP_TIMEZONE"] = "Asia/Manila"
os.environ["ADMIN_ROLE_ALIAS"] = "admin"

from notification_hub.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from notification_hub.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from notification_hub.infrastructure.models import RoleModel, UserModel  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def session():
    with SessionLocal() as db:
        yield db


@pytest.fixture()
def make_user():
    """Return a factory inserting a user with the given role alias."""

    def _create_user(
        name: str,
        *,
        role: str = "admin",
        profile_photo: str | None = None,
        is_active: bool = True,
        deleted: bool = False,
    ) -> int:
        with SessionLocal() as db:
            role_model = db.query(RoleModel).filter_by(alias=role).first()
            if role_model is None:
                role_model = RoleModel(name=f"Role {role}", alias=role)
                db.add(role_model)
                db.commit()
                db.refresh(role_model)

            user = UserModel(
                role_id=role_model.id,
                name=name,
                email=f"{name.lower().replace(' ', '.')}@example.org",
                profile_photo=profile_photo,
                is_active=is_active,
                deleted=deleted,
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            return user.id

    return _create_user


@pytest.fixture()
def admins(make_user) -> list[int]:
    """Three active administrators."""

    return [make_user("Ana Reyes"), make_user("Ben Cruz"), make_user("Carla Santos")]


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"
