"""Domain entity representing a user of the application."""

from dataclasses import dataclass

from .role import Role


@dataclass
class User:
    """Core attributes of a user; administrators are the notification recipients."""

    id: int | None
    role: Role
    name: str
    email: str
    profile_photo: str | None
    is_active: bool
    deleted: bool


__all__ = ["User"]
