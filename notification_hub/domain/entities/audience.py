"""Audience selectors accepted by the recipient resolver."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Union


class AudienceKind(str, Enum):
    """Dynamic audiences resolved against the current roster."""

    ALL_ADMINS = "all_admins"


ALL_ADMINS = AudienceKind.ALL_ADMINS

# Either a dynamic roster lookup or an explicit list of recipient ids.
Audience = Union[AudienceKind, Sequence[int]]


__all__ = ["ALL_ADMINS", "Audience", "AudienceKind"]
