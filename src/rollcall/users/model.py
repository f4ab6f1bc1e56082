from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: Plain data object; the id is the identity provider's subject id.
    """

    user_id: str
    email: str
    name: str
    role: Optional[Role]
    department: str = ""
    raw_role: str = ""


@dataclass(frozen=True)
class UserProfile:
    """Read-model for the profile settings view."""

    email: str
    name: str
    role: str
    department: str


@dataclass(frozen=True)
class SignedInUser:
    user_id: str
    email: str
    role: Role
