from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class IdentitySession:
    """Signed-in subject as reported by the identity service."""

    user_id: str
    email: str


@dataclass(frozen=True)
class Credential:
    user_id: str
    email: str
    password_hash: str
