from __future__ import annotations

import logging

from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError, ReadError, StoreError, ValidationError
from ..identity.client import IdentityClient
from .model import SignedInUser, UserProfile
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: sign in and resolve which dashboard the user belongs to."""

    def __init__(self, identity: IdentityClient, users: UserRepository):
        self._identity = identity
        self._users = users

    def sign_in(self, email: str, password: str) -> SignedInUser:
        user_id = self._identity.sign_in(email, password)

        logger.debug("Fetching user role for %s", user_id)
        try:
            user = self._users.get_by_id(user_id)
        except StoreError as e:
            self._identity.sign_out()
            raise ReadError(f"Failed to fetch user role: {e}") from e

        if not user:
            logger.error("User document does not exist for %s", user_id)
            self._identity.sign_out()
            raise NotFoundError("User profile not found")

        if user.role is None:
            logger.error("Invalid role found for %s: %r", user_id, user.raw_role)
            self._identity.sign_out()
            raise ValidationError(f"Invalid user role: {user.raw_role}")

        return SignedInUser(user_id=user_id, email=self._identity.current_email() or user.email, role=user.role)

    def sign_out(self) -> None:
        self._identity.sign_out()


class ProfileManager:
    def __init__(self, users: UserRepository, identity: IdentityClient):
        self._users = users
        self._identity = identity

    def load_profile(self, user_id: str) -> UserProfile:
        try:
            user = self._users.get_by_id(user_id)
        except StoreError as e:
            raise ReadError(f"Failed to load profile: {e}") from e
        if not user:
            raise NotFoundError("Profile not found")

        # Email belongs to the identity session; only fall back to the stored copy
        # when the session is someone else's.
        email = user.email
        if self._identity.current_user_id() == user_id:
            email = self._identity.current_email() or ""

        return UserProfile(
            email=email,
            name=user.name,
            role=user.role.value if user.role else user.raw_role,
            department=user.department,
        )

    def update_profile(self, user_id: str, name: str, department: str) -> bool:
        name = require_non_empty(name, "Name")
        department = (department or "").strip()

        try:
            self._users.update_name_and_department(user_id, name=name, department=department)
        except StoreError as e:
            logger.warning("Profile update failed for %s: %s", user_id, e)
            return False
        return True
