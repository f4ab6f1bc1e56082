from __future__ import annotations

import logging
from typing import Optional

from ..common.validators import require_non_empty
from ..core.exceptions import AuthError, StoreError, ValidationError
from .provider import IdentityProvider

logger = logging.getLogger(__name__)


class IdentityClient:
    """Sign-in/sign-out and the current user id for the other services."""

    def __init__(self, provider: IdentityProvider):
        self._provider = provider

    def sign_in(self, email: str, password: str) -> str:
        email = require_non_empty(email, "Email")
        if not password:
            raise ValidationError("Password is required")

        logger.debug("Attempting to sign in with email: %s", email)
        try:
            session = self._provider.sign_in(email, password)
        except (AuthError, StoreError) as e:
            logger.warning("Sign in failed for %s: %s", email, e)
            raise AuthError(f"Sign in failed: {e}") from e

        logger.info("Sign in successful. User ID: %s", session.user_id)
        return session.user_id

    def sign_out(self) -> None:
        self._provider.sign_out()

    def current_user_id(self) -> Optional[str]:
        session = self._provider.current_session()
        return session.user_id if session else None

    def current_email(self) -> Optional[str]:
        session = self._provider.current_session()
        return session.email if session else None

    def require_user_id(self) -> str:
        user_id = self.current_user_id()
        if not user_id:
            raise AuthError("Not authenticated")
        return user_id
