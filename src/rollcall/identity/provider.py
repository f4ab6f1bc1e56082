from __future__ import annotations

import logging
from typing import Optional, Protocol

from werkzeug.security import check_password_hash

from ..common.iterables import unique
from ..core.constants import CREDENTIALS
from ..core.exceptions import AuthError
from ..store.document_store import DocumentStore, Where
from .model import Credential, IdentitySession

logger = logging.getLogger(__name__)


class IdentityProvider(Protocol):
    """Contract of the remote identity service."""

    def sign_in(self, email: str, password: str) -> IdentitySession:
        """Raise AuthError on bad credentials, StoreError on transport failure."""

        raise NotImplementedError

    def sign_out(self) -> None:
        raise NotImplementedError

    def current_session(self) -> Optional[IdentitySession]:
        raise NotImplementedError


class DocumentIdentityProvider(IdentityProvider):
    """Email/password identity backed by the `credentials` collection.

    Credential documents are keyed by user id and hold a werkzeug password
    hash; the signed-in session is kept in memory for this process.
    """

    def __init__(self, store: DocumentStore):
        self._store = store
        self._session: Optional[IdentitySession] = None

    def _find_credential(self, email: str) -> Optional[Credential]:
        # Credentials are written lowercased; accounts stored with their original
        # casing are still found by the exact address.
        docs = []
        for candidate in unique([email.lower(), email]):
            docs = self._store.query(CREDENTIALS, Where.eq("email", candidate))
            if docs:
                break
        if not docs:
            return None
        doc = docs[0]
        return Credential(
            user_id=doc.id,
            email=str(doc.get("email", "")),
            password_hash=str(doc.get("passwordHash", "")),
        )

    def sign_in(self, email: str, password: str) -> IdentitySession:
        credential = self._find_credential(email.strip())
        if not credential:
            raise AuthError("Invalid email or password")

        try:
            ok = check_password_hash(credential.password_hash, password)
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthError("Invalid email or password")

        self._session = IdentitySession(user_id=credential.user_id, email=credential.email)
        return self._session

    def sign_out(self) -> None:
        self._session = None

    def current_session(self) -> Optional[IdentitySession]:
        return self._session
