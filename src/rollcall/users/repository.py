from __future__ import annotations

from typing import Dict, Optional, Sequence

from ..common.iterables import chunked, unique
from ..core.constants import DEFAULT_IN_QUERY_CHUNK_SIZE, USERS
from ..core.enums import Role
from ..store.document_store import DOCUMENT_ID, Document, DocumentStore, Where
from .model import User


def _to_user(doc: Document) -> User:
    raw_role = str(doc.get("role") or "")
    return User(
        user_id=doc.id,
        email=str(doc.get("email") or ""),
        name=str(doc.get("name") or ""),
        role=Role.parse(raw_role),
        department=str(doc.get("department") or ""),
        raw_role=raw_role,
    )


class UserRepository:
    """`users` collection. Store failures propagate as StoreError."""

    def __init__(self, store: DocumentStore, *, chunk_size: int = DEFAULT_IN_QUERY_CHUNK_SIZE):
        self._store = store
        self._chunk_size = int(chunk_size)

    def get_by_id(self, user_id: str) -> Optional[User]:
        doc = self._store.get(USERS, user_id)
        return _to_user(doc) if doc else None

    def get_many(self, user_ids: Sequence[str]) -> Sequence[User]:
        out = []
        for chunk in chunked(unique(user_ids), self._chunk_size):
            out.extend(_to_user(d) for d in self._store.query(USERS, Where.is_in(DOCUMENT_ID, chunk)))
        return out

    def names_by_id(self, user_ids: Sequence[str]) -> Dict[str, str]:
        return {u.user_id: u.name for u in self.get_many(user_ids)}

    def update_name_and_department(self, user_id: str, *, name: str, department: str) -> None:
        self._store.update(USERS, user_id, {"name": name, "department": department})
