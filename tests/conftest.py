from __future__ import annotations

import copy
import random
from typing import Any, Dict, Mapping, Optional, Sequence

import pytest
from werkzeug.security import generate_password_hash

from rollcall.container import build_container
from rollcall.core.constants import CREDENTIALS, USERS
from rollcall.core.exceptions import StoreError
from rollcall.store.document_store import Document, Where


class InMemoryStore:
    """Dict-backed DocumentStore with per-(operation, collection) failure injection."""

    def __init__(self):
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._next_id = 0
        self.failures: Dict[tuple, str] = {}
        self.calls: list[tuple] = []

    def fail(self, op: str, collection: str, message: str = "backend unavailable") -> None:
        self.failures[(op, collection)] = message

    def heal(self) -> None:
        self.failures.clear()

    def _check(self, op: str, collection: str) -> None:
        self.calls.append((op, collection))
        message = self.failures.get((op, collection))
        if message:
            raise StoreError(message)

    def _col(self, collection: str) -> Dict[str, Dict[str, Any]]:
        return self._collections.setdefault(collection, {})

    def all(self, collection: str) -> Dict[str, Dict[str, Any]]:
        return copy.deepcopy(self._col(collection))

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        self._check("get", collection)
        data = self._col(collection).get(doc_id)
        return Document(id=doc_id, data=copy.deepcopy(data)) if data is not None else None

    def query(self, collection: str, *predicates: Where) -> Sequence[Document]:
        self._check("query", collection)
        return [
            Document(id=doc_id, data=copy.deepcopy(data))
            for doc_id, data in self._col(collection).items()
            if all(p.matches(doc_id, data) for p in predicates)
        ]

    def add(self, collection: str, data: Mapping[str, Any]) -> str:
        self._check("add", collection)
        self._next_id += 1
        doc_id = f"doc-{self._next_id}"
        self._col(collection)[doc_id] = dict(data)
        return doc_id

    def set(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        self._check("set", collection)
        self._col(collection)[doc_id] = dict(data)

    def update(self, collection: str, doc_id: str, fields: Mapping[str, Any]) -> None:
        self._check("update", collection)
        doc = self._col(collection).get(doc_id)
        if doc is None:
            raise StoreError(f"No document to update: {collection}/{doc_id}")
        doc.update(fields)

    def delete(self, collection: str, doc_id: str) -> None:
        self._check("delete", collection)
        self._col(collection).pop(doc_id, None)


class FakeClock:
    def __init__(self, start: int = 1_767_225_600_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, millis: int = 60_000) -> int:
        self.now += millis
        return self.now


def add_account(store: InMemoryStore, user_id: str, *, email: str, password: str, name: str, role: str, department: str = ""):
    store.set(CREDENTIALS, user_id, {"email": email, "passwordHash": generate_password_hash(password)})
    store.set(USERS, user_id, {"email": email, "name": name, "role": role, "department": department})


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def accounts(store):
    add_account(store, "prof-1", email="prof@uni.edu", password="secret1", name="Grace Hopper", role="PROFESSOR", department="CS")
    add_account(store, "stu-1", email="stu1@uni.edu", password="secret2", name="Linus", role="STUDENT", department="CS")
    add_account(store, "stu-2", email="stu2@uni.edu", password="secret3", name="Ada", role="STUDENT", department="Math")
    return store


@pytest.fixture
def container(accounts):
    return build_container(store=accounts)
