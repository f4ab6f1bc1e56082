from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

from bson import ObjectId
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from ..core.exceptions import StoreError
from .document_store import DOCUMENT_ID, EQ, Document, DocumentStore, Where


def build_filter(predicates: Sequence[Where]) -> Dict[str, Any]:
    """Translate predicates into a Mongo filter (document id lives in `_id`)."""
    clauses = []
    for p in predicates:
        key = "_id" if p.field == DOCUMENT_ID else p.field
        if p.op == EQ:
            clauses.append({key: p.value})
        else:
            clauses.append({key: {"$in": list(p.value)}})

    if not clauses:
        return {}
    if len(clauses) == 1:
        return clauses[0]
    return {"$and": clauses}


def _to_document(raw: Mapping[str, Any]) -> Document:
    data = {k: v for k, v in raw.items() if k != "_id"}
    return Document(id=str(raw["_id"]), data=data)


class MongoDocumentStore(DocumentStore):
    """One Mongo collection per store collection, document id in `_id`."""

    def __init__(self, uri: str, db_name: str, *, client: Optional[MongoClient] = None):
        self._client = client or MongoClient(uri)
        self._db = self._client[db_name]

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        try:
            raw = self._db[collection].find_one({"_id": doc_id})
        except PyMongoError as e:
            raise StoreError(f"get {collection}/{doc_id}: {e}") from e
        return _to_document(raw) if raw else None

    def query(self, collection: str, *predicates: Where) -> Sequence[Document]:
        try:
            return [_to_document(raw) for raw in self._db[collection].find(build_filter(predicates))]
        except PyMongoError as e:
            raise StoreError(f"query {collection}: {e}") from e

    def add(self, collection: str, data: Mapping[str, Any]) -> str:
        doc_id = str(ObjectId())
        try:
            self._db[collection].insert_one({"_id": doc_id, **dict(data)})
        except PyMongoError as e:
            raise StoreError(f"add {collection}: {e}") from e
        return doc_id

    def set(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        try:
            self._db[collection].replace_one({"_id": doc_id}, {"_id": doc_id, **dict(data)}, upsert=True)
        except PyMongoError as e:
            raise StoreError(f"set {collection}/{doc_id}: {e}") from e

    def update(self, collection: str, doc_id: str, fields: Mapping[str, Any]) -> None:
        try:
            result = self._db[collection].update_one({"_id": doc_id}, {"$set": dict(fields)})
        except PyMongoError as e:
            raise StoreError(f"update {collection}/{doc_id}: {e}") from e
        if result.matched_count == 0:
            raise StoreError(f"No document to update: {collection}/{doc_id}")

    def delete(self, collection: str, doc_id: str) -> None:
        try:
            self._db[collection].delete_one({"_id": doc_id})
        except PyMongoError as e:
            raise StoreError(f"delete {collection}/{doc_id}: {e}") from e

    def close(self) -> None:
        self._client.close()
