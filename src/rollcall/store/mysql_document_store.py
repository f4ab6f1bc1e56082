from __future__ import annotations

import json
import re
import uuid
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from ..core.exceptions import StoreError
from .connection import DatabaseConnection
from .document_store import DOCUMENT_ID, EQ, Document, DocumentStore, Where
from .mysql_base import db_cursor, fetchall, fetchone, load_json, store_errors

_FIELD_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def new_document_id() -> str:
    return uuid.uuid4().hex[:20]


def _json_path(field: str) -> str:
    if not _FIELD_RE.match(field):
        raise ValueError(f"Invalid field name: {field!r}")
    return f"$.{field}"


def build_where(collection: str, predicates: Sequence[Where]) -> Tuple[str, List[Any]]:
    """Translate predicates into a WHERE clause over the documents table.

    JSON values are compared as JSON (CAST(... AS JSON)) so that booleans,
    numbers and strings keep their type. Inclusion is expanded into an OR
    chain because MySQL does not compare JSON values inside IN().
    """

    clauses = ["collection=%s"]
    params: List[Any] = [collection]

    for p in predicates:
        values = [p.value] if p.op == EQ else list(p.value)
        if not values:
            clauses.append("FALSE")
            continue

        if p.field == DOCUMENT_ID:
            clauses.append(f"doc_id IN ({', '.join(['%s'] * len(values))})")
            params.extend(str(v) for v in values)
            continue

        path = _json_path(p.field)
        parts = []
        for v in values:
            parts.append("JSON_EXTRACT(data, %s) = CAST(%s AS JSON)")
            params.extend([path, json.dumps(v)])
        clauses.append("(" + " OR ".join(parts) + ")")

    return " AND ".join(clauses), params


class MySQLDocumentStore(DocumentStore):
    """Documents kept as JSON bodies in a single `documents` table."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with store_errors(f"get {collection}/{doc_id}"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT doc_id, data FROM documents WHERE collection=%s AND doc_id=%s",
                    (collection, doc_id),
                )
                r = fetchone(cur)
                if not r:
                    return None
                return Document(id=str(r["doc_id"]), data=load_json(r["data"]))

    def query(self, collection: str, *predicates: Where) -> Sequence[Document]:
        where, params = build_where(collection, predicates)
        with store_errors(f"query {collection}"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"SELECT doc_id, data FROM documents WHERE {where}", tuple(params))
                return [Document(id=str(r["doc_id"]), data=load_json(r["data"])) for r in fetchall(cur)]

    def add(self, collection: str, data: Mapping[str, Any]) -> str:
        doc_id = new_document_id()
        with store_errors(f"add {collection}"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO documents(collection, doc_id, data) VALUES(%s,%s,%s)",
                    (collection, doc_id, json.dumps(dict(data))),
                )
        return doc_id

    def set(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        with store_errors(f"set {collection}/{doc_id}"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO documents(collection, doc_id, data)
                    VALUES(%s,%s,%s)
                    ON DUPLICATE KEY UPDATE data=VALUES(data)
                    """,
                    (collection, doc_id, json.dumps(dict(data))),
                )

    def update(self, collection: str, doc_id: str, fields: Mapping[str, Any]) -> None:
        with store_errors(f"update {collection}/{doc_id}"):
            with db_cursor(self._conn_factory) as (_, cur):
                # rowcount is 0 for a no-op update, so check existence explicitly.
                cur.execute(
                    "SELECT doc_id FROM documents WHERE collection=%s AND doc_id=%s FOR UPDATE",
                    (collection, doc_id),
                )
                if not fetchone(cur):
                    raise StoreError(f"No document to update: {collection}/{doc_id}")
                cur.execute(
                    """
                    UPDATE documents
                    SET data=JSON_MERGE_PATCH(data, CAST(%s AS JSON))
                    WHERE collection=%s AND doc_id=%s
                    """,
                    (json.dumps(dict(fields)), collection, doc_id),
                )

    def delete(self, collection: str, doc_id: str) -> None:
        with store_errors(f"delete {collection}/{doc_id}"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM documents WHERE collection=%s AND doc_id=%s", (collection, doc_id))
