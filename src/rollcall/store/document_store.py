from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol, Sequence

# Pseudo field name that addresses the document id in a predicate.
DOCUMENT_ID = "__name__"

EQ = "=="
IN = "in"


@dataclass(frozen=True)
class Where:
    """One query predicate: equality or inclusion on a field."""

    field: str
    op: str
    value: Any

    def __post_init__(self):
        if self.op not in (EQ, IN):
            raise ValueError(f"Unsupported operator: {self.op!r}")
        if self.op == IN and isinstance(self.value, (str, bytes)):
            raise ValueError("'in' expects a sequence of values")

    @classmethod
    def eq(cls, field: str, value: Any) -> "Where":
        return cls(field, EQ, value)

    @classmethod
    def is_in(cls, field: str, values: Sequence[Any]) -> "Where":
        if isinstance(values, (str, bytes)):
            raise ValueError("'in' expects a sequence of values")
        return cls(field, IN, list(values))

    def matches(self, doc_id: str, data: Mapping[str, Any]) -> bool:
        actual = doc_id if self.field == DOCUMENT_ID else data.get(self.field)
        if self.op == EQ:
            return actual == self.value
        return actual in self.value


@dataclass(frozen=True)
class Document:
    """A stored document: opaque id plus its field map."""

    id: str
    data: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)


class DocumentStore(Protocol):
    """Contract of the remote document database.

    Every method may raise StoreError with a human-readable message.
    """

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        raise NotImplementedError

    def query(self, collection: str, *predicates: Where) -> Sequence[Document]:
        """Documents matching all predicates, in backend order."""

        raise NotImplementedError

    def add(self, collection: str, data: Mapping[str, Any]) -> str:
        """Insert a document under a store-assigned id and return the id."""

        raise NotImplementedError

    def set(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        """Create or overwrite the document with a caller-chosen id."""

        raise NotImplementedError

    def update(self, collection: str, doc_id: str, fields: Mapping[str, Any]) -> None:
        """Merge fields into an existing document; a missing document is an error."""

        raise NotImplementedError

    def delete(self, collection: str, doc_id: str) -> None:
        raise NotImplementedError
