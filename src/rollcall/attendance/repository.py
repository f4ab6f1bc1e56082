from __future__ import annotations

from typing import Sequence

from ..common.iterables import chunked, unique
from ..core.constants import ATTENDANCE_RECORDS, DEFAULT_IN_QUERY_CHUNK_SIZE
from ..store.document_store import Document, DocumentStore, Where
from .model import AttendanceRecord


def _to_record(doc: Document) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=doc.id,
        session_id=str(doc.get("sessionId") or ""),
        student_id=str(doc.get("studentId") or ""),
        timestamp=int(doc.get("timestamp") or 0),
    )


class AttendanceRepository:
    """`attendance_records` collection. Store failures propagate as StoreError."""

    def __init__(self, store: DocumentStore, *, chunk_size: int = DEFAULT_IN_QUERY_CHUNK_SIZE):
        self._store = store
        self._chunk_size = int(chunk_size)

    def find_for_session_and_student(self, *, session_id: str, student_id: str) -> Sequence[AttendanceRecord]:
        docs = self._store.query(
            ATTENDANCE_RECORDS,
            Where.eq("sessionId", session_id),
            Where.eq("studentId", student_id),
        )
        return [_to_record(d) for d in docs]

    def create(self, *, session_id: str, student_id: str, timestamp: int) -> str:
        return self._store.add(
            ATTENDANCE_RECORDS,
            {"sessionId": session_id, "studentId": student_id, "timestamp": int(timestamp)},
        )

    def list_for_student(self, student_id: str) -> Sequence[AttendanceRecord]:
        return [_to_record(d) for d in self._store.query(ATTENDANCE_RECORDS, Where.eq("studentId", student_id))]

    def list_for_sessions(self, session_ids: Sequence[str]) -> Sequence[AttendanceRecord]:
        out = []
        for chunk in chunked(unique(session_ids), self._chunk_size):
            out.extend(_to_record(d) for d in self._store.query(ATTENDANCE_RECORDS, Where.is_in("sessionId", chunk)))
        return out
