from __future__ import annotations

from typing import Optional, Sequence

from ..common.iterables import chunked, unique
from ..core.constants import ATTENDANCE_SESSIONS, DEFAULT_IN_QUERY_CHUNK_SIZE
from ..store.document_store import DOCUMENT_ID, Document, DocumentStore, Where
from .model import AttendanceSession


def _to_session(doc: Document) -> AttendanceSession:
    return AttendanceSession(
        session_id=doc.id,
        code=str(doc.get("code") or ""),
        course_name=str(doc.get("courseName") or ""),
        professor_id=str(doc.get("professorId") or ""),
        start_time=int(doc.get("startTime") or 0),
        active=bool(doc.get("active", False)),
    )


class SessionRepository:
    """`attendance_sessions` collection. Store failures propagate as StoreError."""

    def __init__(self, store: DocumentStore, *, chunk_size: int = DEFAULT_IN_QUERY_CHUNK_SIZE):
        self._store = store
        self._chunk_size = int(chunk_size)

    def get_by_id(self, session_id: str) -> Optional[AttendanceSession]:
        doc = self._store.get(ATTENDANCE_SESSIONS, session_id)
        return _to_session(doc) if doc else None

    def create(self, *, code: str, course_name: str, professor_id: str, start_time: int) -> str:
        return self._store.add(
            ATTENDANCE_SESSIONS,
            {
                "code": code,
                "courseName": course_name,
                "professorId": professor_id,
                "startTime": int(start_time),
                "active": True,
            },
        )

    def set_inactive(self, session_id: str) -> None:
        self._store.update(ATTENDANCE_SESSIONS, session_id, {"active": False})

    def list_active_for_professor(self, professor_id: str) -> Sequence[AttendanceSession]:
        docs = self._store.query(
            ATTENDANCE_SESSIONS,
            Where.eq("professorId", professor_id),
            Where.eq("active", True),
        )
        return [_to_session(d) for d in docs]

    def list_for_professor(self, professor_id: str) -> Sequence[AttendanceSession]:
        docs = self._store.query(ATTENDANCE_SESSIONS, Where.eq("professorId", professor_id))
        return [_to_session(d) for d in docs]

    def find_active_by_code(self, code: str) -> Sequence[AttendanceSession]:
        docs = self._store.query(ATTENDANCE_SESSIONS, Where.eq("code", code), Where.eq("active", True))
        return [_to_session(d) for d in docs]

    def get_many(self, session_ids: Sequence[str]) -> Sequence[AttendanceSession]:
        out = []
        for chunk in chunked(unique(session_ids), self._chunk_size):
            out.extend(_to_session(d) for d in self._store.query(ATTENDANCE_SESSIONS, Where.is_in(DOCUMENT_ID, chunk)))
        return out
