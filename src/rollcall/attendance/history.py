from __future__ import annotations

import logging
from typing import List, Sequence

from ..common.iterables import unique
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ReadError, StoreError, ValidationError
from ..sessions.repository import SessionRepository
from ..users.repository import UserRepository
from .model import HistoryRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _newest_first(rows: List[HistoryRow]) -> List[HistoryRow]:
    return sorted(rows, key=lambda r: r.timestamp, reverse=True)


class HistoryAggregator:
    """Use case: attendance history joined across sessions, records and users.

    Each stage reads what the previous stage found. A failing stage aborts
    the whole aggregation with that stage's message; partial results are
    never returned. An empty stage ends early with an empty history.
    """

    def __init__(self, sessions: SessionRepository, attendance: AttendanceRepository, users: UserRepository):
        self._sessions = sessions
        self._attendance = attendance
        self._users = users

    def professor_history(self, professor_id: str) -> List[HistoryRow]:
        try:
            sessions = self._sessions.list_for_professor(professor_id)
        except StoreError as e:
            raise ReadError(f"Failed to load sessions: {e}") from e
        if not sessions:
            return []

        course_by_session = {s.session_id: s.course_name for s in sessions}

        try:
            records = self._attendance.list_for_sessions(list(course_by_session))
        except StoreError as e:
            raise ReadError(f"Failed to load attendance records: {e}") from e
        if not records:
            return []

        student_ids = unique(r.student_id for r in records)
        try:
            names = self._users.names_by_id(student_ids)
        except StoreError as e:
            raise ReadError(f"Failed to load student names: {e}") from e

        rows = [
            HistoryRow(
                record_id=r.record_id,
                session_id=r.session_id,
                student_id=r.student_id,
                course_name=course_by_session.get(r.session_id, ""),
                timestamp=r.timestamp,
                student_name=names.get(r.student_id, ""),
            )
            for r in records
        ]
        return _newest_first(rows)

    def student_history(self, student_id: str) -> List[HistoryRow]:
        try:
            records = self._attendance.list_for_student(student_id)
        except StoreError as e:
            raise ReadError(f"Failed to load attendance records: {e}") from e
        if not records:
            return []

        session_ids = unique(r.session_id for r in records)
        try:
            sessions = self._sessions.get_many(session_ids)
        except StoreError as e:
            raise ReadError(f"Failed to load session details: {e}") from e

        course_by_session = {s.session_id: s.course_name for s in sessions}
        rows = [
            HistoryRow(
                record_id=r.record_id,
                session_id=r.session_id,
                student_id=student_id,
                course_name=course_by_session.get(r.session_id, ""),
                timestamp=r.timestamp,
            )
            for r in records
        ]
        return _newest_first(rows)

    def history_for(self, user_id: str) -> Sequence[HistoryRow]:
        """Pick the professor or student variant from the user's stored role."""
        try:
            user = self._users.get_by_id(user_id)
        except StoreError as e:
            raise ReadError(f"Failed to load user role: {e}") from e

        if not user or not user.raw_role:
            raise NotFoundError("User role not found")

        if user.role == Role.PROFESSOR:
            return self.professor_history(user_id)
        if user.role == Role.STUDENT:
            return self.student_history(user_id)

        logger.error("Invalid role %r on user %s", user.raw_role, user_id)
        raise ValidationError("Invalid user role")
