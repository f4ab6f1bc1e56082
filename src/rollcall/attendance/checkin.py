from __future__ import annotations

import logging

from ..common.datetime_utils import Clock, now_millis
from ..common.validators import is_session_code
from ..core.enums import CheckInOutcome
from ..core.exceptions import StoreError
from ..identity.client import IdentityClient
from ..sessions.repository import SessionRepository
from .model import CheckInResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

MSG_SUCCESS = "Attendance marked successfully!"
MSG_BLANK_CODE = "Please enter a session code"
MSG_BAD_FORMAT = "Session code must be 6 digits"
MSG_INVALID_CODE = "Invalid or expired session code"
MSG_DUPLICATE = "You have already marked attendance for this session"
MSG_NOT_AUTHENTICATED = "Not authenticated"


def _rejected(message: str, **kwargs) -> CheckInResult:
    return CheckInResult(CheckInOutcome.REJECTED, message, **kwargs)


def _failed(message: str, **kwargs) -> CheckInResult:
    return CheckInResult(CheckInOutcome.FAILED, message, **kwargs)


class CheckInWorkflow:
    """Use case: a student checks in to an active session by its code.

    The duplicate check and the insert are two separate store calls, so two
    concurrent submissions for the same (session, student) can both pass the
    check. The store offers no conditional insert to close that gap.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        attendance: AttendanceRepository,
        identity: IdentityClient | None = None,
        *,
        clock: Clock = now_millis,
    ):
        self._sessions = sessions
        self._attendance = attendance
        self._identity = identity
        self._clock = clock

    def check_in(self, code: str, student_id: str) -> CheckInResult:
        student_id = (student_id or "").strip()
        if not student_id:
            return _failed(MSG_NOT_AUTHENTICATED)

        code = (code or "").strip()
        if not code:
            return _rejected(MSG_BLANK_CODE)
        if not is_session_code(code):
            return _rejected(MSG_BAD_FORMAT)

        try:
            matches = self._sessions.find_active_by_code(code)
        except StoreError as e:
            return _failed(f"Failed to verify session code: {e}")
        if not matches:
            logger.info("Check-in by %s rejected: no active session for code %s", student_id, code)
            return _rejected(MSG_INVALID_CODE)

        if len(matches) > 1:
            logger.warning("Code %s matches %d active sessions, using %s", code, len(matches), matches[0].session_id)
        session = matches[0]

        try:
            existing = self._attendance.find_for_session_and_student(
                session_id=session.session_id, student_id=student_id
            )
        except StoreError as e:
            return _failed(f"Failed to check attendance record: {e}", session_id=session.session_id)
        if existing:
            return _rejected(MSG_DUPLICATE, session_id=session.session_id)

        try:
            record_id = self._attendance.create(
                session_id=session.session_id,
                student_id=student_id,
                timestamp=self._clock(),
            )
        except StoreError as e:
            return _failed(f"Failed to mark attendance: {e}", session_id=session.session_id)

        logger.info("Student %s checked in to session %s", student_id, session.session_id)
        return CheckInResult(
            CheckInOutcome.SUCCESS,
            MSG_SUCCESS,
            session_id=session.session_id,
            record_id=record_id,
        )

    def check_in_current_user(self, code: str) -> CheckInResult:
        student_id = self._identity.current_user_id() if self._identity else None
        if not student_id:
            return _failed(MSG_NOT_AUTHENTICATED)
        return self.check_in(code, student_id)
