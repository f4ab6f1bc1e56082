from __future__ import annotations

import io
import logging
import random
from typing import Optional, Sequence

import qrcode

from ..common.datetime_utils import Clock, now_millis
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_SESSION_CODE_ATTEMPTS, SESSION_CODE_MAX, SESSION_CODE_MIN
from ..core.exceptions import ReadError, StoreError, ValidationError, WriteError
from .model import AttendanceSession
from .repository import SessionRepository

logger = logging.getLogger(__name__)


class SessionManager:
    """Use case: professors open, list and end attendance sessions."""

    def __init__(
        self,
        sessions: SessionRepository,
        *,
        rng: Optional[random.Random] = None,
        clock: Clock = now_millis,
        enforce_unique_codes: bool = True,
        max_code_attempts: int = DEFAULT_SESSION_CODE_ATTEMPTS,
        surface_list_errors: bool = False,
    ):
        self._sessions = sessions
        self._rng = rng or random.SystemRandom()
        self._clock = clock
        self._enforce_unique_codes = bool(enforce_unique_codes)
        self._max_code_attempts = max(1, int(max_code_attempts))
        self._surface_list_errors = bool(surface_list_errors)

    def generate_code(self) -> str:
        return str(self._rng.randint(SESSION_CODE_MIN, SESSION_CODE_MAX))

    def _allocate_code(self) -> str:
        if not self._enforce_unique_codes:
            return self.generate_code()

        for _ in range(self._max_code_attempts):
            code = self.generate_code()
            if not self._sessions.find_active_by_code(code):
                return code
            logger.info("Session code %s already active, drawing again", code)

        raise WriteError("Could not allocate a unique session code")

    def create_session(self, course_name: str, professor_id: str) -> str:
        if not course_name or not course_name.strip():
            raise ValidationError("Please enter a course name")
        course_name = course_name.strip()
        professor_id = require_non_empty(professor_id, "Professor")

        try:
            code = self._allocate_code()
            session_id = self._sessions.create(
                code=code,
                course_name=course_name,
                professor_id=professor_id,
                start_time=self._clock(),
            )
        except StoreError as e:
            raise WriteError(f"Failed to create session: {e}") from e

        logger.info("Session %s opened for %s by %s", session_id, course_name, professor_id)
        return session_id

    def list_active_sessions(self, professor_id: str) -> Sequence[AttendanceSession]:
        try:
            return list(self._sessions.list_active_for_professor(professor_id))
        except StoreError as e:
            if self._surface_list_errors:
                raise ReadError(f"Failed to load active sessions: {e}") from e
            logger.warning("Active sessions query failed for %s, showing none: %s", professor_id, e)
            return []

    def end_session(self, session_id: str) -> bool:
        try:
            self._sessions.set_inactive(session_id)
        except StoreError as e:
            logger.warning("Could not end session %s: %s", session_id, e)
            return False
        logger.info("Session %s ended", session_id)
        return True

    def session_code_qr(self, session: AttendanceSession) -> bytes:
        """PNG QR code of the session code, for projecting in class."""
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=10,
            border=2,
        )
        qr.add_data(session.code)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()
