from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.datetime_utils import format_timestamp
from ..core.enums import CheckInOutcome
from ..core.exceptions import LogicRejection, WriteError


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's check-in to one session."""

    record_id: str
    session_id: str
    student_id: str
    timestamp: int


@dataclass(frozen=True)
class HistoryRow:
    """Read-model for the attendance history list."""

    record_id: str
    session_id: str
    student_id: str
    course_name: str
    timestamp: int
    student_name: str = ""

    @property
    def date_label(self) -> str:
        return format_timestamp(self.timestamp)


@dataclass(frozen=True)
class CheckInResult:
    outcome: CheckInOutcome
    message: str
    session_id: Optional[str] = None
    record_id: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome == CheckInOutcome.SUCCESS

    def raise_for_outcome(self) -> "CheckInResult":
        """Return self on success, otherwise raise the matching DomainError."""
        if self.outcome == CheckInOutcome.REJECTED:
            raise LogicRejection(self.message)
        if self.outcome == CheckInOutcome.FAILED:
            raise WriteError(self.message)
        return self
