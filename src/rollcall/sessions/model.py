from __future__ import annotations

from dataclasses import dataclass

from ..common.datetime_utils import format_timestamp


@dataclass(frozen=True)
class AttendanceSession:
    """Domain entity: a timed class session students check in to by code."""

    session_id: str
    code: str
    course_name: str
    professor_id: str
    start_time: int
    active: bool = True

    @property
    def started_label(self) -> str:
        return format_timestamp(self.start_time)
