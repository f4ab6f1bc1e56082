from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional, Tuple

from ..core.constants import TIME_OF_DAY_FORMAT
from ..core.enums import Weekday


def _parse_time(value: str) -> time:
    try:
        return datetime.strptime(value.strip(), TIME_OF_DAY_FORMAT).time()
    except (AttributeError, ValueError):
        return time.max


@dataclass(frozen=True)
class ClassSchedule:
    schedule_id: Optional[str]
    professor_id: str
    course_name: str
    day_of_week: str
    start_time: str
    end_time: str
    room: str = ""

    @property
    def label(self) -> str:
        return f"{self.day_of_week}, {self.start_time} - {self.end_time}"

    def sort_key(self) -> Tuple[int, time, str]:
        """Calendar order: weekday ordinal, then time of day.

        Unknown day names and unparsable times sort after valid ones.
        """

        day = Weekday.parse(self.day_of_week)
        return (day.value if day else len(Weekday), _parse_time(self.start_time), self.course_name)
