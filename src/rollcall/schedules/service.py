from __future__ import annotations

import logging
from dataclasses import replace
from typing import List

from ..common.validators import parse_time_of_day, require_non_empty
from ..core.enums import Weekday
from ..core.exceptions import ReadError, StoreError, ValidationError, WriteError
from .model import ClassSchedule
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)


class TimetableManager:
    def __init__(self, schedules: ScheduleRepository):
        self._schedules = schedules

    def list_schedules(self, professor_id: str) -> List[ClassSchedule]:
        try:
            items = self._schedules.list_for_professor(professor_id)
        except StoreError as e:
            raise ReadError(f"Failed to load timetable: {e}") from e
        return sorted(items, key=ClassSchedule.sort_key)

    def add_schedule(self, schedule: ClassSchedule) -> str:
        professor_id = require_non_empty(schedule.professor_id, "Professor")
        course_name = require_non_empty(schedule.course_name, "Course name")

        day = Weekday.parse(schedule.day_of_week)
        if not day:
            raise ValidationError(f"Unknown day of week: {schedule.day_of_week!r}")

        start = parse_time_of_day(schedule.start_time, "Start time")
        end = parse_time_of_day(schedule.end_time, "End time")
        if end <= start:
            raise ValidationError("End time must be after start time")

        normalized = replace(
            schedule,
            professor_id=professor_id,
            course_name=course_name,
            day_of_week=day.label,
            start_time=start.strftime("%H:%M"),
            end_time=end.strftime("%H:%M"),
            room=(schedule.room or "").strip(),
        )

        try:
            schedule_id = self._schedules.create(normalized)
        except StoreError as e:
            raise WriteError(f"Failed to add class: {e}") from e

        logger.info("Added %s on %s for %s", course_name, normalized.label, professor_id)
        return schedule_id

    def delete_schedule(self, schedule_id: str) -> bool:
        try:
            self._schedules.delete(schedule_id)
        except StoreError as e:
            logger.warning("Could not delete schedule %s: %s", schedule_id, e)
            return False
        return True
