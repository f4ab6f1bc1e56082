from __future__ import annotations

import pytest

from rollcall.core.constants import CLASS_SCHEDULES
from rollcall.core.exceptions import ReadError, ValidationError, WriteError
from rollcall.schedules.model import ClassSchedule
from rollcall.schedules.repository import ScheduleRepository
from rollcall.schedules.service import TimetableManager


def _entry(day, start, end="23:00", course="Course", professor_id="prof-1", room="R1"):
    return ClassSchedule(
        schedule_id=None,
        professor_id=professor_id,
        course_name=course,
        day_of_week=day,
        start_time=start,
        end_time=end,
        room=room,
    )


@pytest.fixture
def timetable(store):
    return TimetableManager(ScheduleRepository(store))


def test_list_is_in_calendar_order_not_alphabetical(timetable):
    timetable.add_schedule(_entry("Friday", "08:00", course="Fri"))
    timetable.add_schedule(_entry("Monday", "09:00", course="Mon late"))
    timetable.add_schedule(_entry("monday", "8:30", course="Mon early"))
    timetable.add_schedule(_entry("Wednesday", "13:00", course="Wed"))

    courses = [s.course_name for s in timetable.list_schedules("prof-1")]

    assert courses == ["Mon early", "Mon late", "Wed", "Fri"]


def test_add_schedule_normalizes_day_and_times(timetable, store):
    schedule_id = timetable.add_schedule(_entry("tue", "9:05", "10:30", room=" B12 "))

    doc = store.all(CLASS_SCHEDULES)[schedule_id]
    assert doc == {
        "professorId": "prof-1",
        "courseName": "Course",
        "dayOfWeek": "Tuesday",
        "startTime": "09:05",
        "endTime": "10:30",
        "room": "B12",
    }


def test_list_only_returns_own_schedules(timetable):
    timetable.add_schedule(_entry("Monday", "08:00", professor_id="prof-1"))
    timetable.add_schedule(_entry("Monday", "08:00", professor_id="prof-2"))

    assert [s.professor_id for s in timetable.list_schedules("prof-1")] == ["prof-1"]


def test_entries_stored_elsewhere_with_odd_days_sort_last(timetable, store):
    timetable.add_schedule(_entry("Sunday", "10:00", course="Sun"))
    store.add(CLASS_SCHEDULES, {"professorId": "prof-1", "courseName": "Odd", "dayOfWeek": "Someday", "startTime": "07:00", "endTime": "08:00", "room": ""})

    assert [s.course_name for s in timetable.list_schedules("prof-1")] == ["Sun", "Odd"]


def test_delete_removes_exactly_that_entry(timetable):
    keep = timetable.add_schedule(_entry("Monday", "08:00", course="Keep"))
    drop = timetable.add_schedule(_entry("Tuesday", "08:00", course="Drop"))
    other = timetable.add_schedule(_entry("Friday", "08:00", course="Also keep"))

    assert timetable.delete_schedule(drop) is True

    assert [s.schedule_id for s in timetable.list_schedules("prof-1")] == [keep, other]


def test_delete_failure_is_false(timetable, store):
    schedule_id = timetable.add_schedule(_entry("Monday", "08:00"))
    store.fail("delete", CLASS_SCHEDULES)

    assert timetable.delete_schedule(schedule_id) is False


@pytest.mark.parametrize(
    "entry, message",
    [
        (_entry("Monday", "08:00", course=" "), "Course name"),
        (_entry("Funday", "08:00"), "Unknown day of week"),
        (_entry("Monday", "8am"), "Start time"),
        (_entry("Monday", "08:00", "25:00"), "End time"),
        (_entry("Monday", "10:00", "09:00"), "End time must be after start time"),
    ],
)
def test_invalid_entries_are_rejected_before_store_call(timetable, store, entry, message):
    with pytest.raises(ValidationError, match=message):
        timetable.add_schedule(entry)
    assert store.calls == []


def test_backend_failures(timetable, store):
    store.fail("add", CLASS_SCHEDULES, "read-only")
    with pytest.raises(WriteError, match="read-only"):
        timetable.add_schedule(_entry("Monday", "08:00"))

    store.fail("query", CLASS_SCHEDULES, "offline")
    with pytest.raises(ReadError, match="Failed to load timetable: offline"):
        timetable.list_schedules("prof-1")
