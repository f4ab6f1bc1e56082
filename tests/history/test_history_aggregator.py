from __future__ import annotations

import pytest

from rollcall.attendance.history import HistoryAggregator
from rollcall.attendance.repository import AttendanceRepository
from rollcall.core.constants import ATTENDANCE_RECORDS, ATTENDANCE_SESSIONS, USERS
from rollcall.core.exceptions import NotFoundError, ReadError, ValidationError
from rollcall.sessions.repository import SessionRepository
from rollcall.users.repository import UserRepository


def _session(store, session_id, course, professor_id="prof-1", active=True):
    store.set(
        ATTENDANCE_SESSIONS,
        session_id,
        {"code": "123456", "courseName": course, "professorId": professor_id, "startTime": 0, "active": active},
    )


def _record(store, record_id, session_id, student_id, timestamp):
    store.set(ATTENDANCE_RECORDS, record_id, {"sessionId": session_id, "studentId": student_id, "timestamp": timestamp})


def _aggregator(store, chunk_size=30):
    return HistoryAggregator(
        SessionRepository(store, chunk_size=chunk_size),
        AttendanceRepository(store, chunk_size=chunk_size),
        UserRepository(store, chunk_size=chunk_size),
    )


@pytest.fixture
def two_sessions(accounts):
    _session(accounts, "S1", "A")
    _session(accounts, "S2", "B", active=False)
    _record(accounts, "r1", "S1", "stu-1", 1_000)
    _record(accounts, "r2", "S2", "stu-2", 2_000)
    return accounts


def test_professor_history_is_newest_first_with_names(two_sessions):
    rows = _aggregator(two_sessions).professor_history("prof-1")

    assert [(r.course_name, r.timestamp) for r in rows] == [("B", 2_000), ("A", 1_000)]
    assert [r.student_name for r in rows] == ["Ada", "Linus"]


def test_student_history_is_newest_first(two_sessions):
    _record(two_sessions, "r3", "S2", "stu-1", 3_000)

    rows = _aggregator(two_sessions).student_history("stu-1")

    assert [(r.course_name, r.timestamp) for r in rows] == [("B", 3_000), ("A", 1_000)]
    assert all(r.student_name == "" for r in rows)


def test_professor_without_sessions_gets_empty_history(accounts):
    assert _aggregator(accounts).professor_history("prof-1") == []


def test_sessions_without_records_short_circuit_before_user_lookup(accounts):
    _session(accounts, "S1", "A")

    assert _aggregator(accounts).professor_history("prof-1") == []
    assert ("query", USERS) not in accounts.calls


def test_student_without_records_gets_empty_history(accounts):
    assert _aggregator(accounts).student_history("stu-1") == []
    assert ("query", ATTENDANCE_SESSIONS) not in accounts.calls


def test_other_professors_sessions_are_excluded(two_sessions):
    _session(two_sessions, "S9", "Z", professor_id="prof-2")
    _record(two_sessions, "r9", "S9", "stu-1", 9_000)

    rows = _aggregator(two_sessions).professor_history("prof-1")

    assert {r.session_id for r in rows} == {"S1", "S2"}


def test_missing_student_document_leaves_blank_name(two_sessions):
    _record(two_sessions, "r4", "S1", "ghost", 4_000)

    rows = _aggregator(two_sessions).professor_history("prof-1")

    assert rows[0].student_id == "ghost"
    assert rows[0].student_name == ""


@pytest.mark.parametrize(
    "op, collection, message",
    [
        ("query", ATTENDANCE_SESSIONS, "Failed to load sessions: down"),
        ("query", ATTENDANCE_RECORDS, "Failed to load attendance records: down"),
        ("query", USERS, "Failed to load student names: down"),
    ],
)
def test_professor_history_stage_failure_aborts(two_sessions, op, collection, message):
    two_sessions.fail(op, collection, "down")

    with pytest.raises(ReadError) as excinfo:
        _aggregator(two_sessions).professor_history("prof-1")
    assert str(excinfo.value) == message


def test_student_history_session_stage_failure_aborts(two_sessions):
    two_sessions.fail("query", ATTENDANCE_SESSIONS, "down")

    with pytest.raises(ReadError, match="Failed to load session details: down"):
        _aggregator(two_sessions).student_history("stu-1")


def test_inclusion_queries_are_chunked(accounts):
    for i in range(7):
        _session(accounts, f"S{i}", f"C{i}")
        _record(accounts, f"r{i}", f"S{i}", "stu-1", i)

    rows = _aggregator(accounts, chunk_size=3).professor_history("prof-1")

    assert len(rows) == 7
    assert accounts.calls.count(("query", ATTENDANCE_RECORDS)) == 3


def test_history_for_dispatches_on_role(two_sessions):
    agg = _aggregator(two_sessions)

    assert len(agg.history_for("prof-1")) == 2
    assert [r.course_name for r in agg.history_for("stu-1")] == ["A"]


def test_history_for_missing_user_or_role(accounts):
    accounts.set(USERS, "no-role", {"name": "X"})
    agg = _aggregator(accounts)

    with pytest.raises(NotFoundError, match="User role not found"):
        agg.history_for("nobody")
    with pytest.raises(NotFoundError, match="User role not found"):
        agg.history_for("no-role")


def test_history_for_unknown_role(accounts):
    accounts.set(USERS, "admin-1", {"name": "X", "role": "ADMIN"})

    with pytest.raises(ValidationError, match="Invalid user role"):
        _aggregator(accounts).history_for("admin-1")


def test_date_label_uses_display_format(two_sessions):
    row = _aggregator(two_sessions).student_history("stu-1")[0]

    # "%b %d, %Y %H:%M" e.g. "Jan 01, 1970 00:00"
    month, day, year, clock = row.date_label.split(" ")
    assert len(month) == 3 and day.endswith(",") and len(year) == 4 and ":" in clock
