from __future__ import annotations

from typing import Sequence

from ..core.constants import CLASS_SCHEDULES
from ..store.document_store import Document, DocumentStore, Where
from .model import ClassSchedule


def _to_schedule(doc: Document) -> ClassSchedule:
    return ClassSchedule(
        schedule_id=doc.id,
        professor_id=str(doc.get("professorId") or ""),
        course_name=str(doc.get("courseName") or ""),
        day_of_week=str(doc.get("dayOfWeek") or ""),
        start_time=str(doc.get("startTime") or ""),
        end_time=str(doc.get("endTime") or ""),
        room=str(doc.get("room") or ""),
    )


class ScheduleRepository:
    """`class_schedules` collection. Store failures propagate as StoreError."""

    def __init__(self, store: DocumentStore):
        self._store = store

    def list_for_professor(self, professor_id: str) -> Sequence[ClassSchedule]:
        return [_to_schedule(d) for d in self._store.query(CLASS_SCHEDULES, Where.eq("professorId", professor_id))]

    def create(self, schedule: ClassSchedule) -> str:
        return self._store.add(
            CLASS_SCHEDULES,
            {
                "professorId": schedule.professor_id,
                "courseName": schedule.course_name,
                "dayOfWeek": schedule.day_of_week,
                "startTime": schedule.start_time,
                "endTime": schedule.end_time,
                "room": schedule.room,
            },
        )

    def delete(self, schedule_id: str) -> None:
        self._store.delete(CLASS_SCHEDULES, schedule_id)
