from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """User role stored on the users document."""

    PROFESSOR = "PROFESSOR"
    STUDENT = "STUDENT"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Role"]:
        if not value:
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


class CheckInOutcome(str, Enum):
    """Terminal states of a check-in attempt."""

    SUCCESS = "SUCCESS"
    REJECTED = "REJECTED"
    FAILED = "FAILED"


class Weekday(Enum):
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Weekday"]:
        """Accept full or three-letter day names, any case."""
        if not value:
            return None
        key = value.strip().upper()
        for day in cls:
            if day.name == key or day.name[:3] == key:
                return day
        return None

    @property
    def label(self) -> str:
        return self.name.capitalize()
