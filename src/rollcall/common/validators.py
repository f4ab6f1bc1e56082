from __future__ import annotations

from datetime import datetime, time

from ..core.constants import SESSION_CODE_LENGTH, TIME_OF_DAY_FORMAT
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def is_session_code(value: str) -> bool:
    return len(value) == SESSION_CODE_LENGTH and value.isascii() and value.isdigit()


def parse_time_of_day(value: str, field_name: str) -> time:
    """Parse an "HH:MM" string into a time."""
    value = require_non_empty(value, field_name)
    try:
        return datetime.strptime(value, TIME_OF_DAY_FORMAT).time()
    except ValueError:
        raise ValidationError(f"{field_name} must use HH:MM") from None
