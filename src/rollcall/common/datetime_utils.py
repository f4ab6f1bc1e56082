from __future__ import annotations

from datetime import datetime
from typing import Callable

from ..core.constants import DISPLAY_DATETIME_FORMAT

Clock = Callable[[], int]


def now_millis() -> int:
    """Current wall-clock time as epoch milliseconds.

    Note: Wrapped so services can take it as an injectable clock in tests.
    """
    return int(datetime.now().timestamp() * 1000)


def format_timestamp(millis: int, fmt: str = DISPLAY_DATETIME_FORMAT) -> str:
    return datetime.fromtimestamp(millis / 1000).strftime(fmt)
