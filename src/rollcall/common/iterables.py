from __future__ import annotations

from typing import Iterable, Iterator, List, Sequence, TypeVar

T = TypeVar("T")


def unique(values: Iterable[T]) -> List[T]:
    """Distinct values, first occurrence order preserved."""
    seen: set = set()
    out: List[T] = []
    for v in values:
        if v not in seen:
            seen.add(v)
            out.append(v)
    return out


def chunked(values: Sequence[T], size: int) -> Iterator[List[T]]:
    if size <= 0:
        raise ValueError("chunk size must be positive")
    for start in range(0, len(values), size):
        yield list(values[start : start + size])
