from __future__ import annotations

from functools import cmp_to_key
from typing import Iterable

from .model import WorkEntry


def _compare_start_desc(a: WorkEntry, b: WorkEntry) -> int:
    # Entries without a start time are left where they are relative to others.
    if not a.start_time or not b.start_time:
        return 0
    if a.start_time == b.start_time:
        return 0
    return -1 if a.start_time > b.start_time else 1


def _compare_recent_first(a: WorkEntry, b: WorkEntry) -> int:
    if a.work_date != b.work_date:
        return -1 if a.work_date > b.work_date else 1
    return _compare_start_desc(a, b)


def sort_recent_first(entries: Iterable[WorkEntry]) -> list[WorkEntry]:
    """Most recent first: date descending, then start time descending."""
    return sorted(entries, key=cmp_to_key(_compare_recent_first))


def sort_by_start_desc(entries: Iterable[WorkEntry]) -> list[WorkEntry]:
    """Entries of a single day, latest start first."""
    return sorted(entries, key=cmp_to_key(_compare_start_desc))
