from __future__ import annotations

from datetime import date, datetime

from ..core.constants import CLOCK_FORMAT, MINUTES_PER_DAY, MONTH_FORMAT, WORK_DATE_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, WORK_DATE_FORMAT).date()


def parse_month(value: str) -> date:
    """Parse YYYY-MM string into the first day of that month."""
    return datetime.strptime(value, MONTH_FORMAT).date()


def now_local() -> datetime:
    """Current local time. Services take it as their default clock."""
    return datetime.now()


def format_work_date(value: datetime | date) -> str:
    return value.strftime(WORK_DATE_FORMAT)


def format_clock(value: datetime) -> str:
    """Render a wall-clock time as 24-hour HH:MM, independent of display locale."""
    return value.strftime(CLOCK_FORMAT)


def parse_clock(value: str) -> tuple[int, int]:
    """Parse 'HH:MM' (seconds, if present, are ignored) into (hours, minutes)."""
    parts = (value or "").strip().split(":")
    if len(parts) < 2:
        raise ValueError(f"Invalid clock string: {value!r}")
    hours = int(parts[0])
    minutes = int(parts[1])
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValueError(f"Invalid clock string: {value!r}")
    return hours, minutes


def clock_minutes_between(start: str, end: str) -> int:
    """Minutes from start to end on a common day.

    An end earlier than the start is taken as the next day (session crossed
    midnight), so the result is always within [0, 1439].
    """
    start_h, start_m = parse_clock(start)
    end_h, end_m = parse_clock(end)
    start_total = start_h * 60 + start_m
    end_total = end_h * 60 + end_m
    if end_total < start_total:
        end_total += MINUTES_PER_DAY
    return int(round(end_total - start_total))


def month_of(work_date: str) -> str:
    """'2024-01-31' -> '2024-01'."""
    return parse_iso_date(work_date).strftime(MONTH_FORMAT)


def year_of(work_date: str) -> str:
    return str(parse_iso_date(work_date).year)
