from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Iterable, Optional

from ..common.datetime_utils import month_of, year_of
from ..common.formatting import format_day_label, format_duration, format_month_label
from ..core.enums import HistoryPeriod, Locale
from .model import WorkEntry
from .ordering import sort_by_start_desc


def entry_minutes(entry: WorkEntry) -> int:
    # Open entries have no duration yet and count as zero.
    return int(entry.duration_minutes or 0)


@dataclass(frozen=True)
class DayGroup:
    """Entries of one calendar date, latest start first."""

    work_date: str
    entries: list[WorkEntry]
    total_minutes: int

    @property
    def display_total(self) -> str:
        return format_duration(self.total_minutes)

    def to_dict(self, locale: Locale = Locale.EN) -> dict:
        return {
            "date": self.work_date,
            "label": format_day_label(self.work_date, locale),
            "totalMinutes": self.total_minutes,
            "displayTotal": self.display_total,
            "entries": [e.to_dict() for e in self.entries],
        }


def group_by_date(
    entries: Iterable[WorkEntry],
    *,
    minutes: Callable[[WorkEntry], int] = entry_minutes,
) -> list[DayGroup]:
    """Group entries by date; dates descending, entries in a date by start descending."""
    by_date: dict[str, list[WorkEntry]] = {}
    for e in entries:
        by_date.setdefault(e.work_date, []).append(e)

    groups = []
    for work_date in sorted(by_date, reverse=True):
        day_entries = sort_by_start_desc(by_date[work_date])
        groups.append(
            DayGroup(
                work_date=work_date,
                entries=day_entries,
                total_minutes=sum(minutes(e) for e in day_entries),
            )
        )
    return groups


def available_months(entries: Iterable[WorkEntry]) -> list[str]:
    """Distinct YYYY-MM values present in the entries, newest first."""
    return sorted({month_of(e.work_date) for e in entries}, reverse=True)


def available_years(entries: Iterable[WorkEntry]) -> list[str]:
    return sorted({year_of(e.work_date) for e in entries}, reverse=True)


@dataclass(frozen=True)
class HistorySummary:
    """An employee's own work log filtered to a period."""

    period: HistoryPeriod
    value: Optional[str]
    period_label: Optional[str]
    days: list[DayGroup]
    total_minutes: int
    available_months: list[str] = field(default_factory=list)
    available_years: list[str] = field(default_factory=list)

    @property
    def display_total(self) -> str:
        return format_duration(self.total_minutes)

    def to_dict(self, locale: Locale = Locale.EN) -> dict:
        return {
            "period": self.period.value,
            "value": self.value,
            "periodLabel": self.period_label,
            "totalMinutes": self.total_minutes,
            "displayTotal": self.display_total,
            "days": [d.to_dict(locale) for d in self.days],
            "availableMonths": [
                {"value": m, "label": format_month_label(m, locale)} for m in self.available_months
            ],
            "availableYears": self.available_years,
        }


def summarize_history(
    entries: list[WorkEntry],
    *,
    period: HistoryPeriod = HistoryPeriod.MONTH,
    value: Optional[str] = None,
    locale: Locale = Locale.EN,
    today: Optional[date] = None,
) -> HistorySummary:
    """Filter a user's history to all days, one month (YYYY-MM) or one year (YYYY).

    Without an explicit value the month / year containing `today` is used.
    """
    today = today or date.today()

    if period == HistoryPeriod.MONTH:
        value = value or today.strftime("%Y-%m")
        selected = [e for e in entries if month_of(e.work_date) == value]
        label: Optional[str] = format_month_label(value, locale)
    elif period == HistoryPeriod.YEAR:
        value = value or str(today.year)
        selected = [e for e in entries if year_of(e.work_date) == value]
        label = value
    else:
        value = None
        selected = list(entries)
        label = None

    days = group_by_date(selected)
    return HistorySummary(
        period=period,
        value=value,
        period_label=label,
        days=days,
        total_minutes=sum(d.total_minutes for d in days),
        available_months=available_months(entries),
        available_years=available_years(entries),
    )
