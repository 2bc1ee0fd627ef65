from __future__ import annotations

from datetime import date

from src.timesheet_system.timesheet_system.core.enums import HistoryPeriod, Locale
from src.timesheet_system.timesheet_system.work_entries.history import group_by_date, summarize_history
from src.timesheet_system.timesheet_system.work_entries.ordering import sort_recent_first


def _entries(make):
    return [
        make("a", work_date="2023-12-31", start_time="10:00", end_time="12:00", duration_minutes=120),
        make("b", work_date="2024-01-03", start_time="08:00", end_time="09:00", duration_minutes=60),
        make("c", work_date="2024-01-03", start_time="14:00", end_time="14:45", duration_minutes=45),
        make("d", work_date="2024-01-20", start_time="09:00"),
    ]


def test_sort_recent_first_orders_by_date_then_start(entry_factory):
    ordered = sort_recent_first(_entries(entry_factory))
    assert [e.entry_id for e in ordered] == ["d", "c", "b", "a"]


def test_group_by_date_totals_open_entries_as_zero(entry_factory):
    groups = group_by_date(_entries(entry_factory))

    assert [g.work_date for g in groups] == ["2024-01-20", "2024-01-03", "2023-12-31"]
    assert groups[0].total_minutes == 0
    assert [e.entry_id for e in groups[1].entries] == ["c", "b"]
    assert groups[1].total_minutes == 105
    assert groups[1].display_total == "1h 45m"


def test_month_summary_defaults_to_current_month(entry_factory):
    summary = summarize_history(_entries(entry_factory), today=date(2024, 1, 25))

    assert summary.period == HistoryPeriod.MONTH
    assert summary.value == "2024-01"
    assert summary.period_label == "January 2024"
    assert summary.total_minutes == 105
    assert summary.available_months == ["2024-01", "2023-12"]
    assert summary.available_years == ["2024", "2023"]


def test_year_and_all_periods(entry_factory):
    entries = _entries(entry_factory)

    year = summarize_history(entries, period=HistoryPeriod.YEAR, value="2023")
    assert [d.work_date for d in year.days] == ["2023-12-31"]
    assert year.total_minutes == 120

    everything = summarize_history(entries, period=HistoryPeriod.ALL)
    assert everything.value is None
    assert everything.total_minutes == 225


def test_italian_month_label(entry_factory):
    summary = summarize_history(_entries(entry_factory), value="2024-01", locale=Locale.IT)
    assert summary.period_label == "gennaio 2024"
    assert summary.to_dict(Locale.IT)["availableMonths"][1]["label"] == "dicembre 2023"
