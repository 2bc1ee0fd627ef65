from __future__ import annotations

from decimal import Decimal

import pytest

from src.timesheet_system.timesheet_system.core.enums import Locale
from src.timesheet_system.timesheet_system.payroll.rates import HourlyRate, RateBook
from src.timesheet_system.timesheet_system.payroll.service import WageReportService
from src.timesheet_system.timesheet_system.users.service import EmployeeService
from src.timesheet_system.timesheet_system.work_entries.service import WorkSessionService


@pytest.fixture
def entries(entry_factory):
    return [
        entry_factory("a", "emp001", "2024-01-03", "09:00", end_time="10:00", duration_minutes=60),
        entry_factory("b", "emp001", "2024-01-03", "14:00", end_time="14:30", duration_minutes=30),
        entry_factory("c", "emp001", "2024-02-01", "09:00", end_time="11:00", duration_minutes=120),
        entry_factory("d", "emp002", "2024-01-10", "09:00", end_time="10:00", duration_minutes=60),
        entry_factory("e", "ghost", "2024-01-11", "09:00", end_time="09:30", duration_minutes=30),
        entry_factory("f", "emp001", "2024-01-04", "09:00"),
    ]


@pytest.fixture
def service(store_factory, users_repo, entries):
    return WageReportService(WorkSessionService(store_factory(entries)), EmployeeService(users_repo))


NAMES = {"emp001": "John Doe", "emp002": "Anna Bianchi"}


def test_single_employee_single_month(service, entries):
    rates = RateBook({"emp001": HourlyRate.from_input("10", "50")})

    report = service.aggregate(entries, NAMES, rates, employee="emp001", month="2024-01")

    assert len(report.rows) == 1
    row = report.rows[0]
    assert row.employee_name == "John Doe"
    # all-time figures are not narrowed by the month selector
    assert row.overall.total_minutes == 210
    assert row.overall.wage == Decimal("36.75")
    assert [d.work_date for d in row.days] == ["2024-02-01", "2024-01-04", "2024-01-03"]
    assert [d.total_minutes for d in row.days] == [120, 0, 90]
    assert row.monthly.month == "2024-01"
    assert row.monthly.total_minutes == 90
    assert row.monthly.wage == Decimal("15.75")


def test_all_employees_all_months(service, entries):
    report = service.aggregate(entries, NAMES, RateBook())

    assert [r.employee_name for r in report.rows] == ["Anna Bianchi", "John Doe", "Unknown User"]
    john = report.row_for("emp001")
    assert john.overall.total_minutes == 210
    assert john.overall.wage == Decimal(35)
    assert john.monthly is None
    assert report.available_months == ["2024-02", "2024-01"]


def test_zero_rate_gives_zero_wage(service, entries):
    rates = RateBook({"emp002": HourlyRate.from_input("0", "0")})

    row = service.aggregate(entries, NAMES, rates, employee="emp002").rows[0]

    assert row.overall.total_minutes == 60
    assert row.overall.wage == Decimal(0)


def test_month_without_entries_reports_zero_monthly_figures(service, entries):
    report = service.aggregate(entries, NAMES, RateBook(), month="2023-06")

    assert [r.employee_name for r in report.rows] == ["Anna Bianchi", "John Doe", "Unknown User"]
    john = report.row_for("emp001")
    assert john.overall.total_minutes == 210
    assert john.monthly is not None
    assert john.monthly.total_minutes == 0
    assert john.monthly.wage == Decimal(0)
    assert all(r.monthly.total_minutes == 0 for r in report.rows)
    assert report.available_months == ["2024-02", "2024-01"]


def test_unknown_employee_filter_gives_no_rows(service, entries):
    assert service.aggregate(entries, NAMES, RateBook(), employee="emp999").rows == []


def test_build_wage_report_uses_directory_names(service):
    report = service.build_wage_report(month="2024-01")

    names = {r.user_id: r.employee_name for r in report.rows}
    # emp002 is not in the directory fixture, ghost never was
    assert names == {"emp001": "John Doe", "emp002": "Unknown User", "ghost": "Unknown User"}


def test_report_dict_formats_currency(service, entries):
    rates = RateBook({"emp001": HourlyRate.from_input("10", "50")})
    report = service.aggregate(entries, NAMES, rates, employee="emp001", month="2024-01")

    en = report.to_dict(Locale.EN)
    assert en["monthLabel"] == "January 2024"
    assert en["rows"][0]["monthly"]["formattedWage"] == "€15.75"
    assert en["rows"][0]["monthly"]["displayTotal"] == "1h 30m"
    assert en["rows"][0]["overall"]["formattedWage"] == "€36.75"
    assert en["rows"][0]["overall"]["displayTotal"] == "3h 30m"

    it = report.to_dict(Locale.IT)
    assert it["rows"][0]["monthly"]["formattedWage"].replace("\xa0", " ") == "15,75 €"


def test_month_selector_keeps_all_time_totals(store_factory, users_repo, entry_factory):
    entries = [
        entry_factory("jan", "emp001", "2024-01-10", "09:00", end_time="10:00", duration_minutes=60),
        entry_factory("feb", "emp001", "2024-02-10", "09:00", end_time="11:00", duration_minutes=120),
    ]
    service = WageReportService(WorkSessionService(store_factory(entries)), EmployeeService(users_repo))

    row = service.build_wage_report(month="2024-01").rows[0]

    assert row.overall.total_minutes == 180
    assert row.overall.wage == Decimal(30)
    assert row.monthly.total_minutes == 60
    assert row.monthly.wage == Decimal(10)
