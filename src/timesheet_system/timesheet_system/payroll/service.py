from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional

from ..common.datetime_utils import month_of
from ..core.constants import ALL_EMPLOYEES, UNKNOWN_USER_NAME
from ..users.service import EmployeeService
from ..work_entries.history import available_months, group_by_date
from ..work_entries.model import WorkEntry
from ..work_entries.service import WorkSessionService
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import EmployeeWageRow, MonthlyFigures, PeriodFigures, WageReport
from .rates import DEFAULT_HOURLY_RATE, HourlyRate, RateBook

logger = logging.getLogger(__name__)


class WageReportService:
    """Use case: per-employee activity and wage figures for the admin view."""

    def __init__(
        self,
        work_sessions: WorkSessionService,
        employees: EmployeeService,
        *,
        calculator: Optional[PayrollCalculator] = None,
        default_rate: HourlyRate = DEFAULT_HOURLY_RATE,
    ):
        self._work_sessions = work_sessions
        self._employees = employees
        self._calculator = calculator or StandardPayrollCalculator()
        self._default_rate = default_rate

    @property
    def default_rate(self) -> HourlyRate:
        return self._default_rate

    def rate_book(self, raw_rates: Optional[Mapping[str, object]] = None) -> RateBook:
        return RateBook.from_input(raw_rates, default=self._default_rate)

    def build_wage_report(
        self,
        *,
        employee: str = ALL_EMPLOYEES,
        month: Optional[str] = None,
        rates: Optional[RateBook] = None,
    ) -> WageReport:
        entries = self._work_sessions.all_entries()
        names = self._employees.name_lookup()
        return self.aggregate(entries, names, rates or self.rate_book(), employee=employee, month=month)

    def aggregate(
        self,
        entries: Iterable[WorkEntry],
        employee_names: Mapping[str, str],
        rates: RateBook,
        *,
        employee: str = ALL_EMPLOYEES,
        month: Optional[str] = None,
    ) -> WageReport:
        """Filter by employee, then total minutes and wages per employee.

        `overall` and `days` always cover all of the employee's entries. With a
        month selected, `monthly` repeats the totals for that month only and is
        zero when the employee has no entries in it. Employees without any
        entries get no row. Entries whose user is not a known employee are
        reported under a placeholder name.
        """
        entries = list(entries)
        employee = employee or ALL_EMPLOYEES

        selected = [e for e in entries if employee == ALL_EMPLOYEES or e.user_id == employee]

        by_user: dict[str, list[WorkEntry]] = {}
        for e in selected:
            by_user.setdefault(e.user_id, []).append(e)

        rows = []
        for user_id, user_entries in by_user.items():
            rate = rates.rate_for(user_id)
            days = group_by_date(user_entries, minutes=self._calculator.worked_minutes)
            total = sum(d.total_minutes for d in days)
            overall = PeriodFigures(total_minutes=total, wage=self._calculator.wage(total, rate))

            monthly = None
            if month is not None:
                month_total = sum(
                    self._calculator.worked_minutes(e) for e in user_entries if month_of(e.work_date) == month
                )
                monthly = MonthlyFigures(
                    total_minutes=month_total,
                    wage=self._calculator.wage(month_total, rate),
                    month=month,
                )

            rows.append(
                EmployeeWageRow(
                    user_id=user_id,
                    employee_name=employee_names.get(user_id, UNKNOWN_USER_NAME),
                    rate=rate,
                    days=days,
                    overall=overall,
                    monthly=monthly,
                )
            )

        rows.sort(key=lambda r: (r.employee_name.casefold(), r.user_id))
        logger.debug("Wage report: employee=%s month=%s rows=%d", employee, month, len(rows))

        return WageReport(
            employee=employee,
            month=month,
            rows=rows,
            available_months=available_months(entries),
        )
