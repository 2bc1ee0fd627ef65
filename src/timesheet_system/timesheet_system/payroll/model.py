from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..common.formatting import format_duration, format_month_label, format_wage
from ..core.enums import Locale
from ..work_entries.history import DayGroup
from .rates import HourlyRate


@dataclass(frozen=True)
class PeriodFigures:
    total_minutes: int
    wage: Decimal

    @property
    def display_total(self) -> str:
        return format_duration(self.total_minutes)

    def to_dict(self, locale: Locale = Locale.EN) -> dict:
        return {
            "totalMinutes": self.total_minutes,
            "displayTotal": self.display_total,
            "wage": float(self.wage),
            "formattedWage": format_wage(self.wage, locale),
        }


@dataclass(frozen=True)
class MonthlyFigures(PeriodFigures):
    """Figures restricted to one month; zero totals when the month has no entries."""

    month: str

    def to_dict(self, locale: Locale = Locale.EN) -> dict:
        data = super().to_dict(locale)
        data["month"] = self.month
        data["monthLabel"] = format_month_label(self.month, locale)
        return data


@dataclass(frozen=True)
class EmployeeWageRow:
    user_id: str
    employee_name: str
    rate: HourlyRate
    days: list[DayGroup]
    overall: PeriodFigures
    monthly: Optional[MonthlyFigures] = None

    def to_dict(self, locale: Locale = Locale.EN) -> dict:
        return {
            "userId": self.user_id,
            "employeeName": self.employee_name,
            "rate": self.rate.to_dict(),
            "overall": self.overall.to_dict(locale),
            "monthly": self.monthly.to_dict(locale) if self.monthly else None,
            "days": [d.to_dict(locale) for d in self.days],
        }


@dataclass(frozen=True)
class WageReport:
    """Read-model for the admin activity / wage view."""

    employee: str
    month: Optional[str]
    rows: list[EmployeeWageRow]
    available_months: list[str]

    def row_for(self, user_id: str) -> Optional[EmployeeWageRow]:
        return next((r for r in self.rows if r.user_id == user_id), None)

    def to_dict(self, locale: Locale = Locale.EN) -> dict:
        return {
            "employee": self.employee,
            "month": self.month,
            "monthLabel": format_month_label(self.month, locale) if self.month else None,
            "availableMonths": [
                {"value": m, "label": format_month_label(m, locale)} for m in self.available_months
            ],
            "rows": [r.to_dict(locale) for r in self.rows],
        }
