from __future__ import annotations

from decimal import Decimal

from ...core.constants import MINUTES_PER_HOUR
from ...work_entries.model import WorkEntry
from ..rates import HourlyRate
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: stored duration (open entries count 0) x effective hourly rate."""

    def worked_minutes(self, entry: WorkEntry) -> int:
        return max(int(entry.duration_minutes or 0), 0)

    def wage(self, total_minutes: int, rate: HourlyRate) -> Decimal:
        hourly = rate.effective
        if hourly <= 0 or total_minutes <= 0:
            return Decimal(0)
        return Decimal(total_minutes) / Decimal(MINUTES_PER_HOUR) * hourly
