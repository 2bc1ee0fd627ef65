from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ...work_entries.model import WorkEntry
from ..rates import HourlyRate


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def worked_minutes(self, entry: WorkEntry) -> int:
        raise NotImplementedError

    @abstractmethod
    def wage(self, total_minutes: int, rate: HourlyRate) -> Decimal:
        raise NotImplementedError
