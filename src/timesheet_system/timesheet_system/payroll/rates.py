from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from ..core.constants import DEFAULT_RATE_CENTS, DEFAULT_RATE_EUROS, MAX_CENTS
from ..core.exceptions import ValidationError


def _to_decimal(value: Any) -> Decimal:
    """Lenient numeric parse: blank, non-numeric or non-finite input counts as 0."""
    if value is None or isinstance(value, bool):
        return Decimal(0)
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return Decimal(0)
    return number if number.is_finite() else Decimal(0)


@dataclass(frozen=True)
class HourlyRate:
    """Hourly wage as euros + cents, each validated on its own."""

    euros: Decimal
    cents: int

    @classmethod
    def from_input(cls, euros: Any, cents: Any) -> "HourlyRate":
        """Clamp raw form input: euros >= 0, cents in [0, 99], garbage -> 0."""
        euros_d = max(_to_decimal(euros), Decimal(0))
        cents_i = int(_to_decimal(cents))
        cents_i = min(max(cents_i, 0), MAX_CENTS)
        return cls(euros=euros_d, cents=cents_i)

    @property
    def effective(self) -> Decimal:
        return self.euros + Decimal(self.cents) / Decimal(100)

    def to_dict(self) -> dict[str, str]:
        return {"euros": str(self.euros), "cents": f"{self.cents:02d}", "effective": str(self.effective)}


DEFAULT_HOURLY_RATE = HourlyRate(euros=Decimal(DEFAULT_RATE_EUROS), cents=DEFAULT_RATE_CENTS)


class RateBook:
    """Per-employee hourly rates with a fallback for employees not listed."""

    def __init__(self, rates: Optional[Mapping[str, HourlyRate]] = None, *, default: HourlyRate = DEFAULT_HOURLY_RATE):
        self._rates = dict(rates or {})
        self._default = default

    @property
    def default(self) -> HourlyRate:
        return self._default

    def rate_for(self, user_id: str) -> HourlyRate:
        return self._rates.get(user_id, self._default)

    @classmethod
    def from_input(cls, raw: Optional[Mapping[str, Any]], *, default: HourlyRate = DEFAULT_HOURLY_RATE) -> "RateBook":
        """Build from `{user_id: {"euros": ..., "cents": ...}}` as posted by the admin view."""
        rates: dict[str, HourlyRate] = {}
        for user_id, value in (raw or {}).items():
            if not isinstance(value, Mapping):
                raise ValidationError(f"Rate for {user_id} must be an object with euros and cents")
            rates[str(user_id)] = HourlyRate.from_input(value.get("euros"), value.get("cents"))
        return cls(rates, default=default)
