"""Display formatting. Locale-sensitive output only; stored values never change."""

from __future__ import annotations

from decimal import Decimal

from babel.dates import format_date
from babel.numbers import format_currency

from ..core.constants import MINUTES_PER_HOUR
from ..core.enums import Locale
from .datetime_utils import parse_iso_date, parse_month

CURRENCY = "EUR"


def format_duration(total_minutes: int) -> str:
    """510 -> '8h 30m'."""
    total_minutes = int(total_minutes or 0)
    return f"{total_minutes // MINUTES_PER_HOUR}h {total_minutes % MINUTES_PER_HOUR}m"


def format_wage(amount: Decimal | int | float, locale: Locale = Locale.EN) -> str:
    return format_currency(amount, CURRENCY, locale=locale.babel_locale)


def format_month_label(month: str, locale: Locale = Locale.EN) -> str:
    """'2024-01' -> 'January 2024' (en) / 'gennaio 2024' (it)."""
    return format_date(parse_month(month), "MMMM yyyy", locale=locale.babel_locale)


def format_day_label(work_date: str, locale: Locale = Locale.EN) -> str:
    """'2024-01-03' -> 'Wednesday 3 January 2024'."""
    return format_date(parse_iso_date(work_date), "EEEE d MMMM yyyy", locale=locale.babel_locale)
