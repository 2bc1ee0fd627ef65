from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class Locale(str, Enum):
    """Display locales. Affects formatting only, never stored data."""

    EN = "en"
    IT = "it"

    @property
    def babel_locale(self) -> str:
        return {Locale.EN: "en_US", Locale.IT: "it_IT"}[self]

    @classmethod
    def parse(cls, value: str | None, default: "Locale | None" = None) -> "Locale":
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return default or cls.EN


class HistoryPeriod(str, Enum):
    """Period filter for an employee's own work log."""

    ALL = "all"
    MONTH = "month"
    YEAR = "year"


class CredentialChangeFailure(str, Enum):
    """Why an admin credential change was refused."""

    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    TOKEN_MISMATCH = "TOKEN_MISMATCH"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    ADMIN_NOT_FOUND = "ADMIN_NOT_FOUND"
