from __future__ import annotations

import re
from typing import Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date, parse_month

_NO_SPACES = re.compile(r"^\S+$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_login_name(value: str, field_name: str = "Email") -> str:
    # Admin logins are plain usernames, so only whitespace is rejected.
    value = require_non_empty(value, field_name)
    if not _NO_SPACES.match(value):
        raise ValidationError(f"{field_name} must not contain spaces")
    return value


def optional_iso_date(value: Optional[str], field_name: str) -> Optional[str]:
    v = (value or "").strip()
    if not v:
        return None
    try:
        return parse_iso_date(v).isoformat()
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def optional_month(value: Optional[str], field_name: str = "Month") -> Optional[str]:
    """Accept 'YYYY-MM'; blank or 'all' mean no month selected."""
    v = (value or "").strip()
    if not v or v.lower() == "all":
        return None
    try:
        return parse_month(v).strftime("%Y-%m")
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYY-MM")


def optional_non_negative_int(value, field_name: str) -> Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number")
    if number < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return number
