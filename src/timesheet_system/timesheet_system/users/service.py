from __future__ import annotations

import logging
import secrets
import string
import uuid
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import (
    optional_iso_date,
    optional_non_negative_int,
    require_login_name,
    require_min_length,
    require_non_empty,
)
from ..core.constants import DEFAULT_PASSWORD_PREFIX, DEFAULT_PASSWORD_SUFFIX_LEN
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from .model import EmployeeSummary, NewEmployee, User
from .repository import UserRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

EMPLOYEE_FIELDS = frozenset({"name", "email", "age", "phone_number", "address", "join_date", "new_password"})


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: str
    name: str
    email: str
    role: Role


def new_employee_id() -> str:
    return f"emp_{uuid.uuid4().hex[:12]}"


def generate_default_password() -> str:
    alphabet = string.ascii_lowercase + string.digits
    suffix = "".join(secrets.choice(alphabet) for _ in range(DEFAULT_PASSWORD_SUFFIX_LEN))
    return f"{DEFAULT_PASSWORD_PREFIX}{suffix}"


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip())
        if not user or not password:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except (ValueError, TypeError):
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            logger.info("Failed login for %s", user.user_id)
            raise AuthenticationError("Invalid email or password")

        return SessionUser(user_id=user.user_id, name=user.name, email=user.email, role=user.role)


class EmployeeService:
    """Use case: employee directory (admin CRUD over role=employee records).

    Admin accounts are invisible here: they are reported as not found.
    """

    def __init__(self, users: UserRepository):
        self._users = users

    def list_employees(self) -> list[User]:
        return sorted(self._users.list_by_role(Role.EMPLOYEE), key=lambda u: (u.name.casefold(), u.user_id))

    def list_for_filter(self) -> list[EmployeeSummary]:
        return [EmployeeSummary(user_id=u.user_id, name=u.name) for u in self.list_employees()]

    def name_lookup(self) -> dict[str, str]:
        return {u.user_id: u.name for u in self._users.list_by_role(Role.EMPLOYEE)}

    def get_employee(self, user_id: str) -> Optional[User]:
        user = self._users.get_by_id(user_id)
        if not user or user.role != Role.EMPLOYEE:
            return None
        return user

    def add_employee(self, data: Mapping[str, Any]) -> NewEmployee:
        fields = self._clean(data, partial=False)

        email = fields["email"]
        if self._users.get_by_email(email):
            raise ValidationError("Email is already in use")

        password = fields.pop("new_password", None)
        generated = None
        if not password:
            password = generated = generate_default_password()

        user = User(
            user_id=new_employee_id(),
            role=Role.EMPLOYEE,
            password_hash=generate_password_hash(password),
            **fields,
        )
        self._users.add(user)
        logger.info("Employee %s added", user.user_id)
        return NewEmployee(user=user, initial_password=generated)

    def update_employee(self, user_id: str, changes: Mapping[str, Any]) -> Optional[User]:
        """Merge the given fields into the employee. None if no such employee."""
        current = self.get_employee(user_id)
        if not current:
            return None

        fields = self._clean(changes, partial=True)

        email = fields.get("email")
        if email and email != current.email:
            other = self._users.get_by_email(email)
            if other and other.user_id != user_id:
                raise ValidationError("Email is already in use")

        password = fields.pop("new_password", None)
        if password:
            fields["password_hash"] = generate_password_hash(password)

        updated = replace(current, **fields)
        if not self._users.update(updated):
            return None
        logger.info("Employee %s updated (%s)", user_id, ", ".join(sorted(changes)) or "no fields")
        return updated

    def delete_employee(self, user_id: str) -> bool:
        if not self.get_employee(user_id):
            return False
        deleted = self._users.delete_by_id(user_id)
        if deleted:
            logger.info("Employee %s deleted", user_id)
        return deleted

    @staticmethod
    def _clean(data: Mapping[str, Any], *, partial: bool) -> dict[str, Any]:
        unknown = set(data) - EMPLOYEE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown field(s): {', '.join(sorted(unknown))}")

        out: dict[str, Any] = {}
        if not partial or "name" in data:
            out["name"] = require_non_empty(data.get("name"), "Name")
        if not partial or "email" in data:
            out["email"] = require_login_name(data.get("email"), "Email")
        if not partial or "age" in data:
            out["age"] = optional_non_negative_int(data.get("age"), "Age")
        for key in ("phone_number", "address"):
            if not partial or key in data:
                out[key] = (str(data.get(key) or "")).strip() or None
        if not partial or "join_date" in data:
            out["join_date"] = optional_iso_date(data.get("join_date"), "Join date")

        password = data.get("new_password")
        if password:
            out["new_password"] = require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        return out
