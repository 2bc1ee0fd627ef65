from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an employee or an administrator.

    Note: pure data object (no DB access). `email` doubles as the login name;
    admins may use a plain username there. `role` never changes.
    """

    user_id: str
    email: str
    name: str
    role: Role
    password_hash: str
    age: Optional[int] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    join_date: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_public_dict(self) -> dict[str, Any]:
        """API shape: never includes the password hash."""
        return {
            "id": self.user_id,
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
            "age": self.age,
            "phoneNumber": self.phone_number,
            "address": self.address,
            "joinDate": self.join_date,
        }

    def to_record(self) -> dict[str, Any]:
        data = self.to_public_dict()
        data["passwordHash"] = self.password_hash
        return data

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "User":
        if not isinstance(data, dict):
            raise TypeError(f"User record must be an object, got {type(data).__name__}")
        age = data.get("age")
        return cls(
            user_id=str(data["id"]),
            email=str(data["email"]),
            name=str(data["name"]),
            role=Role(data["role"]),
            password_hash=str(data["passwordHash"]),
            age=int(age) if age is not None else None,
            phone_number=data.get("phoneNumber") or None,
            address=data.get("address") or None,
            join_date=data.get("joinDate") or None,
        )


@dataclass(frozen=True)
class EmployeeSummary:
    """id + name pair for employee selectors."""

    user_id: str
    name: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.user_id, "name": self.name}


@dataclass(frozen=True)
class NewEmployee:
    """Result of adding an employee.

    `initial_password` is set only when a default password was generated, so
    the admin can hand it over once. It is never stored in clear.
    """

    user: User
    initial_password: Optional[str] = None
