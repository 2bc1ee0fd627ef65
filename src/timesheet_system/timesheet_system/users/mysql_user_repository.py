from __future__ import annotations

from datetime import date
from typing import Any, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, email, name, role, password_hash, age, phone_number, address, join_date"


def _to_user(row: dict[str, Any]) -> User:
    join_date = row.get("join_date")
    return User(
        user_id=row["user_id"],
        email=row["email"],
        name=row["name"],
        role=Role(row["role"]),
        password_hash=row["password_hash"],
        age=row.get("age"),
        phone_number=row.get("phone_number"),
        address=row.get("address"),
        join_date=join_date.isoformat() if isinstance(join_date, date) else join_date,
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_by_role(self, role: Role) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE role=%s ORDER BY name", (role.value,))
            return [_to_user(r) for r in fetchall(cur)]

    def add(self, user: User) -> User:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO users({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    user.user_id,
                    user.email,
                    user.name,
                    user.role.value,
                    user.password_hash,
                    user.age,
                    user.phone_number,
                    user.address,
                    user.join_date,
                ),
            )
        return user

    def update(self, user: User) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET email=%s, name=%s, password_hash=%s, age=%s, phone_number=%s, address=%s, join_date=%s
                WHERE user_id=%s
                """,
                (
                    user.email,
                    user.name,
                    user.password_hash,
                    user.age,
                    user.phone_number,
                    user.address,
                    user.join_date,
                    user.user_id,
                ),
            )
            # rowcount is 0 when nothing changed, so check existence instead.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM users WHERE user_id=%s", (user.user_id,))
            return fetchone(cur) is not None

    def delete_by_id(self, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (user_id,))
            return cur.rowcount > 0
