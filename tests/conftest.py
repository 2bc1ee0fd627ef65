from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional, Sequence

import pytest
from werkzeug.security import generate_password_hash

from src.timesheet_system.timesheet_system.core.enums import Role
from src.timesheet_system.timesheet_system.users.model import User
from src.timesheet_system.timesheet_system.work_entries.model import WorkEntry


class MutableClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, now: datetime) -> None:
        self.now = now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class InMemoryWorkEntryStore:
    def __init__(self, entries: Sequence[WorkEntry] = (), *, fail_saves: bool = False):
        self.entries = list(entries)
        self.fail_saves = fail_saves
        self.save_calls = 0

    def load(self) -> list[WorkEntry]:
        return list(self.entries)

    def save(self, entries: Sequence[WorkEntry]) -> bool:
        self.save_calls += 1
        if self.fail_saves:
            return False
        self.entries = list(entries)
        return True


class InMemoryUsers:
    def __init__(self, users: Sequence[User] = ()):
        self.by_id: dict[str, User] = {u.user_id: u for u in users}

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.by_id.values() if u.email == email), None)

    def list_by_role(self, role: Role):
        return [u for u in self.by_id.values() if u.role == role]

    def add(self, user: User) -> User:
        self.by_id[user.user_id] = user
        return user

    def update(self, user: User) -> bool:
        if user.user_id not in self.by_id:
            return False
        self.by_id[user.user_id] = user
        return True

    def delete_by_id(self, user_id: str) -> bool:
        return self.by_id.pop(user_id, None) is not None


def make_entry(
    entry_id: str,
    user_id: str = "emp001",
    work_date: str = "2024-01-15",
    start_time: str = "09:00",
    *,
    end_time: Optional[str] = None,
    duration_minutes: Optional[int] = None,
    activity: str = "Work",
) -> WorkEntry:
    return WorkEntry(
        entry_id=entry_id,
        user_id=user_id,
        work_date=work_date,
        start_time=start_time,
        activity=activity,
        end_time=end_time,
        duration_minutes=duration_minutes,
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 15, 9, 0, 0)


@pytest.fixture
def clock(fixed_now) -> MutableClock:
    return MutableClock(fixed_now)


@pytest.fixture
def entry_factory():
    return make_entry


@pytest.fixture
def memory_store() -> InMemoryWorkEntryStore:
    return InMemoryWorkEntryStore()


@pytest.fixture
def admin_user() -> User:
    return User(
        user_id="admin001",
        email="admin",
        name="Admin User",
        role=Role.ADMIN,
        password_hash=generate_password_hash("admin"),
    )


@pytest.fixture
def employee_user() -> User:
    return User(
        user_id="emp001",
        email="employee1@example.com",
        name="John Doe",
        role=Role.EMPLOYEE,
        password_hash=generate_password_hash("password1"),
    )


@pytest.fixture
def users_repo(admin_user, employee_user) -> InMemoryUsers:
    return InMemoryUsers([admin_user, employee_user])


@pytest.fixture
def store_factory():
    return InMemoryWorkEntryStore


@pytest.fixture
def users_factory():
    return InMemoryUsers
