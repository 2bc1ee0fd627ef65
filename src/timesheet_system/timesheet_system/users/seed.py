from __future__ import annotations

import logging

from werkzeug.security import generate_password_hash

from ..core.enums import Role
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

ADMIN_USER_ID = "admin001"


def default_users(*, admin_email: str, admin_password: str) -> list[User]:
    """Seed accounts: the administrator plus two demo employees."""
    return [
        User(
            user_id=ADMIN_USER_ID,
            email=admin_email,
            name="Admin User",
            role=Role.ADMIN,
            password_hash=generate_password_hash(admin_password),
        ),
        User(
            user_id="emp001",
            email="employee1@example.com",
            name="John Doe",
            role=Role.EMPLOYEE,
            password_hash=generate_password_hash("password1"),
            age=30,
            phone_number="123-456-7890",
            address="123 Main St, Anytown",
            join_date="2023-01-15",
        ),
        User(
            user_id="emp002",
            email="employee2@example.com",
            name="Jane Smith",
            role=Role.EMPLOYEE,
            password_hash=generate_password_hash("password2"),
            age=28,
            phone_number="987-654-3210",
            address="456 Oak Ave, Otherville",
            join_date="2022-11-01",
        ),
    ]


def ensure_seed_users(users: UserRepository, seed: list[User]) -> int:
    """Insert seed users whose id and email are both unused. Returns how many were added."""
    added = 0
    for user in seed:
        if users.get_by_id(user.user_id) or users.get_by_email(user.email):
            continue
        users.add(user)
        added += 1
    if added:
        logger.info("Seeded %d user account(s)", added)
    return added
