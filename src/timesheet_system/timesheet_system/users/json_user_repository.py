from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional, Sequence

from ..common.json_files import (
    RECORD_ERRORS,
    MalformedDocument,
    read_json_document,
    read_undecodable_records,
    write_json_atomic,
)
from ..core.enums import Role
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class JsonUserRepository(UserRepository):
    """Users (employees and admins) in one JSON array, re-read on every call."""

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._lock = threading.RLock()

    def _load(self) -> list[User]:
        try:
            document = read_json_document(self._path)
        except (MalformedDocument, OSError) as e:
            logger.warning("Could not read users from %s: %s", self._path, e)
            return []
        if document is None:
            return []
        if not isinstance(document, list):
            logger.warning("Invalid data format in %s (expected a list). Ignoring it.", self._path)
            return []

        users: list[User] = []
        for position, record in enumerate(document):
            try:
                users.append(User.from_record(record))
            except RECORD_ERRORS as e:
                logger.warning("Skipping invalid user #%d in %s (kept on disk): %s", position, self._path, e)
        return users

    def _save(self, users: list[User]) -> None:
        # Write errors propagate to the caller.
        kept = read_undecodable_records(self._path, User.from_record)
        write_json_atomic(self._path, [u.to_record() for u in users] + kept)

    def get_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            return next((u for u in self._load() if u.user_id == user_id), None)

    def get_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            return next((u for u in self._load() if u.email == email), None)

    def list_by_role(self, role: Role) -> Sequence[User]:
        with self._lock:
            return [u for u in self._load() if u.role == role]

    def add(self, user: User) -> User:
        with self._lock:
            users = self._load()
            users.append(user)
            self._save(users)
            return user

    def update(self, user: User) -> bool:
        with self._lock:
            users = self._load()
            for i, existing in enumerate(users):
                if existing.user_id == user.user_id:
                    users[i] = user
                    self._save(users)
                    return True
            return False

    def delete_by_id(self, user_id: str) -> bool:
        with self._lock:
            users = self._load()
            remaining = [u for u in users if u.user_id != user_id]
            if len(remaining) == len(users):
                return False
            self._save(remaining)
            return True
