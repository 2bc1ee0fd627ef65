from __future__ import annotations

import threading
from typing import Optional, Protocol

from .model import PendingAdminUpdate


class PendingUpdateStore(Protocol):
    """Holds at most one pending admin update for the whole process."""

    def get(self) -> Optional[PendingAdminUpdate]:
        raise NotImplementedError

    def put(self, update: PendingAdminUpdate) -> None:
        """Store the update, replacing any previous one."""
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError


class InMemoryPendingUpdateStore(PendingUpdateStore):
    def __init__(self):
        self._lock = threading.Lock()
        self._pending: Optional[PendingAdminUpdate] = None

    def get(self) -> Optional[PendingAdminUpdate]:
        with self._lock:
            return self._pending

    def put(self, update: PendingAdminUpdate) -> None:
        with self._lock:
            self._pending = update

    def clear(self) -> None:
        with self._lock:
            self._pending = None
