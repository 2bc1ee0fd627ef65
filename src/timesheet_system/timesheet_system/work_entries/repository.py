from __future__ import annotations

from typing import Protocol, Sequence

from .model import WorkEntry


class WorkEntryStore(Protocol):
    """Durable backing store owning the canonical list of work entries.

    Note (DIP): services depend on this interface, not on a concrete file or
    database. Implementations never raise to the caller: a failed read yields
    an empty list and a failed write returns False, both logged as warnings.
    """

    def load(self) -> list[WorkEntry]:
        """Read the whole collection."""
        raise NotImplementedError

    def save(self, entries: Sequence[WorkEntry]) -> bool:
        """Persist the whole collection. Returns False if it could not be written."""
        raise NotImplementedError
