from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import clock_minutes_between, format_clock, format_work_date, now_local
from ..core.exceptions import ValidationError
from .model import WorkEntry
from .ordering import sort_recent_first
from .repository import WorkEntryStore

logger = logging.getLogger(__name__)


def new_entry_id() -> str:
    return f"entry_{uuid.uuid4().hex}"


class WorkSessionService:
    """Use case: clock in / clock out and read back work history.

    A user's session is `closed` (no open entry) or `open` (an entry without
    an end time). start_work opens, end_work closes exactly once. Every call
    reloads the store first, so independent requests see each other's writes.
    """

    def __init__(
        self,
        store: WorkEntryStore,
        *,
        clock: Callable[[], datetime] = now_local,
        id_factory: Callable[[], str] = new_entry_id,
        single_open_entry: bool = False,
    ):
        self._store = store
        self._clock = clock
        self._id_factory = id_factory
        self._single_open_entry = bool(single_open_entry)

    def start_work(self, user_id: str, activity: str, photo: Optional[str] = None) -> WorkEntry:
        """Open a new entry dated today.

        The activity text is validated by the caller. A failed save is logged
        and the entry is still returned.
        """
        entries = self._store.load()

        if self._single_open_entry:
            existing = self._first_open(entries, user_id)
            if existing:
                raise ValidationError(f"Work already started at {existing.start_time} ({existing.work_date})")

        now = self._clock()
        entry = WorkEntry(
            entry_id=self._id_factory(),
            user_id=user_id,
            work_date=format_work_date(now),
            start_time=format_clock(now),
            activity=activity,
            start_photo_url=photo or None,
        )
        entries.append(entry)

        if not self._store.save(entries):
            logger.warning("startWork: entry %s for user %s was not persisted", entry.entry_id, user_id)

        logger.info(
            "startWork: entry %s opened for user %s at %s (photo=%s)",
            entry.entry_id,
            user_id,
            entry.start_time,
            bool(photo),
        )
        return entry

    def end_work(
        self,
        entry_id: str,
        user_id: str,
        activity: str,
        photo: Optional[str] = None,
    ) -> Optional[WorkEntry]:
        """Close the user's open entry. None when no such open entry exists."""
        entries = self._store.load()

        index = next(
            (i for i, e in enumerate(entries) if e.entry_id == entry_id and e.user_id == user_id and e.is_open),
            None,
        )
        if index is None:
            logger.warning("endWork: no open entry %s for user %s", entry_id, user_id)
            return None

        current = entries[index]
        end_time = format_clock(self._clock())
        try:
            duration: Optional[int] = clock_minutes_between(current.start_time, end_time)
        except ValueError:
            logger.warning("endWork: entry %s has an unreadable start time %r", entry_id, current.start_time)
            duration = None

        ended = replace(
            current,
            end_time=end_time,
            duration_minutes=duration,
            activity=activity,
            end_photo_url=photo or current.end_photo_url,
        )
        entries[index] = ended

        if not self._store.save(entries):
            logger.warning("endWork: update of entry %s was not persisted", entry_id)

        logger.info(
            "endWork: entry %s closed for user %s at %s, %s min (photo=%s)",
            entry_id,
            user_id,
            end_time,
            duration,
            bool(photo),
        )
        return ended

    def history_for_user(self, user_id: str) -> list[WorkEntry]:
        """All entries of a user, most recent first."""
        return sort_recent_first(e for e in self._store.load() if e.user_id == user_id)

    def all_entries(self) -> list[WorkEntry]:
        return sort_recent_first(self._store.load())

    def get_entry(self, entry_id: str) -> Optional[WorkEntry]:
        return next((e for e in self._store.load() if e.entry_id == entry_id), None)

    def find_open_entry(self, user_id: str, *, on_date: Optional[str] = None) -> Optional[WorkEntry]:
        """The user's active session, optionally only if it started on `on_date`."""
        entries = self._store.load()
        if on_date:
            entries = [e for e in entries if e.work_date == on_date]
        return self._first_open(entries, user_id)

    @staticmethod
    def _first_open(entries: list[WorkEntry], user_id: str) -> Optional[WorkEntry]:
        return next((e for e in entries if e.user_id == user_id and e.is_open), None)
