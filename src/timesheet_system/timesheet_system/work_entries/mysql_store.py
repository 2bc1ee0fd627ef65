from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

import mysql.connector

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import WorkEntry
from .repository import WorkEntryStore

logger = logging.getLogger(__name__)

_COLUMNS = (
    "entry_id, user_id, work_date, start_time, end_time, duration_minutes, "
    "activity, start_photo_url, end_photo_url"
)


class MySQLWorkEntryStore(WorkEntryStore):
    """Work entries in the `work_entries` table.

    Keeps the whole-collection contract: save() replaces the table content
    inside a single transaction.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load(self) -> list[WorkEntry]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"SELECT {_COLUMNS} FROM work_entries ORDER BY work_date, start_time")
                rows = fetchall(cur)
        except mysql.connector.Error as e:
            logger.warning("Could not read work entries from MySQL: %s", e)
            return []

        entries: list[WorkEntry] = []
        for r in rows:
            work_date = r["work_date"]
            entries.append(
                WorkEntry(
                    entry_id=r["entry_id"],
                    user_id=r["user_id"],
                    work_date=work_date.isoformat() if isinstance(work_date, date) else str(work_date),
                    start_time=r["start_time"],
                    activity=r.get("activity") or "",
                    end_time=r.get("end_time"),
                    duration_minutes=r.get("duration_minutes"),
                    start_photo_url=r.get("start_photo_url"),
                    end_photo_url=r.get("end_photo_url"),
                )
            )
        return entries

    def save(self, entries: Sequence[WorkEntry]) -> bool:
        params = [
            (
                e.entry_id,
                e.user_id,
                e.work_date,
                e.start_time,
                e.end_time,
                e.duration_minutes,
                e.activity,
                e.start_photo_url,
                e.end_photo_url,
            )
            for e in entries
        ]
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM work_entries")
                if params:
                    cur.executemany(
                        f"INSERT INTO work_entries({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)",
                        params,
                    )
        except mysql.connector.Error as e:
            logger.warning("Could not save %d work entries to MySQL: %s", len(params), e)
            return False
        return True
