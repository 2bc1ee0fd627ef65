from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Sequence

from ..common.json_files import (
    RECORD_ERRORS,
    MalformedDocument,
    read_json_document,
    read_undecodable_records,
    write_json_atomic,
)
from .model import WorkEntry
from .repository import WorkEntryStore

logger = logging.getLogger(__name__)


class JsonWorkEntryStore(WorkEntryStore):
    """Work entries kept as one JSON array in a flat file.

    Every load re-reads the file and every save rewrites it in full, so the
    file is the cache-of-record across requests. Records that fail to decode
    are skipped on load and written back unchanged on save. The lock only
    serializes access within this process; separate processes still race
    (last write wins).
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[WorkEntry]:
        with self._lock:
            try:
                document = read_json_document(self._path)
            except MalformedDocument as e:
                logger.warning("Malformed work entries file, starting with no entries: %s", e)
                return []
            except OSError as e:
                logger.warning("Could not read work entries from %s: %s", self._path, e)
                return []

        if document is None:
            logger.info("%s not found or empty. Starting with no work entries.", self._path)
            return []

        if not isinstance(document, list):
            logger.warning(
                "Invalid data format in %s (expected a list, got %s). Starting with no work entries.",
                self._path,
                type(document).__name__,
            )
            return []

        entries: list[WorkEntry] = []
        for position, record in enumerate(document):
            try:
                entries.append(WorkEntry.from_dict(record))
            except RECORD_ERRORS as e:
                logger.warning("Skipping invalid work entry #%d in %s (kept on disk): %s", position, self._path, e)

        logger.debug("Loaded %d work entries from %s", len(entries), self._path)
        return entries

    def save(self, entries: Sequence[WorkEntry]) -> bool:
        with self._lock:
            kept = read_undecodable_records(self._path, WorkEntry.from_dict)
            try:
                write_json_atomic(self._path, [e.to_dict() for e in entries] + kept)
            except (OSError, TypeError, ValueError) as e:
                logger.warning("Could not save %d work entries to %s: %s", len(entries), self._path, e)
                return False

        logger.debug("Saved %d work entries to %s (%d invalid kept)", len(entries), self._path, len(kept))
        return True
