"""Whole-document JSON persistence helpers shared by the file-backed stores."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Optional


class MalformedDocument(ValueError):
    """The file exists but does not hold a JSON document."""


def read_json_document(path: Path) -> Optional[Any]:
    """Read a JSON document.

    Returns None when the file is missing or blank; raises MalformedDocument
    when it is not UTF-8 or cannot be parsed. OSError from the filesystem
    propagates.
    """
    if not path.exists():
        return None
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedDocument(f"{path}: not UTF-8 text ({e.reason})") from e
    if not text.strip():
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedDocument(f"{path}: {e}") from e


RECORD_ERRORS = (KeyError, TypeError, ValueError)


def read_undecodable_records(path: Path, decode: Callable[[Any], Any]) -> list[Any]:
    """Raw items of the JSON array at `path` that `decode` rejects.

    A full rewrite appends them back so a bad record is never erased. A missing,
    unreadable or non-list document has none.
    """
    try:
        document = read_json_document(path)
    except (MalformedDocument, OSError):
        return []
    if not isinstance(document, list):
        return []

    rejected = []
    for record in document:
        try:
            decode(record)
        except RECORD_ERRORS:
            rejected.append(record)
    return rejected


def write_json_atomic(path: Path, data: Any) -> None:
    """Write a JSON document through a temp file so readers never see half a file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
