from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..common.datetime_utils import parse_iso_date


@dataclass(frozen=True)
class WorkEntry:
    """Domain entity: one clock-in / clock-out record of an employee.

    `work_date` is fixed when work starts and never changes, even when the
    session ends after midnight. The entry is open while `end_time` is None.
    """

    entry_id: str
    user_id: str
    work_date: str
    start_time: str
    activity: str
    end_time: Optional[str] = None
    duration_minutes: Optional[int] = None
    start_photo_url: Optional[str] = None
    end_photo_url: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    def to_dict(self) -> dict[str, Any]:
        """Serialized shape used by the JSON store and the HTTP API."""
        data: dict[str, Any] = {
            "id": self.entry_id,
            "userId": self.user_id,
            "date": self.work_date,
            "startTime": self.start_time,
            "activity": self.activity,
        }
        optional = {
            "endTime": self.end_time,
            "durationMinutes": self.duration_minutes,
            "startPhotoUrl": self.start_photo_url,
            "endPhotoUrl": self.end_photo_url,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WorkEntry":
        """Build from a stored record. Raises ValueError/KeyError/TypeError on bad data."""
        if not isinstance(data, dict):
            raise TypeError(f"Work entry record must be an object, got {type(data).__name__}")

        # Normalized to zero-padded YYYY-MM-DD.
        work_date = parse_iso_date(str(data["date"])).isoformat()

        duration = data.get("durationMinutes")
        if duration is not None and (isinstance(duration, bool) or not isinstance(duration, (int, float))):
            raise TypeError(f"durationMinutes must be a number, got {duration!r}")

        return cls(
            entry_id=str(data["id"]),
            user_id=str(data["userId"]),
            work_date=work_date,
            start_time=str(data["startTime"]),
            activity=str(data.get("activity") or ""),
            end_time=data.get("endTime") or None,
            duration_minutes=int(duration) if duration is not None else None,
            start_photo_url=data.get("startPhotoUrl") or None,
            end_photo_url=data.get("endPhotoUrl") or None,
        )
