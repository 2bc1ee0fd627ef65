from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import CredentialChangeFailure
from ..users.model import User


@dataclass(frozen=True)
class PendingAdminUpdate:
    """A staged admin credential change waiting for its token.

    The new password is kept hashed; the clear text never outlives initiate().
    """

    admin_user_id: str
    token: str
    expires_at: datetime
    new_username: Optional[str] = None
    new_password_hash: Optional[str] = None

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


@dataclass(frozen=True)
class CredentialChangeResult:
    success: bool
    message: str
    failure: Optional[CredentialChangeFailure] = None
    token: Optional[str] = None
    expires_at: Optional[datetime] = None
    user: Optional[User] = None

    @classmethod
    def failed(cls, failure: CredentialChangeFailure, message: str) -> "CredentialChangeResult":
        return cls(success=False, message=message, failure=failure)

    def to_dict(self) -> dict:
        data: dict = {"success": self.success, "message": self.message}
        if self.failure:
            data["failure"] = self.failure.value
        if self.token:
            data["token"] = self.token
        if self.expires_at:
            data["expiresAt"] = self.expires_at.isoformat(timespec="seconds")
        if self.user:
            data["user"] = self.user.to_public_dict()
        return data
