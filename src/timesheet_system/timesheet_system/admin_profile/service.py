from __future__ import annotations

import hmac
import logging
import secrets
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Callable, Optional

from werkzeug.security import generate_password_hash

from ..common.datetime_utils import now_local
from ..core.constants import ADMIN_TOKEN_TTL_MINUTES
from ..core.enums import CredentialChangeFailure, Role
from ..users.model import User
from ..users.repository import UserRepository
from .model import CredentialChangeResult, PendingAdminUpdate
from .notifier import LoggingTokenNotifier, TokenNotifier
from .store import PendingUpdateStore

logger = logging.getLogger(__name__)


def new_verification_token() -> str:
    return secrets.token_urlsafe(24)


class AdminCredentialService:
    """Use case: two-step change of an administrator's username and/or password.

    initiate() stages the change behind a short-lived token (one pending
    change per process, the last one wins); confirm() applies it. Failures
    come back as a CredentialChangeResult, nothing is raised.
    """

    def __init__(
        self,
        users: UserRepository,
        pending: PendingUpdateStore,
        *,
        clock: Callable[[], datetime] = now_local,
        ttl_minutes: int = ADMIN_TOKEN_TTL_MINUTES,
        token_factory: Callable[[], str] = new_verification_token,
        notifier: Optional[TokenNotifier] = None,
    ):
        self._users = users
        self._pending = pending
        self._clock = clock
        self._ttl = timedelta(minutes=int(ttl_minutes))
        self._token_factory = token_factory
        self._notifier = notifier or LoggingTokenNotifier()

    def _get_admin(self, admin_user_id: str) -> Optional[User]:
        user = self._users.get_by_id(admin_user_id)
        if not user or user.role != Role.ADMIN:
            return None
        return user

    def initiate(
        self,
        admin_user_id: str,
        new_username: Optional[str] = None,
        new_password: Optional[str] = None,
    ) -> CredentialChangeResult:
        new_username = (new_username or "").strip() or None
        new_password = new_password or None

        if not admin_user_id:
            return CredentialChangeResult.failed(CredentialChangeFailure.VALIDATION, "Admin user ID is required.")
        if not new_username and not new_password:
            return CredentialChangeResult.failed(
                CredentialChangeFailure.VALIDATION,
                "No changes requested. Provide new username or password.",
            )
        if new_username and any(ch.isspace() for ch in new_username):
            return CredentialChangeResult.failed(CredentialChangeFailure.VALIDATION, "Username must not contain spaces.")

        admin = self._get_admin(admin_user_id)
        if not admin:
            return CredentialChangeResult.failed(CredentialChangeFailure.ADMIN_NOT_FOUND, "Admin user not found.")

        if new_username:
            other = self._users.get_by_email(new_username)
            if other and other.user_id != admin.user_id:
                return CredentialChangeResult.failed(CredentialChangeFailure.VALIDATION, "Username is already in use.")

        token = self._token_factory()
        expires_at = self._clock() + self._ttl
        self._pending.put(
            PendingAdminUpdate(
                admin_user_id=admin.user_id,
                token=token,
                expires_at=expires_at,
                new_username=new_username,
                new_password_hash=generate_password_hash(new_password) if new_password else None,
            )
        )
        self._notifier.notify(admin, token, expires_at)
        logger.info("Admin credential change initiated for %s", admin.user_id)

        return CredentialChangeResult(
            success=True,
            message="Verification initiated. Confirm with the token before it expires.",
            token=token,
            expires_at=expires_at,
        )

    def confirm(self, admin_user_id: str, token: str) -> CredentialChangeResult:
        if not admin_user_id or not token:
            return CredentialChangeResult.failed(
                CredentialChangeFailure.VALIDATION, "Admin user ID and token are required."
            )

        pending = self._pending.get()
        if not pending:
            return CredentialChangeResult.failed(
                CredentialChangeFailure.NOT_FOUND, "No pending update found or it has expired."
            )

        if pending.admin_user_id != admin_user_id or not hmac.compare_digest(pending.token, token):
            logger.warning("Admin credential confirmation with mismatching token for %s", admin_user_id)
            return CredentialChangeResult.failed(
                CredentialChangeFailure.TOKEN_MISMATCH, "Invalid token or user ID mismatch."
            )

        if pending.is_expired(self._clock()):
            self._pending.clear()
            logger.info("Admin credential change for %s expired", admin_user_id)
            return CredentialChangeResult.failed(CredentialChangeFailure.TOKEN_EXPIRED, "Verification token expired.")

        admin = self._get_admin(admin_user_id)
        if not admin:
            return CredentialChangeResult.failed(
                CredentialChangeFailure.ADMIN_NOT_FOUND, "Failed to update admin credentials."
            )

        updated = admin
        if pending.new_username and pending.new_username != admin.email:
            updated = replace(updated, email=pending.new_username)
        if pending.new_password_hash:
            updated = replace(updated, password_hash=pending.new_password_hash)

        if updated is not admin and not self._users.update(updated):
            return CredentialChangeResult.failed(
                CredentialChangeFailure.ADMIN_NOT_FOUND, "Failed to update admin credentials."
            )

        self._pending.clear()
        logger.info("Admin credentials updated for %s", admin_user_id)
        return CredentialChangeResult(success=True, message="Admin credentials updated successfully.", user=updated)

    def discard_pending(self, admin_user_id: str) -> bool:
        """Drop the pending change if it belongs to this admin (e.g. on logout)."""
        pending = self._pending.get()
        if pending and pending.admin_user_id == admin_user_id:
            self._pending.clear()
            return True
        return False
