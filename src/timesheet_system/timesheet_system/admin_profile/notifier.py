from __future__ import annotations

import logging
from datetime import datetime
from typing import Protocol

from ..users.model import User

logger = logging.getLogger(__name__)


class TokenNotifier(Protocol):
    """Out-of-band channel for admin verification tokens (email, SMS, ...)."""

    def notify(self, admin: User, token: str, expires_at: datetime) -> None:
        raise NotImplementedError


class LoggingTokenNotifier(TokenNotifier):
    """Records that a token was issued. The token value itself is not logged."""

    def notify(self, admin: User, token: str, expires_at: datetime) -> None:
        logger.info("Verification token issued for admin %s, valid until %s", admin.user_id, expires_at.isoformat())
