from __future__ import annotations

import hashlib
import hmac
import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional

import bcrypt
import structlog
from sqlalchemy import inspect

from ledgerbook import models
from ledgerbook.core.config import settings
from ledgerbook.models import now_utc_naive

logger = structlog.get_logger(__name__)

# bcrypt only reads the first 72 bytes; newer releases reject longer input
BCRYPT_MAX_BYTES = 72


def _password_bytes(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]


def digest_token(token: str) -> str:
    """Deterministic one-way digest stored in place of the plaintext token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class CredentialManager:
    """Password hashing and reset-token lifecycle for a single user record.

    Only mutates the in-memory ``User``; committing is the caller's job.
    """

    def __init__(
        self,
        *,
        rounds: Optional[int] = None,
        token_ttl: Optional[timedelta] = None,
        token_bytes: Optional[int] = None,
        clock: Callable[[], datetime] = now_utc_naive,
    ) -> None:
        self.rounds = rounds or settings.BCRYPT_ROUNDS
        self.token_ttl = token_ttl or timedelta(minutes=settings.RESET_TOKEN_TTL_MINUTES)
        self.token_bytes = token_bytes or settings.RESET_TOKEN_BYTES
        self.clock = clock

    # ---- Passwords -------------------------------------------------------
    def hash_password(self, plaintext: str) -> str:
        return bcrypt.hashpw(_password_bytes(plaintext), bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify_password(self, plaintext: str, password_hash: Optional[str]) -> bool:
        if not password_hash:
            raise ValueError("password hash is missing")
        return bcrypt.checkpw(_password_bytes(plaintext), password_hash.encode("utf-8"))

    def set_password(self, user: models.User, plaintext: str) -> None:
        """Hash and store a new password.

        A user that already has a database identity gets ``password_changed_at``
        stamped; a brand-new user does not.
        """
        is_new = not inspect(user).has_identity
        user.password_hash = self.hash_password(plaintext)
        if not is_new:
            user.password_changed_at = self.clock()

    def password_changed_after(self, user: models.User, moment: datetime) -> bool:
        if user.password_changed_at is None:
            return False
        return user.password_changed_at > moment

    # ---- Reset tokens ----------------------------------------------------
    def issue_reset_token(self, user: models.User) -> str:
        """Return a fresh plaintext token; only its digest is kept on the user.

        Any earlier pending token is overwritten.
        """
        token = secrets.token_hex(self.token_bytes)
        user.reset_token = digest_token(token)
        user.reset_token_expires_at = self.clock() + self.token_ttl
        logger.info("reset_token_issued", user_id=user.id, expires_at=user.reset_token_expires_at.isoformat())
        return token

    def validate_reset_token(self, user: models.User, candidate: str) -> bool:
        if not user.reset_token or not user.reset_token_expires_at:
            logger.info("reset_token_rejected", user_id=user.id, reason="missing")
            return False
        if not hmac.compare_digest(digest_token(candidate), user.reset_token):
            logger.info("reset_token_rejected", user_id=user.id, reason="mismatch")
            return False
        if not user.reset_token_expires_at > self.clock():
            logger.info("reset_token_rejected", user_id=user.id, reason="expired")
            return False
        return True

    def reset_password(self, user: models.User, new_plaintext: str) -> None:
        """Set the new password and burn the reset token."""
        self.set_password(user, new_plaintext)
        user.reset_token = None
        user.reset_token_expires_at = None
        logger.info("password_reset", user_id=user.id)
