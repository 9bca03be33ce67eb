from __future__ import annotations

from datetime import datetime
from typing import Optional

import structlog
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from ledgerbook.core.database import get_db
from ledgerbook.errors import OwnerNotFound, StaleCredentials
from ledgerbook.models import to_utc_naive
from ledgerbook.services.credential_service import CredentialManager
from ledgerbook import models

logger = structlog.get_logger(__name__)


def get_current_user(
    x_user_id: Optional[str] = Header(None),
    x_token_issued_at: Optional[datetime] = Header(None),
    db: Session = Depends(get_db),
) -> models.User:
    """Resolve the caller from the ``X-User-Id`` header.

    Token verification lives in front of this service and forwards the
    token's issue time as ``X-Token-Issued-At``; credentials issued before
    the user's last password change are refused. Tests override this
    dependency to act as different users.
    """
    if not x_user_id:
        raise OwnerNotFound()
    try:
        user_id = int(x_user_id)
    except ValueError:
        raise OwnerNotFound() from None
    user = db.get(models.User, user_id)
    if not user:
        raise OwnerNotFound()
    if x_token_issued_at is not None and CredentialManager().password_changed_after(
        user, to_utc_naive(x_token_issued_at)
    ):
        logger.info("stale_credentials_rejected", user_id=user.id)
        raise StaleCredentials()
    return user
