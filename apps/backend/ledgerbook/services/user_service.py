from __future__ import annotations

from typing import Optional

import structlog
from sqlalchemy.orm import Session

from ledgerbook import models
from ledgerbook.errors import (
    EmailAlreadyRegistered,
    InvalidCredentials,
    ResetTokenInvalidOrExpired,
)
from ledgerbook.models import Classification
from ledgerbook.schemas import ChartEntry, ChartOut, UserCreate, UserOut
from ledgerbook.services.chart_registry import ChartRegistry
from ledgerbook.services.credential_service import CredentialManager

logger = structlog.get_logger(__name__)


class UserService:
    def __init__(self, db: Session, credentials: Optional[CredentialManager] = None) -> None:
        self.db = db
        self.credentials = credentials or CredentialManager()

    def find_by_email(self, email: str) -> models.User | None:
        return self.db.query(models.User).filter(models.User.email == email.strip().lower()).first()

    def register(self, payload: UserCreate) -> models.User:
        if self.find_by_email(payload.email):
            raise EmailAlreadyRegistered(payload.email)
        user = models.User(name=payload.name, email=payload.email)
        self.credentials.set_password(user, payload.password)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info("user_registered", user_id=user.id)
        return user

    def authenticate(self, email: str, password: str) -> models.User:
        """Unknown email and wrong password look the same to the caller."""
        user = self.find_by_email(email)
        if not user or not user.password_hash:
            logger.info("login_failed", reason="unknown_email")
            raise InvalidCredentials()
        if not self.credentials.verify_password(password, user.password_hash):
            logger.info("login_failed", user_id=user.id, reason="bad_password")
            raise InvalidCredentials()
        return user

    def change_password(self, user: models.User, current_password: str, new_password: str) -> models.User:
        if not user.password_hash or not self.credentials.verify_password(current_password, user.password_hash):
            logger.info("password_change_failed", user_id=user.id, reason="bad_password")
            raise InvalidCredentials()
        self.credentials.set_password(user, new_password)
        self.db.commit()
        self.db.refresh(user)
        return user

    def request_password_reset(self, email: str) -> Optional[str]:
        """Issue a reset token; ``None`` when no user has this email."""
        user = self.find_by_email(email)
        if not user:
            logger.info("reset_token_not_issued", reason="unknown_email")
            return None
        token = self.credentials.issue_reset_token(user)
        self.db.commit()
        return token

    def reset_password(self, email: str, token: str, new_password: str) -> models.User:
        user = self.find_by_email(email)
        if not user or not self.credentials.validate_reset_token(user, token):
            raise ResetTokenInvalidOrExpired()
        self.credentials.reset_password(user, new_password)
        self.db.commit()
        self.db.refresh(user)
        return user

    def replace_chart(
        self,
        user: models.User,
        classification: Classification | str,
        entries: list[ChartEntry],
    ) -> ChartOut:
        classification = Classification(classification)
        registry = ChartRegistry.from_user(user)
        registry.replace(classification, entries)
        registry.write_to(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info("chart_replaced", user_id=user.id, classification=classification.value, size=len(entries))
        return registry.to_schema()

    @staticmethod
    def to_schema(user: models.User) -> UserOut:
        return UserOut(
            id=user.id,
            name=user.name,
            email=user.email,
            image_path=user.image_path,
            password_changed_at=user.password_changed_at,
            chart=ChartRegistry.from_user(user).to_schema(),
        )
