"""User, credential and chart handlers."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from ledgerbook import models
from ledgerbook.core.config import settings
from ledgerbook.core.database import get_db
from ledgerbook.core.deps import get_current_user
from ledgerbook.models import Classification
from ledgerbook.schemas import (
    ChartOut,
    ChartReplaceIn,
    ForgotPasswordIn,
    ForgotPasswordOut,
    LoginIn,
    PasswordChangeIn,
    ResetPasswordIn,
    UserCreate,
    UserOut,
)
from ledgerbook.services import UserService

RESET_REQUESTED_MESSAGE = "If the email is registered, a password reset token has been issued."


def register_user(payload: UserCreate, db: Session = Depends(get_db)) -> UserOut:
    svc = UserService(db)
    return svc.to_schema(svc.register(payload))


def login(payload: LoginIn, db: Session = Depends(get_db)) -> UserOut:
    svc = UserService(db)
    return svc.to_schema(svc.authenticate(payload.email, payload.password))


def get_me(current_user: models.User = Depends(get_current_user)) -> UserOut:
    return UserService.to_schema(current_user)


def change_password(
    payload: PasswordChangeIn,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
) -> UserOut:
    svc = UserService(db)
    return svc.to_schema(svc.change_password(current_user, payload.current_password, payload.new_password))


def replace_chart(
    classification: Classification,
    payload: ChartReplaceIn,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
) -> ChartOut:
    return UserService(db).replace_chart(current_user, classification, payload.entries)


def forgot_password(payload: ForgotPasswordIn, db: Session = Depends(get_db)) -> ForgotPasswordOut:
    token = UserService(db).request_password_reset(payload.email)
    # Same body for unknown emails so callers cannot discover which accounts exist
    if token and settings.EXPOSE_RESET_TOKEN:
        return ForgotPasswordOut(message=RESET_REQUESTED_MESSAGE, reset_token=token)
    return ForgotPasswordOut(message=RESET_REQUESTED_MESSAGE)


def reset_password(payload: ResetPasswordIn, db: Session = Depends(get_db)) -> UserOut:
    svc = UserService(db)
    return svc.to_schema(svc.reset_password(payload.email, payload.token, payload.password))
