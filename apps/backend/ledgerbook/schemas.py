from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, EmailStr, Field, field_validator

from .models import Classification
from .utils.normalization import to_decimal

# Raw amounts keep their decimal text (12.35 stays 12.35, not its binary expansion)
Amount = Annotated[Decimal, BeforeValidator(to_decimal)]


# ---- Chart registry -------------------------------------------------------
class ChartEntry(BaseModel):
    id: str = Field(..., min_length=1)
    color: str = ""
    subs: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class ChartOut(BaseModel):
    accounts: list[ChartEntry]
    income: list[ChartEntry]
    expense: list[ChartEntry]


# ---- Transactions ---------------------------------------------------------
class LedgerEntry(BaseModel):
    classification: Classification
    main: str = Field(..., min_length=1)
    sub: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("sub")
    def empty_sub_is_unset(cls, v: Optional[str]):
        return v or None


class TransactionCreate(BaseModel):
    # Presence is checked by the service so missing fields surface as 400
    debit: Optional[LedgerEntry] = None
    credit: Optional[LedgerEntry] = None
    amount: Optional[Amount] = None
    date: Optional[datetime] = None

    model_config = ConfigDict(extra="ignore")


class TransactionUpdate(BaseModel):
    debit: Optional[LedgerEntry] = None
    credit: Optional[LedgerEntry] = None
    amount: Optional[Amount] = None
    date: Optional[datetime] = None

    model_config = ConfigDict(extra="ignore")


class TransactionOut(BaseModel):
    id: int
    user_id: int
    debit: LedgerEntry
    credit: LedgerEntry
    amount: Decimal
    date: datetime
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ---- Users ----------------------------------------------------------------
NAME_PATTERN = r"^[A-Za-z0-9 .\-]+$"
EMAIL_MAX_LENGTH = 100


class UserCreate(BaseModel):
    name: str = Field(..., min_length=5, max_length=40, pattern=NAME_PATTERN)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=100)

    @field_validator("name", mode="before")
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    def normalize_email(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            if len(v) > EMAIL_MAX_LENGTH:
                raise ValueError(f"email must be at most {EMAIL_MAX_LENGTH} characters")
        return v


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    image_path: Optional[str] = None
    password_changed_at: Optional[datetime] = None
    chart: ChartOut


class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email", mode="before")
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class PasswordChangeIn(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=100)


class ForgotPasswordIn(BaseModel):
    email: EmailStr

    @field_validator("email", mode="before")
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class ForgotPasswordOut(BaseModel):
    message: str
    reset_token: Optional[str] = None


class ResetPasswordIn(BaseModel):
    email: EmailStr
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=8, max_length=100)

    @field_validator("email", mode="before")
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class ChartReplaceIn(BaseModel):
    entries: list[ChartEntry]
