from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    Integer,
    JSON,
    Numeric,
    String,
)
from sqlalchemy.ext.mutable import MutableDict, MutableList
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .core.database import Base


def now_utc_naive() -> datetime:
    """Return the current UTC time without tzinfo (the storage convention)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_naive(value: datetime) -> datetime:
    """Aware datetimes are converted to UTC; naive ones are assumed UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime, default=now_utc_naive, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=now_utc_naive, onupdate=now_utc_naive, nullable=False)


class Classification(str, Enum):
    """Which chart list a ledger entry points into."""

    ACCOUNT = "account"
    INCOME = "income"
    EXPENSE = "expense"


DEFAULT_ACCOUNTS: list[dict[str, Any]] = [
    {"id": "cash", "color": "green", "subs": []},
    {"id": "bank", "color": "red", "subs": []},
]

DEFAULT_INCOME_CATEGORIES: list[dict[str, Any]] = [
    {"id": "wages", "color": "green", "subs": []},
    {"id": "interests & dividends", "color": "green", "subs": []},
    {"id": "sale", "color": "green", "subs": []},
    {"id": "rental income", "color": "green", "subs": []},
    {"id": "refunds", "color": "green", "subs": []},
    {"id": "gifts", "color": "green", "subs": []},
]

DEFAULT_EXPENSE_CATEGORIES: list[dict[str, Any]] = [
    {"id": "food & drinks", "color": "red", "subs": []},
    {"id": "shopping", "color": "cyan", "subs": []},
    {"id": "housing", "color": "orange", "subs": []},
    {"id": "transportation", "color": "slate", "subs": []},
    {"id": "life & entertainment", "color": "yellow", "subs": []},
    {"id": "communication", "color": "blue", "subs": []},
    {"id": "financial expenses", "color": "blueviolet", "subs": []},
    {"id": "others", "color": "grey", "subs": []},
]


def _copy_default(rows: list[dict[str, Any]]):
    def factory() -> list[dict[str, Any]]:
        return [{**row, "subs": list(row["subs"])} for row in rows]

    return factory


class User(Base, TimestampMixin):
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(40), nullable=False)
    email: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    image_path: Mapped[str | None] = mapped_column(String(100))

    # Chart registry: lists of {"id", "color", "subs"}
    accounts: Mapped[list[dict[str, Any]]] = mapped_column(
        MutableList.as_mutable(JSON), nullable=False, default=_copy_default(DEFAULT_ACCOUNTS)
    )
    income_categories: Mapped[list[dict[str, Any]]] = mapped_column(
        MutableList.as_mutable(JSON), nullable=False, default=_copy_default(DEFAULT_INCOME_CATEGORIES)
    )
    expense_categories: Mapped[list[dict[str, Any]]] = mapped_column(
        MutableList.as_mutable(JSON), nullable=False, default=_copy_default(DEFAULT_EXPENSE_CATEGORIES)
    )

    # Password change state
    password_changed_at: Mapped[datetime | None] = mapped_column(DateTime)
    reset_token: Mapped[str | None] = mapped_column(String(64))
    reset_token_expires_at: Mapped[datetime | None] = mapped_column(DateTime)

    transactions: Mapped[list["Transaction"]] = relationship(back_populates="user", cascade="all, delete-orphan")


class Transaction(Base, TimestampMixin):
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("user.id", ondelete="CASCADE"), nullable=False)
    # {"classification", "main", "sub"}
    debit: Mapped[dict[str, Any]] = mapped_column(MutableDict.as_mutable(JSON), nullable=False)
    credit: Mapped[dict[str, Any]] = mapped_column(MutableDict.as_mutable(JSON), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 1), nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    user: Mapped[User] = relationship(back_populates="transactions")

    __table_args__ = (Index("ix_transaction_user_id", "user_id"),)
