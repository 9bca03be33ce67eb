from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

import structlog
from sqlalchemy.orm import Session

from ledgerbook import models
from ledgerbook.errors import InvalidAmount, OwnerNotFound, TransactionNotFound
from ledgerbook.models import to_utc_naive
from ledgerbook.schemas import LedgerEntry, TransactionCreate, TransactionUpdate
from ledgerbook.services.chart_registry import ChartRegistry
from ledgerbook.services.ledger_validator import LedgerValidator
from ledgerbook.utils.normalization import normalize_amount

logger = structlog.get_logger(__name__)


def _normalized(amount: Optional[Decimal]) -> Optional[Decimal]:
    if amount is None:
        return None
    try:
        return normalize_amount(amount)
    except ValueError as exc:
        raise InvalidAmount(str(exc)) from exc


def _entry_to_row(entry: LedgerEntry) -> dict:
    return {"classification": entry.classification.value, "main": entry.main, "sub": entry.sub}


class TransactionService:
    """Create, update and delete transactions.

    Every write normalizes the amount, loads the owner's chart registry and
    validates both entries before anything is flushed.
    """

    def __init__(self, db: Session, validator: Optional[LedgerValidator] = None) -> None:
        self.db = db
        self.validator = validator or LedgerValidator()

    def list_for_owner(self, user_id: int) -> list[models.Transaction]:
        return (
            self.db.query(models.Transaction)
            .filter(models.Transaction.user_id == user_id)
            .order_by(models.Transaction.date.desc(), models.Transaction.id.desc())
            .all()
        )

    def get(self, txn_id: int) -> models.Transaction:
        tx = self.db.query(models.Transaction).filter(models.Transaction.id == txn_id).first()
        if not tx:
            raise TransactionNotFound(txn_id)
        return tx

    def create(self, owner_id: int, payload: TransactionCreate) -> models.Transaction:
        amount = _normalized(payload.amount)
        registry = self._registry_for(owner_id)
        self.validator.validate_transaction(
            debit=payload.debit,
            credit=payload.credit,
            amount=amount,
            date=payload.date,
            registry=registry,
        )

        tx = models.Transaction(
            user_id=owner_id,
            debit=_entry_to_row(payload.debit),
            credit=_entry_to_row(payload.credit),
            amount=amount,
            date=to_utc_naive(payload.date),
        )
        self.db.add(tx)
        self.db.commit()
        self.db.refresh(tx)
        logger.info("transaction_created", transaction_id=tx.id, user_id=owner_id)
        return tx

    def update(self, txn_id: int, patch: TransactionUpdate) -> models.Transaction:
        """Apply the provided fields; omitted (or null) fields keep their value.

        Both entries are re-validated on every update, even when only the date
        changed, since the chart may have been edited since the last save.
        """
        tx = self.get(txn_id)
        changes = patch.model_dump(exclude_unset=True, exclude_none=True)

        debit = patch.debit if "debit" in changes else LedgerEntry.model_validate(tx.debit)
        credit = patch.credit if "credit" in changes else LedgerEntry.model_validate(tx.credit)
        amount = _normalized(patch.amount) if "amount" in changes else Decimal(tx.amount)
        date: datetime = patch.date if "date" in changes else tx.date

        registry = self._registry_for(tx.user_id)
        self.validator.validate_transaction(
            debit=debit,
            credit=credit,
            amount=amount,
            date=date,
            registry=registry,
        )

        tx.debit = _entry_to_row(debit)
        tx.credit = _entry_to_row(credit)
        tx.amount = amount
        tx.date = to_utc_naive(date)
        self.db.commit()
        self.db.refresh(tx)
        logger.info("transaction_updated", transaction_id=tx.id, fields=sorted(changes))
        return tx

    def delete(self, txn_id: int) -> None:
        tx = self.get(txn_id)
        self.db.delete(tx)
        self.db.commit()
        logger.info("transaction_deleted", transaction_id=txn_id)

    # ---- Helpers ---------------------------------------------------------
    def _registry_for(self, owner_id: int) -> ChartRegistry:
        user = self.db.get(models.User, owner_id)
        if not user:
            raise OwnerNotFound(owner_id)
        return ChartRegistry.from_user(user)
