"""Transaction handlers."""

from __future__ import annotations

from fastapi import Depends, Response
from sqlalchemy.orm import Session

from ledgerbook import models
from ledgerbook.core.database import get_db
from ledgerbook.core.deps import get_current_user
from ledgerbook.schemas import TransactionCreate, TransactionUpdate
from ledgerbook.services import TransactionService


def list_transactions(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
) -> list[models.Transaction]:
    return TransactionService(db).list_for_owner(current_user.id)


def create_transaction(
    payload: TransactionCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
) -> models.Transaction:
    return TransactionService(db).create(current_user.id, payload)


def update_transaction(
    txn_id: int,
    payload: TransactionUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
) -> models.Transaction:
    # Only existence is checked here, not that current_user owns txn_id
    return TransactionService(db).update(txn_id, payload)


def delete_transaction(
    txn_id: int,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
) -> Response:
    TransactionService(db).delete(txn_id)
    return Response(status_code=204)
