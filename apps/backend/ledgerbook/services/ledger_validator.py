from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

import structlog

from ledgerbook.errors import (
    FutureDatedTransaction,
    InvalidAmount,
    MissingRequiredField,
    UnsupportedLedgerReference,
)
from ledgerbook.models import now_utc_naive, to_utc_naive
from ledgerbook.schemas import LedgerEntry
from ledgerbook.services.chart_registry import ChartRegistry

logger = structlog.get_logger(__name__)

REQUIRED_FIELDS = ("debit", "credit", "amount", "date")
# Numeric(14, 1) leaves 13 integer digits
MAX_AMOUNT = Decimal("1E13")


class LedgerValidator:
    """Pure checks for a transaction against its owner's chart registry.

    Nothing here touches the database; the caller loads the registry and
    decides what to do with a failure.
    """

    def __init__(self, clock: Callable[[], datetime] = now_utc_naive) -> None:
        self.clock = clock

    def validate_entry(self, entry: LedgerEntry, registry: ChartRegistry) -> None:
        match = registry.find(entry.classification, entry.main)
        if match is not None and (entry.sub is None or entry.sub in match.subs):
            return
        logger.info(
            "ledger_reference_rejected",
            classification=entry.classification.value,
            main=entry.main,
            sub=entry.sub,
        )
        raise UnsupportedLedgerReference(entry.classification.value, entry.main, entry.sub)

    def validate_amount(self, amount: Decimal) -> None:
        if not amount.is_finite() or amount <= 0:
            raise InvalidAmount("The amount must be a positive number.")
        if amount >= MAX_AMOUNT:
            raise InvalidAmount(f"The amount must be less than {MAX_AMOUNT:,.0f}.")

    def validate_date(self, value: datetime) -> None:
        # Compared against the clock at validation time; equal is allowed
        if to_utc_naive(value) > self.clock():
            raise FutureDatedTransaction()

    def validate_transaction(
        self,
        *,
        debit: Optional[LedgerEntry],
        credit: Optional[LedgerEntry],
        amount: Optional[Decimal],
        date: Optional[datetime],
        registry: ChartRegistry,
    ) -> None:
        """Run every check; the first failure is raised.

        Order: presence, amount, date, debit, credit.
        """
        values = {"debit": debit, "credit": credit, "amount": amount, "date": date}
        missing = [name for name in REQUIRED_FIELDS if values[name] is None]
        if missing:
            raise MissingRequiredField(missing)

        self.validate_amount(amount)
        self.validate_date(date)
        self.validate_entry(debit, registry)
        self.validate_entry(credit, registry)
