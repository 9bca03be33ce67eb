from __future__ import annotations

from typing import Iterable, Optional

from ledgerbook import models
from ledgerbook.errors import InvalidChart
from ledgerbook.models import Classification
from ledgerbook.schemas import ChartEntry, ChartOut

MIN_CHART_ENTRIES = 2


class ChartRegistry:
    """Read-only view of a user's accounts and income/expense categories.

    Lookups are exact, case-sensitive id matches.
    """

    def __init__(
        self,
        accounts: Iterable[ChartEntry],
        income: Iterable[ChartEntry],
        expense: Iterable[ChartEntry],
    ) -> None:
        self.accounts = list(accounts)
        self.income = list(income)
        self.expense = list(expense)

    @classmethod
    def from_user(cls, user: models.User) -> "ChartRegistry":
        return cls(
            accounts=[ChartEntry.model_validate(row) for row in user.accounts or []],
            income=[ChartEntry.model_validate(row) for row in user.income_categories or []],
            expense=[ChartEntry.model_validate(row) for row in user.expense_categories or []],
        )

    def entries_for(self, classification: Classification | str) -> list[ChartEntry]:
        classification = Classification(classification)
        if classification is Classification.ACCOUNT:
            return self.accounts
        if classification is Classification.INCOME:
            return self.income
        return self.expense

    def find(self, classification: Classification | str, main: str) -> Optional[ChartEntry]:
        for entry in self.entries_for(classification):
            if entry.id == main:
                return entry
        return None

    def replace(self, classification: Classification | str, entries: Iterable[ChartEntry]) -> None:
        """Swap one list wholesale after checking size and id uniqueness."""
        classification = Classification(classification)
        rows = list(entries)
        if len(rows) < MIN_CHART_ENTRIES:
            noun = "accounts" if classification is Classification.ACCOUNT else f"{classification.value} categories"
            raise InvalidChart(f"There must be at least {MIN_CHART_ENTRIES} {noun}.")
        seen: set[str] = set()
        for row in rows:
            if row.id in seen:
                raise InvalidChart(f'Duplicate {classification.value} id "{row.id}".')
            seen.add(row.id)

        if classification is Classification.ACCOUNT:
            self.accounts = rows
        elif classification is Classification.INCOME:
            self.income = rows
        else:
            self.expense = rows

    def write_to(self, user: models.User) -> None:
        user.accounts = [row.model_dump() for row in self.accounts]
        user.income_categories = [row.model_dump() for row in self.income]
        user.expense_categories = [row.model_dump() for row in self.expense]

    def to_schema(self) -> ChartOut:
        return ChartOut(accounts=self.accounts, income=self.income, expense=self.expense)
