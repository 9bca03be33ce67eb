from __future__ import annotations

import pytest

from ledgerbook import models
from ledgerbook.errors import InvalidChart
from ledgerbook.models import Classification
from ledgerbook.schemas import ChartEntry
from ledgerbook.services.chart_registry import ChartRegistry


def _registry() -> ChartRegistry:
    return ChartRegistry(
        accounts=[ChartEntry(id="cash", color="green"), ChartEntry(id="bank", color="red", subs=["checking"])],
        income=[ChartEntry(id="wages"), ChartEntry(id="gifts", subs=["bonus"])],
        expense=[ChartEntry(id="housing"), ChartEntry(id="others")],
    )


def test_entries_for_dispatches_by_classification():
    reg = _registry()
    assert [e.id for e in reg.entries_for(Classification.ACCOUNT)] == ["cash", "bank"]
    assert [e.id for e in reg.entries_for("income")] == ["wages", "gifts"]
    assert [e.id for e in reg.entries_for(Classification.EXPENSE)] == ["housing", "others"]


def test_unknown_classification_is_rejected():
    with pytest.raises(ValueError):
        _registry().entries_for("asset")


def test_find_is_exact_and_case_sensitive():
    reg = _registry()
    assert reg.find("account", "bank").subs == ["checking"]
    assert reg.find("account", "Bank") is None
    assert reg.find("account", " bank") is None
    # ids are scoped to their own list
    assert reg.find("income", "cash") is None


def test_from_user_reads_defaults():
    user = models.User(
        name="Someone",
        email="someone@example.com",
        accounts=[{"id": "cash", "color": "green", "subs": []}, {"id": "bank", "color": "red", "subs": []}],
        income_categories=[{"id": "wages", "color": "green", "subs": []}],
        expense_categories=[{"id": "others", "color": "grey", "subs": ["misc"]}],
    )
    reg = ChartRegistry.from_user(user)
    assert reg.find("account", "cash") is not None
    assert reg.find("expense", "others").subs == ["misc"]


def test_replace_requires_two_entries():
    reg = _registry()
    with pytest.raises(InvalidChart):
        reg.replace("account", [ChartEntry(id="cash")])


def test_replace_rejects_duplicate_ids():
    reg = _registry()
    with pytest.raises(InvalidChart):
        reg.replace("expense", [ChartEntry(id="rent"), ChartEntry(id="rent")])


def test_replace_and_write_to_user():
    reg = _registry()
    reg.replace("expense", [ChartEntry(id="rent", color="orange", subs=["deposit"]), ChartEntry(id="food")])
    user = models.User(name="Someone", email="someone@example.com")
    reg.write_to(user)
    assert user.expense_categories == [
        {"id": "rent", "color": "orange", "subs": ["deposit"]},
        {"id": "food", "color": "", "subs": []},
    ]
    assert [row["id"] for row in user.accounts] == ["cash", "bank"]
