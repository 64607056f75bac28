"""Mini README: Tests for the JSON file key-value store.

Checks that entries survive a reload, that unreadable files are treated as
empty, and that a ledger reopened from disk sees the same expenses.
"""

from __future__ import annotations

import json
from pathlib import Path

from budgetbite.ledger import Currency, LedgerStore
from budgetbite.storage import JsonFileKeyValueStore


def test_entries_survive_reload(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    store = JsonFileKeyValueStore(path)
    store.set_item("bb_curr", "GBP")
    store.set_item("other", "value")
    store.remove_item("other")
    store.remove_item("missing")

    assert json.loads(path.read_text(encoding="utf-8")) == {"bb_curr": "GBP"}
    assert JsonFileKeyValueStore(path).get_item("bb_curr") == "GBP"


def test_unreadable_file_is_treated_as_empty(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    path.write_text("{broken", encoding="utf-8")
    assert JsonFileKeyValueStore(path).get_item("bb_curr") is None

    path.write_text("[1, 2]", encoding="utf-8")
    assert JsonFileKeyValueStore(path).get_item("bb_curr") is None


def test_ledger_round_trip_through_file(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "ledger.json"
    ledger = LedgerStore(JsonFileKeyValueStore(path), clock=lambda: 1_717_000_000_000)
    ledger.add_expense("coffee", "5")
    ledger.add_expense("bus", "2.75")
    ledger.set_currency("BDT")

    reopened = LedgerStore(JsonFileKeyValueStore(path))
    assert reopened.expenses == ledger.expenses
    assert reopened.currency is Currency.BDT
    assert reopened.budget == 0.0
