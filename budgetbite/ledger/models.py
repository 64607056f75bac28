"""Mini README: Value objects describing ledger state.

Structure:
    * Expense - immutable record of a single cash outflow.
    * LedgerSnapshot - immutable, hashable view of expenses, budget and currency.
    * parse_amount / parse_budget - coerce user supplied numbers.

Expenses are keyed by their creation timestamp in milliseconds which also
acts as their creation-order marker. Snapshots are what analytics and
exports consume, so they never see the mutable store.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional, Tuple

from .currency import DEFAULT_CURRENCY, Currency


@dataclass(frozen=True, slots=True)
class Expense:
    """A named outflow recorded at ``expense_id`` milliseconds since the epoch."""

    expense_id: int
    name: str
    amount: float

    @property
    def created_at(self) -> datetime:
        """Local creation time derived from the identifier."""

        return datetime.fromtimestamp(self.expense_id / 1000)

    def as_dict(self) -> Dict[str, object]:
        """Export the expense in its persisted shape."""

        return {"id": self.expense_id, "name": self.name, "amount": self.amount}


@dataclass(frozen=True, slots=True)
class LedgerSnapshot:
    """Point-in-time copy of the ledger used for analytics and exports."""

    expenses: Tuple[Expense, ...] = ()
    budget: float = 0.0
    currency: Currency = DEFAULT_CURRENCY

    def as_dict(self) -> Dict[str, object]:
        return {
            "expenses": [expense.as_dict() for expense in self.expenses],
            "budget": self.budget,
            "currency": self.currency.code,
            "currency_symbol": self.currency.symbol,
        }


def parse_amount(raw_amount: object) -> Optional[float]:
    """Return ``raw_amount`` as a finite float or ``None`` when it is unusable.

    Falsy values (``""``, ``0``, ``None``) are unusable, as are booleans,
    blank, non-ASCII or non-numeric strings and non-finite numbers. The string ``"0"``
    is a valid amount.
    """

    if not raw_amount or isinstance(raw_amount, bool):
        return None
    if isinstance(raw_amount, str):
        text = raw_amount.strip()
        if not text or "_" in text or not text.isascii():
            return None
        raw_amount = text
    try:
        amount = float(raw_amount)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount):
        return None
    return amount


def parse_budget(value: object) -> float:
    """Coerce a budget value, treating blanks as zero and rejecting negatives."""

    if value is None or (isinstance(value, str) and not value.strip()):
        return 0.0
    if isinstance(value, bool):
        raise ValueError("Budget must be a number")
    amount = parse_amount(value)
    if amount is None:
        if value == 0:
            return 0.0
        raise ValueError(f"Budget must be a finite number, got {value!r}")
    if amount < 0:
        raise ValueError("Budget cannot be negative")
    return amount
