"""Mini README: The ledger store owning expenses, budget and currency.

Structure:
    * LedgerStore - applies user intents and writes through to a key-value store.
    * decode_expenses / encode_expenses - persisted representation of the list.

The store is the only component allowed to change ledger state. Expense and
currency mutations rewrite both persisted keys synchronously; the budget is
session scoped and never written. Persisted data that cannot be decoded is
treated as absent so a corrupt store never prevents start-up.
"""

from __future__ import annotations

import json
import math
import time
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from .currency import DEFAULT_CURRENCY, Currency
from .models import Expense, LedgerSnapshot, parse_amount, parse_budget
from ..logging_utils import get_logger
from ..storage import KeyValueStore, LedgerPersistenceError

LOGGER = get_logger(__name__)

DEFAULT_CURRENCY_KEY = "bb_curr"
DEFAULT_EXPENSES_KEY = "bb_expenses"


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


def _has_valid_timestamp(expense_id: int) -> bool:
    """Ids double as creation times, so they must map to a local datetime."""

    try:
        datetime.fromtimestamp(expense_id / 1000)
    except (OverflowError, OSError, ValueError):
        return False
    return True


def encode_expenses(expenses: Tuple[Expense, ...]) -> str:
    """Serialise expenses as a JSON array of ``{id, name, amount}`` objects."""

    return json.dumps([expense.as_dict() for expense in expenses], ensure_ascii=False)


def decode_expenses(raw: Optional[str]) -> List[Expense]:
    """Parse the persisted list, raising ``ValueError`` on any malformed entry."""

    if raw is None:
        return []
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as error:
        raise ValueError("Expense list is not valid JSON") from error
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise ValueError("Expense list must be a JSON array")

    expenses: List[Expense] = []
    seen_ids = set()
    for index, entry in enumerate(payload):
        if not isinstance(entry, dict):
            raise ValueError(f"Entry {index} is not an object")
        expense_id = entry.get("id")
        name = entry.get("name")
        amount = entry.get("amount")
        if isinstance(expense_id, float) and expense_id.is_integer():
            expense_id = int(expense_id)
        if not isinstance(expense_id, int) or isinstance(expense_id, bool):
            raise ValueError(f"Entry {index} has an invalid id")
        if not _has_valid_timestamp(expense_id):
            raise ValueError(f"Entry {index} has an out-of-range id {expense_id}")
        if expense_id in seen_ids:
            raise ValueError(f"Entry {index} repeats id {expense_id}")
        if not isinstance(name, str):
            raise ValueError(f"Entry {index} has an invalid name")
        if (
            not isinstance(amount, (int, float))
            or isinstance(amount, bool)
            or not math.isfinite(amount)
        ):
            raise ValueError(f"Entry {index} has an invalid amount")
        seen_ids.add(expense_id)
        expenses.append(Expense(expense_id=expense_id, name=name, amount=float(amount)))
    return expenses


class LedgerStore:
    """Hold the expense list, session budget and currency selection."""

    def __init__(
        self,
        storage: KeyValueStore,
        *,
        currency_key: str = DEFAULT_CURRENCY_KEY,
        expenses_key: str = DEFAULT_EXPENSES_KEY,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self._storage = storage
        self._currency_key = currency_key
        self._expenses_key = expenses_key
        self._clock = clock or _epoch_millis
        self._budget = 0.0
        self._currency = self._load_currency()
        self._expenses: Tuple[Expense, ...] = tuple(self._load_expenses())
        LOGGER.debug(
            "Ledger store initialised from %s with %s expenses in %s",
            storage.describe(),
            len(self._expenses),
            self._currency.code,
        )

    @classmethod
    def from_settings(cls, storage: Optional[KeyValueStore] = None) -> "LedgerStore":
        """Build a store using the configured keys and local JSON file."""

        from ..configuration import get_settings
        from ..storage import JsonFileKeyValueStore

        settings = get_settings()
        return cls(
            storage or JsonFileKeyValueStore(settings.store_path),
            currency_key=settings.currency_key,
            expenses_key=settings.expenses_key,
        )

    def _load_currency(self) -> Currency:
        raw = self._storage.get_item(self._currency_key)
        if raw is None:
            return DEFAULT_CURRENCY
        try:
            return Currency.from_str(raw)
        except ValueError:
            LOGGER.warning("Stored currency %r is not supported; using %s", raw, DEFAULT_CURRENCY.code)
            return DEFAULT_CURRENCY

    def _load_expenses(self) -> List[Expense]:
        try:
            return decode_expenses(self._storage.get_item(self._expenses_key))
        except ValueError as error:
            LOGGER.warning("Discarding unreadable stored expenses: %s", error)
            return []

    def _persist(self) -> None:
        """Write expenses and currency through to the key-value store.

        If a write fails, keys already written in this call are restored to
        their previous values so storage never mixes old and new state.
        """

        entries = [
            (self._expenses_key, encode_expenses(self._expenses)),
            (self._currency_key, self._currency.code),
        ]
        written: List[Tuple[str, Optional[str]]] = []
        try:
            for key, value in entries:
                previous = self._storage.get_item(key)
                self._storage.set_item(key, value)
                written.append((key, previous))
        except Exception as error:
            LOGGER.exception("Failed to persist ledger to %s", self._storage.describe())
            self._restore(written)
            raise LedgerPersistenceError(
                f"Could not write ledger to {self._storage.describe()}: {error}"
            ) from error

    def _restore(self, written: List[Tuple[str, Optional[str]]]) -> None:
        for key, previous in reversed(written):
            try:
                if previous is None:
                    self._storage.remove_item(key)
                else:
                    self._storage.set_item(key, previous)
            except Exception:
                LOGGER.exception("Could not roll back key %s", key)

    def _next_id(self) -> int:
        """Read the clock, nudging forward so identifiers stay unique and ordered."""

        candidate = int(self._clock())
        if self._expenses:
            newest = max(expense.expense_id for expense in self._expenses)
            if candidate <= newest:
                candidate = newest + 1
        return candidate

    @property
    def expenses(self) -> Tuple[Expense, ...]:
        """Expenses ordered newest first."""

        return self._expenses

    @property
    def budget(self) -> float:
        return self._budget

    @property
    def currency(self) -> Currency:
        return self._currency

    def snapshot(self) -> LedgerSnapshot:
        """Return an immutable view of the current state."""

        return LedgerSnapshot(expenses=self._expenses, budget=self._budget, currency=self._currency)

    def add_expense(self, name: object, raw_amount: object) -> Optional[Expense]:
        """Prepend a new expense, or return ``None`` when the input is unusable."""

        if not name or not str(name).strip():
            LOGGER.debug("Rejected expense without a name")
            return None
        amount = parse_amount(raw_amount)
        if amount is None:
            LOGGER.debug("Rejected expense %r with amount %r", name, raw_amount)
            return None

        expense = Expense(expense_id=self._next_id(), name=str(name).strip().upper(), amount=amount)
        self._expenses = (expense,) + self._expenses
        LOGGER.info("Added expense %s %s=%s", expense.expense_id, expense.name, expense.amount)
        self._persist()
        return expense

    def remove_expense(self, expense_id: int) -> bool:
        """Remove the expense with ``expense_id``; unknown ids are ignored."""

        remaining = tuple(expense for expense in self._expenses if expense.expense_id != expense_id)
        removed = len(remaining) != len(self._expenses)
        self._expenses = remaining
        if removed:
            LOGGER.info("Removed expense %s", expense_id)
        else:
            LOGGER.debug("No expense with id %s to remove", expense_id)
        self._persist()
        return removed

    def clear_all(self) -> None:
        """Drop every expense."""

        LOGGER.info("Clearing %s expenses", len(self._expenses))
        self._expenses = ()
        self._persist()

    def set_budget(self, value: object) -> float:
        """Replace the session budget. The budget is never persisted."""

        self._budget = parse_budget(value)
        LOGGER.info("Budget set to %s", self._budget)
        return self._budget

    def set_currency(self, code: object) -> Currency:
        """Select a display currency, raising ``ValueError`` for unknown codes."""

        self._currency = Currency.from_str(code)
        LOGGER.info("Currency set to %s", self._currency.code)
        self._persist()
        return self._currency
