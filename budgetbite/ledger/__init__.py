"""Mini README: Ledger state for BudgetBite.

The ledger groups the expense value objects, the currency enumeration and
the store that applies user intents (add, remove, clear, set budget, set
currency) and persists itself through an injected key-value store.
"""

from .currency import DEFAULT_CURRENCY, Currency
from .models import Expense, LedgerSnapshot, parse_amount, parse_budget
from .store import LedgerStore, decode_expenses, encode_expenses

__all__ = [
    "Currency",
    "DEFAULT_CURRENCY",
    "Expense",
    "LedgerSnapshot",
    "LedgerStore",
    "decode_expenses",
    "encode_expenses",
    "parse_amount",
    "parse_budget",
]
