"""Mini README: Supported display currencies.

Symbols are cosmetic labels only; amounts are never converted between
currencies.
"""

from __future__ import annotations

from enum import Enum

_SYMBOLS = {
    "USD": "$",
    "BDT": "৳",
    "EUR": "€",
    "GBP": "£",
}


class Currency(str, Enum):
    """Enumerate the currencies a ledger can be labelled with."""

    USD = "USD"
    BDT = "BDT"
    EUR = "EUR"
    GBP = "GBP"

    @property
    def code(self) -> str:
        return self.value

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self.value]

    @classmethod
    def from_str(cls, value: object) -> "Currency":
        """Coerce arbitrary casing into a supported currency."""

        if isinstance(value, cls):
            return value
        try:
            normalised = str(value).strip().upper()
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported currency: {value}") from error


DEFAULT_CURRENCY = Currency.USD
