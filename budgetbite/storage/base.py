"""Mini README: Abstract key-value storage used to persist the ledger.

Structure:
    * LedgerPersistenceError - raised when a write to the backing store fails.
    * KeyValueStore - abstract string-keyed, string-valued store.

The ledger persists exactly two string entries (currency selection and the
encoded expense list), so the interface is deliberately narrow. Concrete
stores live alongside this module; tests use the in-memory variant.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class LedgerPersistenceError(RuntimeError):
    """A persistence write did not reach the backing key-value store."""


class KeyValueStore(ABC):
    """Base interface for string key-value persistence backends."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value or ``None`` when the key is absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete ``key``; deleting a missing key is not an error."""

    def describe(self) -> str:
        """Human readable location used in log messages."""

        return type(self).__name__
