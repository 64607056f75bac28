"""Mini README: Dictionary-backed key-value store.

Used by the test-suite and by callers that want a throwaway ledger. The
store copies the optional seed mapping so callers can reuse fixtures.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from .base import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Keep entries in a plain dictionary for the lifetime of the object."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def as_dict(self) -> Dict[str, str]:
        """Return a copy of the stored entries for inspection."""

        return dict(self._items)
