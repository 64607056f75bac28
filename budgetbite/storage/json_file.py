"""Mini README: JSON file implementation of the key-value store.

Structure:
    * JsonFileKeyValueStore - persists a flat ``{key: value}`` JSON object.

The file plays the role of the browser's local storage for the desktop and
web builds. Entries are loaded once on construction and every write
rewrites the whole file through a temporary sibling followed by an atomic
rename, so a crash mid-write leaves the previous contents in place. An
unreadable or malformed file is treated as empty; write failures raise
``OSError`` to the caller.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict, Optional

from .base import KeyValueStore
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class JsonFileKeyValueStore(KeyValueStore):
    """Persist string entries to a single JSON document on disk."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._items: Dict[str, str] = self._load()
        LOGGER.debug("Key-value store %s loaded with %s keys", self.path, len(self._items))

    def _load(self) -> Dict[str, str]:
        """Read the backing file, returning an empty mapping when unusable."""

        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as error:
            LOGGER.warning("Ignoring unreadable key-value store %s: %s", self.path, error)
            return {}
        if not isinstance(payload, dict):
            LOGGER.warning("Ignoring key-value store %s: top level is not an object", self.path)
            return {}
        return {str(key): value for key, value in payload.items() if isinstance(value, str)}

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temporary = self.path.with_name(self.path.name + ".tmp")
        temporary.write_text(json.dumps(self._items, ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(temporary, self.path)

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        previous = self._items.get(key)
        self._items[key] = value
        try:
            self._flush()
        except OSError:
            if previous is None:
                self._items.pop(key, None)
            else:
                self._items[key] = previous
            raise

    def remove_item(self, key: str) -> None:
        if key not in self._items:
            return
        previous = self._items.pop(key)
        try:
            self._flush()
        except OSError:
            self._items[key] = previous
            raise

    def describe(self) -> str:
        return str(self.path)
