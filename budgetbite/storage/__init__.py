"""Mini README: Persistence backends for the ledger.

The package is divided into ``base`` for the abstract store and the
persistence error, ``memory`` for the dictionary-backed store used in tests,
and ``json_file`` for the local file store used by the CLI and web service.
"""

from .base import KeyValueStore, LedgerPersistenceError
from .json_file import JsonFileKeyValueStore
from .memory import InMemoryKeyValueStore

__all__ = [
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "LedgerPersistenceError",
]
