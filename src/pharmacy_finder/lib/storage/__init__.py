"""Key-value persistence for session data and the pharmacy cache.

Public API:
    - BaseKeyValueStore: Abstract async get/set/delete interface
    - InMemoryKeyValueStore: Dictionary-backed store
    - DatabaseKeyValueStore: SQLAlchemy-backed store
    - StorageError: Raised on read/write failures
"""

from pharmacy_finder.lib.storage import keys
from pharmacy_finder.lib.storage.base import BaseKeyValueStore, StorageError
from pharmacy_finder.lib.storage.database import DatabaseKeyValueStore
from pharmacy_finder.lib.storage.memory import InMemoryKeyValueStore

__all__ = [
    "BaseKeyValueStore",
    "DatabaseKeyValueStore",
    "InMemoryKeyValueStore",
    "StorageError",
    "keys",
]
