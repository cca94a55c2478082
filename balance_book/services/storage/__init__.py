"""
Storage Services Package

Provides the key-value backend interface, its in-memory and JSON file
implementations, and the Ledger Store built on top of them.
"""

from balance_book.services.storage.interface import (
    AuditStorageInterface,
    ChangeAction,
    Collection,
    KeyValueBackend,
    LedgerChange,
    NotFoundError,
    StorageError,
)
from balance_book.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryKeyValueBackend,
)
from balance_book.services.storage.json_file import JsonFileKeyValueBackend
from balance_book.services.storage.ledger import LedgerListener, LedgerStore

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "KeyValueBackend",
    # Change events
    "ChangeAction",
    "Collection",
    "LedgerChange",
    "LedgerListener",
    # Exceptions
    "NotFoundError",
    "StorageError",
    # Implementations
    "InMemoryAuditStorage",
    "InMemoryKeyValueBackend",
    "JsonFileKeyValueBackend",
    "LedgerStore",
]
