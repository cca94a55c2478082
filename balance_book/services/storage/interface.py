"""
Abstract Storage Interface

DESIGN DECISION: Persistence is a plain key-value backend holding JSON strings.
This allows us to:
1. Keep state in a local JSON file (the desktop equivalent of browser storage)
2. Use in-memory storage for testing
3. Swap in another backend without touching business logic

The valuation and alerting core never sees a backend. It only receives
snapshots from the Ledger Store.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from balance_book.models.audit import AuditEvent


class Collection(str, Enum):
    """The four independently stored ledger collections."""
    TRANSACTIONS = "transactions"
    INVOICES = "invoices"
    ACCOUNTS = "accounts"
    INVENTORY = "inventory"

    @property
    def storage_key(self) -> str:
        return f"bb_{self.value}"


class ChangeAction(str, Enum):
    ADDED = "added"
    UPDATED = "updated"
    DELETED = "deleted"
    REPLACED = "replaced"
    RESET = "reset"


class LedgerChange(BaseModel):
    """Emitted to Ledger Store listeners after every change."""

    collection: Collection
    action: ChangeAction
    record_id: Optional[str] = None
    record_count: Optional[int] = None


class KeyValueBackend(ABC):
    """
    Abstract key-value store for persisted state.

    Values are strings (JSON documents for collections and the profile,
    bare strings for scalar preferences).
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read a value.

        Returns:
            The stored string, or None if the key is absent
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store a value, replacing any previous one.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key. Removing an absent key is not an error."""
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Record not found in storage."""
    pass
