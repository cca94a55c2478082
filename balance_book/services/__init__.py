"""Services package."""

from balance_book.services.storage import (
    AuditStorageInterface,
    InMemoryAuditStorage,
    InMemoryKeyValueBackend,
    JsonFileKeyValueBackend,
    KeyValueBackend,
    LedgerStore,
    NotFoundError,
    StorageError,
)
from balance_book.services.preferences import (
    PreferencesService,
    UnsupportedCurrencyError,
)
from balance_book.services.ai import (
    DocumentExtractor,
    GeminiGateway,
    TextAdvisor,
)

__all__ = [
    # Storage services
    "AuditStorageInterface",
    "InMemoryAuditStorage",
    "InMemoryKeyValueBackend",
    "JsonFileKeyValueBackend",
    "KeyValueBackend",
    "LedgerStore",
    "NotFoundError",
    "StorageError",
    # Preferences
    "PreferencesService",
    "UnsupportedCurrencyError",
    # AI gateway
    "DocumentExtractor",
    "GeminiGateway",
    "TextAdvisor",
]
