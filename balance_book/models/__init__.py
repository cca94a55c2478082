"""
Data Models Package

This package contains all Pydantic models used in Balance Book.
All data flowing through the system must conform to these schemas.
"""

from balance_book.models.ledger import (
    BankAccount,
    Invoice,
    InvoiceItem,
    InvoiceStatus,
    Money,
    Product,
    Theme,
    Transaction,
    TransactionCategory,
    TransactionStatus,
    TransactionType,
    UserProfile,
)
from balance_book.models.notification import Notification, NotificationSeverity
from balance_book.models.advisor import (
    Attachment,
    ChatMessage,
    ChatRole,
    ReceiptExtraction,
    TransactionDraft,
)
from balance_book.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "BankAccount",
    "Invoice",
    "InvoiceItem",
    "InvoiceStatus",
    "Money",
    "Product",
    "Theme",
    "Transaction",
    "TransactionCategory",
    "TransactionStatus",
    "TransactionType",
    "UserProfile",
    # Notifications
    "Notification",
    "NotificationSeverity",
    # Advisor models
    "Attachment",
    "ChatMessage",
    "ChatRole",
    "ReceiptExtraction",
    "TransactionDraft",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
