"""
Shared fixtures for Balance Book tests.

No real API calls in tests: the AI gateway is replaced by the fakes below.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Optional

import pytest

from balance_book.currency import RateTable
from balance_book.models.advisor import Attachment
from balance_book.models.ledger import (
    BankAccount,
    Invoice,
    InvoiceStatus,
    Product,
    Transaction,
    TransactionCategory,
    TransactionType,
)
from balance_book.services.ai.interface import DocumentExtractor, TextAdvisor
from balance_book.services.storage import (
    InMemoryAuditStorage,
    InMemoryKeyValueBackend,
    LedgerStore,
)


class FakeAdvisor(TextAdvisor):
    """Returns a canned answer and remembers what it was asked."""

    def __init__(self, answer: str = "Your cash flow looks healthy."):
        self.answer = answer
        self.calls: list[tuple[str, dict, Optional[Attachment]]] = []

    async def ask(
        self,
        prompt: str,
        context: dict[str, Any],
        attachment: Optional[Attachment] = None,
    ) -> str:
        self.calls.append((prompt, context, attachment))
        return self.answer


class FakeExtractor(DocumentExtractor):
    """Returns a fixed payload validated against the requested schema."""

    def __init__(self, payload: Optional[dict[str, Any]] = None):
        self.payload = payload
        self.calls: list[Attachment] = []

    async def extract_structured(self, attachment, schema):
        self.calls.append(attachment)
        if self.payload is None:
            return None
        return schema.model_validate(self.payload)


def make_transaction(
    id: str,
    amount: str = "100",
    type: TransactionType = TransactionType.EXPENSE,
    category: TransactionCategory = TransactionCategory.OTHER,
    description: str = "Test entry",
) -> Transaction:
    return Transaction(
        id=id,
        entry_date=date(2024, 1, 1),
        description=description,
        amount=Decimal(amount),
        type=type,
        category=category,
    )


def make_invoice(
    id: str,
    due_date: date = date(2024, 1, 31),
    status: InvoiceStatus = InvoiceStatus.UNPAID,
    total: str = "1000",
) -> Invoice:
    return Invoice(
        id=id,
        invoice_number=f"INV-2024-{id}",
        customer_name="Acme Corp",
        issue_date=date(2024, 1, 1),
        due_date=due_date,
        status=status,
        total_amount=Decimal(total),
    )


def make_product(id: str, stock: int, threshold: int = 10) -> Product:
    return Product(
        id=id,
        name=f"Product {id}",
        sku=f"SKU-{id}",
        stock=stock,
        price=Decimal("10"),
        low_stock_threshold=threshold,
    )


def make_account(id: str, balance: str, currency: str) -> BankAccount:
    return BankAccount(
        id=id,
        bank_name=f"Bank {id}",
        account_number="**** 0000",
        balance=Decimal(balance),
        currency=currency,
    )


@pytest.fixture
def rates() -> RateTable:
    return RateTable.default()


@pytest.fixture
def backend() -> InMemoryKeyValueBackend:
    return InMemoryKeyValueBackend()


@pytest.fixture
def ledger(backend) -> LedgerStore:
    return LedgerStore(backend)


@pytest.fixture
def audit_storage() -> InMemoryAuditStorage:
    return InMemoryAuditStorage()
