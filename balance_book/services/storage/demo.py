"""
Built-in demo dataset.

Used whenever a collection has never been saved, and by "reset to demo".
"""

from datetime import date
from decimal import Decimal

from balance_book.models.ledger import (
    BankAccount,
    Invoice,
    InvoiceItem,
    InvoiceStatus,
    Product,
    Transaction,
    TransactionCategory,
    TransactionStatus,
    TransactionType,
)


DEMO_TRANSACTIONS: tuple[Transaction, ...] = (
    Transaction(
        id="1",
        entry_date=date(2023, 10, 25),
        description="Q3 Consulting Services",
        amount=Decimal("12500.00"),
        type=TransactionType.INCOME,
        category=TransactionCategory.SALES,
    ),
    Transaction(
        id="2",
        entry_date=date(2023, 10, 26),
        description="Office Rent - October",
        amount=Decimal("2000.00"),
        type=TransactionType.EXPENSE,
        category=TransactionCategory.RENT,
    ),
    Transaction(
        id="3",
        entry_date=date(2023, 10, 27),
        description="Client Meeting Travel",
        amount=Decimal("450.50"),
        type=TransactionType.EXPENSE,
        category=TransactionCategory.TRAVEL,
        status=TransactionStatus.PENDING,
        receipt_url="https://picsum.photos/200/300",
    ),
    Transaction(
        id="4",
        entry_date=date(2023, 10, 28),
        description="Software Licenses",
        amount=Decimal("199.00"),
        type=TransactionType.EXPENSE,
        category=TransactionCategory.TOOLS,
    ),
    Transaction(
        id="5",
        entry_date=date(2023, 10, 29),
        description="Product Sale - Bulk",
        amount=Decimal("5600.00"),
        type=TransactionType.INCOME,
        category=TransactionCategory.SALES,
    ),
)

DEMO_INVOICES: tuple[Invoice, ...] = (
    Invoice(
        id="inv_001",
        invoice_number="INV-2023-001",
        customer_name="Acme Corp Global",
        issue_date=date(2023, 10, 1),
        due_date=date(2023, 10, 31),
        status=InvoiceStatus.UNPAID,
        total_amount=Decimal("5400.00"),
        items=(
            InvoiceItem(
                id="1",
                description="Consulting Hours",
                quantity=Decimal("10"),
                unit_price=Decimal("500"),
                tax_rate=Decimal("8"),
            ),
        ),
    ),
    Invoice(
        id="inv_002",
        invoice_number="INV-2023-002",
        customer_name="Stark Industries",
        issue_date=date(2023, 9, 15),
        due_date=date(2023, 10, 15),
        status=InvoiceStatus.OVERDUE,
        total_amount=Decimal("12000.00"),
    ),
    Invoice(
        id="inv_003",
        invoice_number="INV-2023-003",
        customer_name="Wayne Enterprises",
        issue_date=date(2023, 10, 20),
        due_date=date(2023, 11, 20),
        status=InvoiceStatus.PAID,
        total_amount=Decimal("3500.00"),
    ),
)

DEMO_INVENTORY: tuple[Product, ...] = (
    Product(id="p1", name="Ergonomic Chair", sku="FUR-001", stock=45,
            price=Decimal("250"), low_stock_threshold=10),
    Product(id="p2", name="Wireless Mouse", sku="TEC-002", stock=8,
            price=Decimal("45"), low_stock_threshold=15),
    Product(id="p3", name="Mechanical Keyboard", sku="TEC-003", stock=120,
            price=Decimal("120"), low_stock_threshold=20),
)

DEMO_ACCOUNTS: tuple[BankAccount, ...] = (
    BankAccount(id="ba1", bank_name="Chase Business", account_number="**** 4321",
                balance=Decimal("145200.50"), currency="USD"),
    BankAccount(id="ba2", bank_name="Wise International", account_number="**** 8899",
                balance=Decimal("12500.00"), currency="EUR"),
)
