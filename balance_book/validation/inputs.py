"""
Form Input Coercion

DESIGN DECISION: This is a lenient data-entry tool.
Numeric fields that don't parse become zero instead of being rejected;
negative quantities are clamped to zero. Anything stricter is left to the
page that renders the form.

The builders here turn raw form values into ledger records with fresh ids.
"""

import random
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Optional
from uuid import uuid4

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


def coerce_decimal(value: Any) -> Decimal:
    """Parse a number from user input; anything unparseable is zero."""
    if value is None or isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return Decimal("0")
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if not result.is_finite():
        return Decimal("0")
    return result


def coerce_int(value: Any) -> int:
    """Parse a whole number from user input, truncating any fraction."""
    return int(coerce_decimal(value))


def coerce_non_negative(value: Any) -> Decimal:
    return max(coerce_decimal(value), Decimal("0"))


def new_record_id(prefix: str = "") -> str:
    return f"{prefix}{uuid4().hex[:12]}"


def new_invoice_number(today: Optional[date] = None) -> str:
    year = (today or date.today()).year
    return f"INV-{year}-{random.randint(0, 999):03d}"


def build_transaction(
    description: str,
    amount: Any,
    type: TransactionType = TransactionType.EXPENSE,
    category: TransactionCategory = TransactionCategory.OTHER,
    entry_date: Optional[date] = None,
) -> Transaction:
    return Transaction(
        id=new_record_id(),
        entry_date=entry_date or date.today(),
        description=description,
        amount=coerce_non_negative(amount),
        type=type,
        category=category,
        status=TransactionStatus.COMPLETED,
    )


def build_product(
    name: str,
    sku: str,
    stock: Any,
    price: Any,
    low_stock_threshold: Any = 10,
) -> Product:
    return Product(
        id=new_record_id(),
        name=name,
        sku=sku,
        stock=max(coerce_int(stock), 0),
        price=coerce_non_negative(price),
        low_stock_threshold=max(coerce_int(low_stock_threshold), 0),
    )


def build_account(
    bank_name: str,
    account_number: str,
    balance: Any,
    currency: str,
) -> BankAccount:
    return BankAccount(
        id=new_record_id("ba_"),
        bank_name=bank_name,
        account_number=account_number,
        balance=coerce_non_negative(balance),
        currency=currency,
    )


def build_invoice(
    customer_name: str,
    due_date: date,
    lines: Iterable[dict[str, Any]],
    today: Optional[date] = None,
) -> Invoice:
    """
    Create a new Unpaid invoice from form lines.

    Each line is a dict with "description", "quantity", "unit_price" and
    optionally "tax_rate". The stored total is computed from the lines.
    """
    today = today or date.today()
    items = tuple(
        InvoiceItem(
            id=str(index),
            description=str(line.get("description", "")),
            quantity=coerce_non_negative(line.get("quantity")),
            unit_price=coerce_non_negative(line.get("unit_price")),
            tax_rate=coerce_non_negative(line.get("tax_rate")),
        )
        for index, line in enumerate(lines)
    )
    return Invoice(
        id=new_record_id("inv_"),
        invoice_number=new_invoice_number(today),
        customer_name=customer_name,
        issue_date=today,
        due_date=due_date,
        items=items,
        status=InvoiceStatus.UNPAID,
        total_amount=Invoice.compute_total(items),
    )
