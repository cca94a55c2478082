"""Tests for lenient form input coercion and record builders."""

from datetime import date
from decimal import Decimal

import pytest

from balance_book.models.ledger import InvoiceStatus, TransactionCategory, TransactionType
from balance_book.validation import (
    build_account,
    build_invoice,
    build_product,
    build_transaction,
    coerce_decimal,
    coerce_int,
    coerce_non_negative,
    new_invoice_number,
    new_record_id,
)


class TestCoercion:
    """Tests for numeric coercion."""

    @pytest.mark.parametrize("raw,expected", [
        ("12.50", Decimal("12.50")),
        (" 1,234.5 ", Decimal("1234.5")),
        (7, Decimal("7")),
        (2.5, Decimal("2.5")),
        ("", Decimal("0")),
        ("abc", Decimal("0")),
        (None, Decimal("0")),
        (True, Decimal("0")),
        ("NaN", Decimal("0")),
        ("Infinity", Decimal("0")),
    ])
    def test_coerce_decimal(self, raw, expected):
        """Test unparseable input becomes zero."""
        assert coerce_decimal(raw) == expected

    def test_coerce_int_truncates(self):
        """Test whole numbers are truncated."""
        assert coerce_int("7.9") == 7
        assert coerce_int("oops") == 0

    def test_coerce_non_negative(self):
        """Test negatives are clamped to zero."""
        assert coerce_non_negative("-5") == Decimal("0")
        assert coerce_non_negative("5") == Decimal("5")


class TestIdentifiers:
    """Tests for generated ids."""

    def test_record_ids_are_unique(self):
        """Test fresh ids don't collide."""
        ids = {new_record_id("inv_") for _ in range(50)}
        assert len(ids) == 50
        assert all(i.startswith("inv_") for i in ids)

    def test_invoice_number_format(self):
        """Test invoice numbers look like INV-YYYY-NNN."""
        number = new_invoice_number(date(2024, 5, 1))
        assert number.startswith("INV-2024-")
        assert len(number) == len("INV-2024-000")


class TestBuilders:
    """Tests for record builders."""

    def test_build_transaction(self):
        """Test a transaction from form values."""
        transaction = build_transaction(
            "Team lunch", "-20", TransactionType.EXPENSE, TransactionCategory.OTHER, date(2024, 2, 2)
        )
        assert transaction.amount == Decimal("0")
        assert transaction.entry_date == date(2024, 2, 2)
        assert transaction.id

    def test_build_product(self):
        """Test a product from form values."""
        product = build_product("Desk", "FUR-9", "-3", "199.99", "x")
        assert product.stock == 0
        assert product.price == Decimal("199.99")
        assert product.low_stock_threshold == 0

    def test_build_account(self):
        """Test an account from form values."""
        account = build_account("Chase", "**** 1", "1,000", "usd")
        assert account.balance == Decimal("1000")
        assert account.currency == "USD"
        assert account.id.startswith("ba_")

    def test_build_invoice(self):
        """Test a new invoice is Unpaid and totals its lines with tax."""
        invoice = build_invoice(
            "Acme Corp",
            date(2024, 3, 31),
            [
                {"description": "Hours", "quantity": "10", "unit_price": "500", "tax_rate": "8"},
                {"description": "Setup", "quantity": 1, "unit_price": 100},
            ],
            today=date(2024, 3, 1),
        )
        assert invoice.status == InvoiceStatus.UNPAID
        assert invoice.issue_date == date(2024, 3, 1)
        assert invoice.total_amount == Decimal("5500")
        assert len(invoice.items) == 2
        assert invoice.invoice_number.startswith("INV-2024-")
