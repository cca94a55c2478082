"""Lenient coercion of form input into ledger records."""

from balance_book.validation.inputs import (
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

__all__ = [
    "build_account",
    "build_invoice",
    "build_product",
    "build_transaction",
    "coerce_decimal",
    "coerce_int",
    "coerce_non_negative",
    "new_invoice_number",
    "new_record_id",
]
