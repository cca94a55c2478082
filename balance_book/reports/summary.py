"""
Dashboard Reports

Deterministic aggregations over ledger snapshots for the dashboard and
list pages: income/expense totals and their monthly trend, outstanding
receivables, and the search filters used by the transaction and
inventory tables.

Transaction amounts carry no currency of their own; they are recorded
in the reporting currency and summed as-is.
"""

from decimal import Decimal
from typing import Iterable

from pydantic import BaseModel

from balance_book.models.ledger import (
    Invoice,
    Product,
    Transaction,
    TransactionCategory,
    TransactionType,
)


class CashFlowSummary(BaseModel):
    """Headline numbers for the dashboard."""

    total_income: Decimal
    total_expense: Decimal
    net_profit: Decimal
    transaction_count: int


def summarize_transactions(transactions: Iterable[Transaction]) -> CashFlowSummary:
    income = Decimal("0")
    expense = Decimal("0")
    count = 0
    for transaction in transactions:
        count += 1
        if transaction.type == TransactionType.INCOME:
            income += transaction.amount
        else:
            expense += transaction.amount

    return CashFlowSummary(
        total_income=income,
        total_expense=expense,
        net_profit=income - expense,
        transaction_count=count,
    )


def expenses_by_category(
    transactions: Iterable[Transaction],
) -> dict[TransactionCategory, Decimal]:
    """Expense totals grouped by category, largest first."""
    groups: dict[TransactionCategory, Decimal] = {}
    for transaction in transactions:
        if transaction.type != TransactionType.EXPENSE:
            continue
        groups[transaction.category] = (
            groups.get(transaction.category, Decimal("0")) + transaction.amount
        )
    return dict(sorted(groups.items(), key=lambda item: item[1], reverse=True))


class MonthlyCashFlow(BaseModel):
    """Income and expense totals for one calendar month."""

    month: str  # YYYY-MM
    income: Decimal
    expense: Decimal


def monthly_cash_flow(transactions: Iterable[Transaction]) -> list[MonthlyCashFlow]:
    """Income and expense per month, oldest month first."""
    income: dict[str, Decimal] = {}
    expense: dict[str, Decimal] = {}
    for transaction in transactions:
        month = transaction.entry_date.strftime("%Y-%m")
        income.setdefault(month, Decimal("0"))
        expense.setdefault(month, Decimal("0"))
        if transaction.type == TransactionType.INCOME:
            income[month] += transaction.amount
        else:
            expense[month] += transaction.amount

    return [
        MonthlyCashFlow(month=month, income=income[month], expense=expense[month])
        for month in sorted(income)
    ]


def outstanding_invoices(invoices: Iterable[Invoice]) -> list[Invoice]:
    """Invoices that are not Paid, in input order."""
    return [invoice for invoice in invoices if invoice.is_outstanding]


def total_receivables(invoices: Iterable[Invoice]) -> Decimal:
    return sum(
        (invoice.total_amount for invoice in outstanding_invoices(invoices)),
        Decimal("0"),
    )


def filter_transactions(
    transactions: Iterable[Transaction],
    search_term: str,
) -> list[Transaction]:
    """Case-insensitive match on description or category."""
    term = search_term.strip().lower()
    return [
        t for t in transactions
        if term in t.description.lower() or term in t.category.value.lower()
    ]


def filter_products(products: Iterable[Product], search_term: str) -> list[Product]:
    """Case-insensitive match on name or SKU."""
    term = search_term.strip().lower()
    return [p for p in products if term in p.name.lower() or term in p.sku.lower()]
