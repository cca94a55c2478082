"""Dashboard aggregations and list filters."""

from balance_book.reports.summary import (
    CashFlowSummary,
    MonthlyCashFlow,
    expenses_by_category,
    filter_products,
    filter_transactions,
    monthly_cash_flow,
    outstanding_invoices,
    summarize_transactions,
    total_receivables,
)

__all__ = [
    "CashFlowSummary",
    "MonthlyCashFlow",
    "expenses_by_category",
    "filter_products",
    "filter_transactions",
    "monthly_cash_flow",
    "outstanding_invoices",
    "summarize_transactions",
    "total_receivables",
]
