"""Advisor context: the ledger snapshot sent to the AI advisor."""

from balance_book.advisor.context import (
    CONTEXT_SUMMARY,
    DEFAULT_RECENT_LIMIT,
    AccountDetail,
    AdvisorContext,
    FinancialSnapshot,
    build_advisor_context,
)

__all__ = [
    "CONTEXT_SUMMARY",
    "DEFAULT_RECENT_LIMIT",
    "AccountDetail",
    "AdvisorContext",
    "FinancialSnapshot",
    "build_advisor_context",
]
