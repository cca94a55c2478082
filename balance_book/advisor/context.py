"""
Advisor Context Builder

Builds the JSON snapshot the advisor model reasons over. This is the ONLY
view of the ledger the model gets, so its shape is a wire contract:

{
  "summary": "User Financial Data",
  "reportingCurrency": "INR",
  "financialSnapshot": {
    "totalLiquidAssets": ...,
    "accountDetails": [{"bank": ..., "balance": ..., "currency": ...}]
  },
  "recentTransactions": [...],
  "outstandingInvoices": [...]
}
"""

from decimal import Decimal
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from balance_book.currency.converter import RateSource
from balance_book.currency.valuation import total_liquidity
from balance_book.models.ledger import BankAccount, Invoice, Transaction


CONTEXT_SUMMARY = "User Financial Data"
DEFAULT_RECENT_LIMIT = 10


class _WireModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class AccountDetail(_WireModel):
    """An account balance in its own currency."""

    bank: str
    balance: Decimal
    currency: str


class FinancialSnapshot(_WireModel):
    total_liquid_assets: Decimal
    account_details: list[AccountDetail] = Field(default_factory=list)


class AdvisorContext(_WireModel):
    """Everything the advisor is allowed to know about the ledger."""

    summary: str = CONTEXT_SUMMARY
    reporting_currency: str
    financial_snapshot: FinancialSnapshot
    recent_transactions: list[Transaction] = Field(default_factory=list)
    outstanding_invoices: list[Invoice] = Field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(by_alias=True, mode="json")


def build_advisor_context(
    accounts: Iterable[BankAccount],
    transactions: Iterable[Transaction],
    invoices: Iterable[Invoice],
    reporting_currency: str,
    rates: RateSource,
    recent_limit: int = DEFAULT_RECENT_LIMIT,
) -> AdvisorContext:
    """
    Snapshot the ledger for one advisor question.

    Transactions are taken in store order (newest first), so the first
    recent_limit of them are the most recent. Paid invoices are left out.
    """
    accounts = list(accounts)
    reporting_currency = reporting_currency.upper()

    recent: list[Transaction] = []
    for transaction in transactions:
        if len(recent) >= max(recent_limit, 0):
            break
        recent.append(transaction)

    return AdvisorContext(
        reporting_currency=reporting_currency,
        financial_snapshot=FinancialSnapshot(
            total_liquid_assets=total_liquidity(accounts, reporting_currency, rates),
            account_details=[
                AccountDetail(
                    bank=account.bank_name,
                    balance=account.balance,
                    currency=account.currency,
                )
                for account in accounts
            ],
        ),
        recent_transactions=recent,
        outstanding_invoices=[invoice for invoice in invoices if invoice.is_outstanding],
    )
