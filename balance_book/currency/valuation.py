"""
Valuation Aggregator

Normalizes account balances held in different currencies into one
reporting-currency figure.
"""

from decimal import Decimal
from typing import Iterable

from balance_book.currency.converter import RateSource, convert
from balance_book.models.ledger import BankAccount


def total_liquidity(
    accounts: Iterable[BankAccount],
    reporting_currency: str,
    rates: RateSource,
) -> Decimal:
    """
    Sum of all balances converted to the reporting currency.

    Sums in input order so results are reproducible. An empty list is zero.
    """
    total = Decimal("0")
    for account in accounts:
        total += convert(account.balance, account.currency, reporting_currency, rates)
    return total


def converted_balances(
    accounts: Iterable[BankAccount],
    reporting_currency: str,
    rates: RateSource,
) -> list[tuple[BankAccount, Decimal]]:
    """Each account paired with its balance in the reporting currency."""
    return [
        (account, convert(account.balance, account.currency, reporting_currency, rates))
        for account in accounts
    ]
