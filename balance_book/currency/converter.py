"""
Currency Converter

Converts amounts between currencies through the base currency of a
RateTable. Everything here is a pure function: no globals, no storage,
no clock.

DEGRADED MODE: A currency with no rate is treated as if it were already
in base units (multiplier 1). Reporting must never crash because one
account carries an unknown code, so this logs a warning instead of raising.

Amounts keep full Decimal precision. Rounding only happens in
format_money(), at the presentation boundary.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Union

import structlog

from balance_book.currency.rates import CURRENCIES, RateTable
from balance_book.models.ledger import Money


logger = structlog.get_logger(__name__)

RateSource = Union[RateTable, Mapping[str, Decimal]]

_NEUTRAL_RATE = Decimal("1")


def _to_decimal(amount) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount))


def rate_for(code: str, rates: RateSource) -> Decimal:
    """
    Look up a currency's rate, falling back to the neutral multiplier.
    """
    rate = rates.get(code.upper())
    if rate is None or _to_decimal(rate) <= 0:
        logger.warning("unknown_currency_rate", currency=code)
        return _NEUTRAL_RATE
    return _to_decimal(rate)


def convert(
    amount: Decimal,
    from_currency: str,
    to_currency: str,
    rates: RateSource,
) -> Decimal:
    """
    Convert amount from one currency to another via the base currency.

        base   = amount / rates[from]
        result = base * rates[to]
    """
    amount = _to_decimal(amount)
    if from_currency.upper() == to_currency.upper():
        return amount

    base = amount / rate_for(from_currency, rates)
    return base * rate_for(to_currency, rates)


def convert_money(money: Money, to_currency: str, rates: RateSource) -> Money:
    return Money(
        amount=convert(money.amount, money.currency_code, to_currency, rates),
        currency_code=to_currency,
    )


def exchange_rate(from_currency: str, to_currency: str, rates: RateSource) -> Decimal:
    """How many units of to_currency one unit of from_currency buys."""
    return rate_for(to_currency, rates) / rate_for(from_currency, rates)


def format_money(amount: Decimal, currency_code: str) -> str:
    """
    Format an amount for display, e.g. "$1,234.50", "-€12.00", "¥150".

    Unknown codes render as "XYZ 1,234.50".
    """
    amount = _to_decimal(amount)
    info = CURRENCIES.get(currency_code.upper())
    places = info.minor_units if info else 2

    quantum = Decimal(1).scaleb(-places)
    rounded = amount.quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    digits = f"{abs(rounded):,.{places}f}"

    if info:
        return f"{sign}{info.symbol}{digits}"
    return f"{sign}{currency_code.upper()} {digits}"
