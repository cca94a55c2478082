"""Multi-currency valuation: rate table, converter and aggregator."""

from balance_book.currency.rates import (
    BASE_CURRENCY,
    CURRENCIES,
    CurrencyInfo,
    RateTable,
    currency_info,
    load_rate_table,
)
from balance_book.currency.converter import (
    RateSource,
    convert,
    convert_money,
    exchange_rate,
    format_money,
    rate_for,
)
from balance_book.currency.valuation import converted_balances, total_liquidity

__all__ = [
    "BASE_CURRENCY",
    "CURRENCIES",
    "CurrencyInfo",
    "RateSource",
    "RateTable",
    "convert",
    "convert_money",
    "converted_balances",
    "currency_info",
    "exchange_rate",
    "format_money",
    "load_rate_table",
    "rate_for",
    "total_liquidity",
]
