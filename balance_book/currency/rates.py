"""
Rate Table and Currency Registry

A RateTable maps currency code -> units of that currency per ONE unit of
the base currency (USD):

    amount_in_base = amount / rate[C]
    amount_in_C    = amount_in_base * rate[C]

The table is immutable for the life of the process. To change rates,
build a new table (from settings or a mapping) and pass that in instead.
"""

from decimal import Decimal
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from balance_book.config import DEFAULT_EXCHANGE_RATES, AppSettings, get_settings


BASE_CURRENCY = "USD"


class CurrencyInfo(BaseModel):
    """Display metadata for a reporting currency."""
    model_config = ConfigDict(frozen=True)

    code: str
    symbol: str
    label: str
    minor_units: int = Field(
        default=2,
        ge=0,
        le=4,
        description="Decimal places shown when formatting"
    )


CURRENCIES: dict[str, CurrencyInfo] = {
    "USD": CurrencyInfo(code="USD", symbol="$", label="US Dollar ($)"),
    "EUR": CurrencyInfo(code="EUR", symbol="€", label="Euro (€)"),
    "GBP": CurrencyInfo(code="GBP", symbol="£", label="British Pound (£)"),
    "INR": CurrencyInfo(code="INR", symbol="₹", label="Indian Rupee (₹)"),
    "JPY": CurrencyInfo(code="JPY", symbol="¥", label="Japanese Yen (¥)", minor_units=0),
}


class RateTable(BaseModel):
    """
    Immutable exchange rate table.

    Lookups of codes that aren't in the table return None; the converter
    decides what to do about that.
    """
    model_config = ConfigDict(frozen=True)

    base_currency: str = BASE_CURRENCY
    rates: dict[str, Decimal]

    @field_validator('rates')
    @classmethod
    def validate_rates(cls, v: dict[str, Decimal]) -> dict[str, Decimal]:
        normalized = {}
        for code, rate in v.items():
            if rate <= 0:
                raise ValueError(f"Exchange rate for {code} must be positive, got {rate}")
            normalized[code.strip().upper()] = rate
        return normalized

    @classmethod
    def from_mapping(
        cls,
        rates: Mapping[str, Decimal | float | str],
        base_currency: str = BASE_CURRENCY,
    ) -> "RateTable":
        return cls(
            base_currency=base_currency,
            rates={code: Decimal(str(rate)) for code, rate in rates.items()},
        )

    @classmethod
    def default(cls) -> "RateTable":
        return cls(rates=dict(DEFAULT_EXCHANGE_RATES))

    def get(self, code: str) -> Optional[Decimal]:
        return self.rates.get(code.upper())

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and code.upper() in self.rates

    def __len__(self) -> int:
        return len(self.rates)

    @property
    def codes(self) -> list[str]:
        return list(self.rates)


def load_rate_table(settings: Optional[AppSettings] = None) -> RateTable:
    """Build the rate table from application settings."""
    settings = settings or get_settings().app
    return RateTable(rates=dict(settings.exchange_rates))


def currency_info(code: str) -> Optional[CurrencyInfo]:
    return CURRENCIES.get(code.upper())
