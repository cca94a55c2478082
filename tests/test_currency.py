"""
Tests for multi-currency valuation.

Conversion goes through the base currency (USD):
    result = amount / rates[from] * rates[to]
"""

from decimal import Decimal

import pytest

from balance_book.currency import (
    RateTable,
    convert,
    convert_money,
    converted_balances,
    currency_info,
    exchange_rate,
    format_money,
    rate_for,
    total_liquidity,
)
from balance_book.models.ledger import Money

from conftest import make_account


TOLERANCE = Decimal("0.000001")


class TestConvert:
    """Tests for convert()."""

    @pytest.mark.parametrize("a,b", [("USD", "EUR"), ("EUR", "INR"), ("GBP", "JPY"), ("INR", "USD")])
    def test_round_trip_returns_original_amount(self, rates, a, b):
        """Test converting there and back gives the original amount."""
        x = Decimal("1234.56")
        there = convert(x, a, b, rates)
        back = convert(there, b, a, rates)
        assert abs(back - x) < TOLERANCE

    @pytest.mark.parametrize("code", ["USD", "EUR", "GBP", "INR", "JPY", "XYZ"])
    def test_same_currency_is_identity(self, rates, code):
        """Test converting a currency to itself changes nothing."""
        assert convert(Decimal("99.99"), code, code, rates) == Decimal("99.99")

    def test_usd_to_inr(self, rates):
        """Test a conversion out of the base currency."""
        assert convert(Decimal("100"), "USD", "INR", rates) == Decimal("8350")

    def test_eur_to_usd(self, rates):
        """Test a conversion into the base currency."""
        assert convert(Decimal("92"), "EUR", "USD", rates) == Decimal("100")

    def test_unknown_currency_uses_neutral_rate(self, rates):
        """Test an unknown code is treated as base units instead of raising."""
        assert rate_for("XYZ", rates) == Decimal("1")
        assert convert(Decimal("50"), "XYZ", "USD", rates) == Decimal("50")
        assert convert(Decimal("50"), "XYZ", "INR", rates) == Decimal("4175")

    def test_plain_mapping_is_accepted(self):
        """Test rates can be a plain dict."""
        rates = {"USD": Decimal("1"), "EUR": Decimal("0.5")}
        assert convert(Decimal("10"), "USD", "EUR", rates) == Decimal("5")

    def test_non_positive_rate_in_mapping_falls_back(self):
        """Test a zero rate is treated like a missing one."""
        rates = {"USD": Decimal("1"), "BAD": Decimal("0")}
        assert rate_for("BAD", rates) == Decimal("1")

    def test_lowercase_codes(self, rates):
        """Test currency codes are case-insensitive."""
        assert convert(Decimal("100"), "usd", "inr", rates) == Decimal("8350")

    def test_convert_money(self, rates):
        """Test Money conversion tags the result with the target currency."""
        result = convert_money(Money(amount=Decimal("100"), currency_code="USD"), "GBP", rates)
        assert result.currency_code == "GBP"
        assert result.amount == Decimal("79")

    def test_exchange_rate(self, rates):
        """Test the rate shown by the converter widget."""
        assert exchange_rate("USD", "INR", rates) == Decimal("83.50")
        assert exchange_rate("EUR", "EUR", rates) == Decimal("1")


class TestRateTable:
    """Tests for the RateTable model."""

    def test_default_table_has_five_currencies(self):
        """Test the built-in rate table."""
        table = RateTable.default()
        assert set(table.codes) == {"USD", "EUR", "GBP", "INR", "JPY"}
        assert table.get("usd") == Decimal("1")

    def test_rejects_non_positive_rate(self):
        """Test zero or negative rates are rejected."""
        with pytest.raises(ValueError):
            RateTable.from_mapping({"USD": 1, "EUR": 0})

    def test_normalizes_codes(self):
        """Test codes are uppercased."""
        table = RateTable.from_mapping({"usd": 1, " eur ": "0.9"})
        assert "EUR" in table
        assert table.get("EUR") == Decimal("0.9")
        assert len(table) == 2


class TestValuation:
    """Tests for total liquidity."""

    def test_scenario_usd_and_eur(self):
        """Test 100 USD + 100 EUR reported in USD is about 208.70."""
        rates = RateTable.from_mapping({"USD": 1, "EUR": "0.92"})
        accounts = [make_account("a1", "100", "USD"), make_account("a2", "100", "EUR")]
        total = total_liquidity(accounts, "USD", rates)
        assert total.quantize(Decimal("0.01")) == Decimal("208.70")
        assert format_money(total, "USD") == "$208.70"

    def test_additivity(self, rates):
        """Test the total of two accounts equals the sum of their totals."""
        a1 = make_account("a1", "1500.25", "GBP")
        a2 = make_account("a2", "320000", "JPY")
        combined = total_liquidity([a1, a2], "INR", rates)
        separate = total_liquidity([a1], "INR", rates) + total_liquidity([a2], "INR", rates)
        assert abs(combined - separate) < TOLERANCE

    def test_empty_list_is_zero(self, rates):
        """Test no accounts means zero liquidity."""
        assert total_liquidity([], "EUR", rates) == Decimal("0")

    def test_converted_balances(self, rates):
        """Test each account is paired with its converted balance."""
        accounts = [make_account("a1", "100", "USD")]
        [(account, converted)] = converted_balances(accounts, "INR", rates)
        assert account.id == "a1"
        assert converted == Decimal("8350")


class TestFormatMoney:
    """Tests for display formatting."""

    def test_usd(self):
        """Test two decimals and thousands separators."""
        assert format_money(Decimal("1234.5"), "USD") == "$1,234.50"

    def test_jpy_has_no_minor_units(self):
        """Test yen is shown without decimals."""
        assert format_money(Decimal("150.4"), "JPY") == "¥150"

    def test_rounds_half_up(self):
        """Test rounding happens only at display time, half up."""
        assert format_money(Decimal("0.125"), "EUR") == "€0.13"

    def test_negative(self):
        """Test the sign goes before the symbol."""
        assert format_money(Decimal("-12"), "GBP") == "-£12.00"

    def test_inr(self):
        """Test the rupee symbol."""
        assert format_money(Decimal("8350"), "INR") == "₹8,350.00"

    def test_unknown_code(self):
        """Test an unknown code is shown as a prefix."""
        assert format_money(Decimal("1234.5"), "xyz") == "XYZ 1,234.50"

    def test_currency_info(self):
        """Test currency metadata lookup."""
        assert currency_info("jpy").minor_units == 0
        assert currency_info("XYZ") is None
