"""Tests for the EMI and GST calculators."""

from decimal import Decimal

import pytest

from balance_book.tools import GstMode, calculate_emi, calculate_gst


CENT = Decimal("0.01")


class TestEmi:
    """Tests for calculate_emi()."""

    def test_standard_loan(self):
        """Test 100000 at 10% over 5 years is about 2124.70 a month."""
        emi = calculate_emi(Decimal("100000"), Decimal("10"), 5)
        assert emi.months == 60
        assert emi.monthly_payment.quantize(CENT) == Decimal("2124.70")

    def test_totals(self):
        """Test total payment and interest follow from the EMI."""
        emi = calculate_emi(Decimal("100000"), Decimal("10"), 5)
        assert emi.total_payment == emi.monthly_payment * 60
        assert emi.total_interest == emi.total_payment - Decimal("100000")

    def test_zero_rate(self):
        """Test a zero rate spreads the principal evenly."""
        emi = calculate_emi(Decimal("12000"), Decimal("0"), 1)
        assert emi.monthly_payment == Decimal("1000")
        assert emi.total_interest == Decimal("0")

    def test_accepts_plain_numbers(self):
        """Test int and float inputs are accepted."""
        emi = calculate_emi(100000, 10, 5)
        assert emi.monthly_payment.quantize(CENT) == Decimal("2124.70")

    def test_rejects_zero_term(self):
        """Test a term shorter than a month is rejected."""
        with pytest.raises(ValueError):
            calculate_emi(Decimal("1000"), Decimal("5"), 0)


class TestGst:
    """Tests for calculate_gst()."""

    def test_exclusive(self):
        """Test GST added on top of a net amount."""
        result = calculate_gst(Decimal("1000"), Decimal("18"))
        assert result.net_amount == Decimal("1000")
        assert result.gst_amount == Decimal("180")
        assert result.total_amount == Decimal("1180")

    def test_inclusive(self):
        """Test GST extracted from a gross amount."""
        result = calculate_gst(Decimal("1180"), Decimal("18"), GstMode.INCLUSIVE)
        assert result.net_amount == Decimal("1000")
        assert result.gst_amount == Decimal("180")
        assert result.total_amount == Decimal("1180")

    def test_zero_rate(self):
        """Test a zero rate leaves the amount unchanged."""
        for mode in GstMode:
            result = calculate_gst(Decimal("500"), Decimal("0"), mode)
            assert result.gst_amount == Decimal("0")
            assert result.net_amount == result.total_amount == Decimal("500")
