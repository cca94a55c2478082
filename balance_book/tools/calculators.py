"""
Financial Calculators

Loan EMI (equated monthly instalment) and GST (goods and services tax)
calculators from the Tools page. Pure Decimal arithmetic; results are
NOT rounded so they can be formatted in any currency.
"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel


class EmiBreakdown(BaseModel):
    """Result of an EMI calculation."""

    monthly_payment: Decimal
    months: int
    total_payment: Decimal
    total_interest: Decimal


class GstMode(str, Enum):
    EXCLUSIVE = "exclusive"  # amount is before tax, GST is added on top
    INCLUSIVE = "inclusive"  # amount already contains GST


class GstBreakdown(BaseModel):
    """Result of a GST calculation."""

    net_amount: Decimal
    gst_amount: Decimal
    total_amount: Decimal


def calculate_emi(principal: Decimal, annual_rate_percent: Decimal, years: int) -> EmiBreakdown:
    """
    Standard amortization formula:

        EMI = P * r * (1 + r)^n / ((1 + r)^n - 1)

    with r the monthly rate (annual % / 12 / 100) and n the number of months.
    A zero rate spreads the principal evenly.

    Raises:
        ValueError: If the term is not at least one month
    """
    principal = Decimal(str(principal))
    months = int(years) * 12
    if months <= 0:
        raise ValueError("Loan term must be at least one year")

    r = Decimal(str(annual_rate_percent)) / Decimal(12) / Decimal(100)
    if r == 0:
        emi = principal / months
    else:
        growth = (1 + r) ** months
        emi = principal * r * growth / (growth - 1)

    total_payment = emi * months
    return EmiBreakdown(
        monthly_payment=emi,
        months=months,
        total_payment=total_payment,
        total_interest=total_payment - principal,
    )


def calculate_gst(
    amount: Decimal,
    rate_percent: Decimal,
    mode: GstMode = GstMode.EXCLUSIVE,
) -> GstBreakdown:
    """
    Split an amount into net, GST and total.

    EXCLUSIVE: gst = amount * rate / 100, total = amount + gst
    INCLUSIVE: gst = amount - amount * 100 / (100 + rate), net = amount - gst
    """
    amount = Decimal(str(amount))
    rate = Decimal(str(rate_percent))

    if mode == GstMode.EXCLUSIVE:
        gst = amount * rate / 100
        return GstBreakdown(net_amount=amount, gst_amount=gst, total_amount=amount + gst)

    gst = amount - amount * 100 / (100 + rate)
    return GstBreakdown(net_amount=amount - gst, gst_amount=gst, total_amount=amount)
