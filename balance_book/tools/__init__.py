"""Financial calculators (EMI, GST)."""

from balance_book.tools.calculators import (
    EmiBreakdown,
    GstBreakdown,
    GstMode,
    calculate_emi,
    calculate_gst,
)

__all__ = [
    "EmiBreakdown",
    "GstBreakdown",
    "GstMode",
    "calculate_emi",
    "calculate_gst",
]
