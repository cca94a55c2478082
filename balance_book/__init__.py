"""
Balance Book - Source Package

A small-business bookkeeping dashboard: transactions, invoices,
bank accounts and inventory, with multi-currency valuation,
due-date and stock alerts, and an AI advisor.

DESIGN PRINCIPLES:
1. The valuation and alerting core is pure - rates, currency and
   "today" are passed in, never read from globals
2. Reporting never crashes on bad data (unknown currency, bad numbers)
3. The AI is an opaque collaborator behind a narrow interface
4. Storage is swappable behind a key-value backend
5. Every significant action is auditable
"""

__version__ = "1.0.0"
__author__ = "Balance Book Team"
