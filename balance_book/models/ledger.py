"""
Core Ledger Models for Balance Book

These models define the schemas for everything the Ledger Store holds:
transactions, invoices, bank accounts, inventory and the user profile.

DESIGN DECISION: Ledger records are FROZEN.
A snapshot handed out by the Ledger Store cannot be mutated by a reader;
changes go through the store, which builds new records with model_copy().

Field names are snake_case in Python and camelCase on the wire
(persisted JSON and the advisor context), matching the stored format.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """Direction of a transaction."""
    INCOME = "Income"
    EXPENSE = "Expense"


class TransactionCategory(str, Enum):
    """Supported transaction categories."""
    SALES = "Sales"
    SALARY = "Salary"
    TRAVEL = "Travel"
    TOOLS = "Tools"
    RENT = "Rent"
    MARKETING = "Marketing"
    OTHER = "Other"


class TransactionStatus(str, Enum):
    COMPLETED = "Completed"
    PENDING = "Pending"


class InvoiceStatus(str, Enum):
    """
    Invoice payment status.

    NOTE: Overdue is an explicit status, not derived from the due date.
    An Unpaid invoice past its due date stays Unpaid until someone flips it.
    """
    UNPAID = "Unpaid"
    PAID = "Paid"
    OVERDUE = "Overdue"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


def _record_config() -> ConfigDict:
    return ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# =============================================================================
# MONEY
# =============================================================================

class Money(BaseModel):
    """
    An amount tagged with its currency.

    The amount may be negative only for derived deltas; stored balances
    are validated on the records that hold them.
    """
    model_config = _record_config()

    amount: Decimal
    currency_code: str = Field(
        ...,
        min_length=3,
        max_length=3,
        description="ISO-style currency code, e.g. USD"
    )

    @field_validator('currency_code')
    @classmethod
    def uppercase_code(cls, v: str) -> str:
        return v.upper()


# =============================================================================
# LEDGER RECORDS
# =============================================================================

class Transaction(BaseModel):
    """A single income or expense entry."""
    model_config = _record_config()

    id: str = Field(..., min_length=1)
    entry_date: date = Field(
        ...,
        alias="date",
        description="Date the transaction happened"
    )
    description: str = Field(
        ...,
        max_length=500,
        description="What the money was for"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Always positive; direction comes from type"
    )
    type: TransactionType
    category: TransactionCategory = TransactionCategory.OTHER
    status: TransactionStatus = TransactionStatus.COMPLETED
    receipt_url: Optional[str] = None


class InvoiceItem(BaseModel):
    """One billed line on an invoice."""
    model_config = _record_config()

    id: str
    description: str = Field(default="", max_length=200)
    quantity: Decimal = Field(default=Decimal("1"), ge=0)
    unit_price: Decimal = Field(default=Decimal("0"), ge=0)
    tax_rate: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Tax as a percentage of the line amount"
    )

    @property
    def line_total(self) -> Decimal:
        """Line amount including tax."""
        net = self.quantity * self.unit_price
        return net + net * self.tax_rate / Decimal(100)


class Invoice(BaseModel):
    """
    An invoice issued to a customer.

    total_amount is stored rather than recomputed, so imported invoices
    without line items still carry their value.
    """
    model_config = _record_config()

    id: str = Field(..., min_length=1)
    invoice_number: str = Field(..., min_length=1, max_length=50)
    customer_name: str = Field(..., min_length=1, max_length=200)
    issue_date: date = Field(..., alias="date")
    due_date: date
    items: tuple[InvoiceItem, ...] = ()
    status: InvoiceStatus = InvoiceStatus.UNPAID
    total_amount: Decimal = Field(default=Decimal("0"), ge=0)

    @staticmethod
    def compute_total(items: list[InvoiceItem] | tuple[InvoiceItem, ...]) -> Decimal:
        """Sum of line totals, tax included."""
        return sum((item.line_total for item in items), Decimal("0"))

    @property
    def is_outstanding(self) -> bool:
        return self.status != InvoiceStatus.PAID


class Product(BaseModel):
    """An inventory item."""
    model_config = _record_config()

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    sku: str = Field(default="", max_length=50)
    stock: int = Field(default=0, ge=0)
    price: Decimal = Field(default=Decimal("0"), ge=0)
    low_stock_threshold: int = Field(default=10, ge=0)

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.low_stock_threshold


class BankAccount(BaseModel):
    """
    A bank account balance held in its own currency.

    The valuation core only reads these.
    """
    model_config = _record_config()

    id: str = Field(..., min_length=1)
    bank_name: str = Field(..., min_length=1, max_length=200)
    account_number: str = Field(default="", max_length=50)
    balance: Decimal = Field(..., ge=0)
    currency: str = Field(..., min_length=3, max_length=3)

    @field_validator('currency')
    @classmethod
    def uppercase_currency(cls, v: str) -> str:
        return v.upper()

    @property
    def money(self) -> Money:
        return Money(amount=self.balance, currency_code=self.currency)


class UserProfile(BaseModel):
    """The signed-in user's profile."""
    model_config = _record_config()

    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(default="", max_length=200)
    role: str = Field(default="Owner", max_length=50)
    avatar: Optional[str] = None
