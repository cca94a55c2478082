"""
Advisor and Receipt Models

Schemas for the data exchanged with the AI gateway:
- the conversation shown on the advisor page
- image attachments sent with a question or a receipt scan
- the structured receipt data the model is asked to return
- the transaction form pre-filled from that data

CRITICAL: A ReceiptExtraction is PROPOSED data, not a ledger record.
It only pre-fills the form; the user still saves the transaction.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from balance_book.models.ledger import TransactionCategory, TransactionType


class ChatRole(str, Enum):
    USER = "user"
    AI = "ai"


class ChatMessage(BaseModel):
    """One turn in the advisor conversation."""

    role: ChatRole
    content: str
    timestamp: datetime = Field(default_factory=datetime.now)


class Attachment(BaseModel):
    """An image sent to the model as MIME type + base64 payload."""

    mime_type: str
    data_base64: str = Field(..., min_length=1)

    @field_validator('mime_type')
    @classmethod
    def validate_mime_type(cls, v: str) -> str:
        """Only allow image types."""
        allowed = {'image/jpeg', 'image/png', 'image/webp'}
        if v.lower() not in allowed:
            raise ValueError(f"Unsupported image type: {v}. Allowed: {allowed}")
        return v.lower()


class ReceiptExtraction(BaseModel):
    """
    Data the model read off a receipt.

    All fields are optional because the model might miss any of them.
    Values that don't fit are dropped rather than rejecting the whole result.
    """
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    description: Optional[str] = None
    amount: Optional[Decimal] = None
    type: Optional[TransactionType] = None
    category: Optional[TransactionCategory] = None
    receipt_date: Optional[date] = Field(default=None, alias="date")

    @field_validator('amount', mode='before')
    @classmethod
    def lenient_amount(cls, v):
        if v in (None, ""):
            return None
        try:
            amount = Decimal(str(v))
        except ArithmeticError:
            return None
        if not amount.is_finite():
            return None
        # Direction comes from "type"; the form only takes magnitudes
        return abs(amount)

    @field_validator('type', mode='before')
    @classmethod
    def lenient_type(cls, v):
        if isinstance(v, str):
            for member in TransactionType:
                if member.value.lower() == v.strip().lower():
                    return member
            return None
        return v

    @field_validator('category', mode='before')
    @classmethod
    def lenient_category(cls, v):
        if isinstance(v, str):
            for member in TransactionCategory:
                if member.value.lower() == v.strip().lower():
                    return member
            return None
        return v

    @field_validator('receipt_date', mode='before')
    @classmethod
    def lenient_date(cls, v):
        if isinstance(v, str):
            try:
                return date.fromisoformat(v.strip()[:10])
            except ValueError:
                return None
        return v


class TransactionDraft(BaseModel):
    """
    Values for the "new transaction" form.

    Defaults mirror an empty form: an Expense in the Other category dated today.
    """

    description: str = ""
    amount: Decimal = Decimal("0")
    type: TransactionType = TransactionType.EXPENSE
    category: TransactionCategory = TransactionCategory.OTHER
    entry_date: date = Field(default_factory=date.today)

    @classmethod
    def from_extraction(
        cls,
        extraction: ReceiptExtraction,
        today: Optional[date] = None,
    ) -> "TransactionDraft":
        """Pre-fill the form, falling back to defaults for anything missing."""
        return cls(
            description=extraction.description or "",
            amount=abs(extraction.amount) if extraction.amount is not None else Decimal("0"),
            type=(
                TransactionType.INCOME
                if extraction.type == TransactionType.INCOME
                else TransactionType.EXPENSE
            ),
            category=extraction.category or TransactionCategory.OTHER,
            entry_date=extraction.receipt_date or today or date.today(),
        )
