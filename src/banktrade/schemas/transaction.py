"""Pydantic schemas for transaction API requests and responses."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from banktrade.models.transaction import TransactionDraft, TransactionType


class TransactionRequest(BaseModel):
    """Body for creating or replacing a transaction.

    Every field is optional here so that missing values reach the store and
    come back as a field-specific validation error. Unknown fields such as
    ``id`` or ``created_at`` are ignored.
    """

    description: str | None = Field(None, description="What the transaction was for")
    amount: Decimal | None = Field(None, description="Positive amount, e.g. \"5000.00\"")
    type: str | None = Field(None, description="INCOME or EXPENSE")
    category: str | None = Field(None, description="Free-form category name")

    model_config = ConfigDict(extra="ignore")

    def to_draft(self) -> TransactionDraft:
        return TransactionDraft(
            description=self.description,
            amount=self.amount,
            type=self.type,
            category=self.category,
        )


class TransactionResponse(BaseModel):
    """Transaction data for API responses."""

    id: int
    description: str
    amount: Decimal = Field(description="Exact decimal amount, serialized as a string")
    type: TransactionType
    category: str
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class TransactionPage(BaseModel):
    """One page of a transaction listing."""

    content: list[TransactionResponse]
    page: int = Field(description="Current page number (0-indexed)")
    size: int = Field(description="Requested page size")
    total_elements: int = Field(description="Number of matching transactions across all pages")
    total_pages: int = Field(description="Total number of pages")
    first: bool = Field(description="Whether this is the first page")
    last: bool = Field(description="Whether this is the last page")
