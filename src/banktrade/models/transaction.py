"""Transaction values held by the in-memory store."""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class TransactionType(str, Enum):
    """Direction of money movement."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


BusinessKey = tuple[str, Decimal, TransactionType, str]


@dataclass(frozen=True)
class TransactionDraft:
    """Caller-supplied field values for a create or update.

    Fields may be missing or malformed; the store validates them before
    anything is written. ``type`` may be a member or its textual name.
    """

    description: str | None = None
    amount: Decimal | int | str | None = None
    type: TransactionType | str | None = None
    category: str | None = None


@dataclass(frozen=True)
class TransactionRecord:
    """A stored transaction. Instances are immutable snapshots."""

    id: int
    description: str
    amount: Decimal
    type: TransactionType
    category: str
    created_at: datetime
    updated_at: datetime

    @property
    def business_key(self) -> BusinessKey:
        return (self.description, self.amount, self.type, self.category)

    def __repr__(self) -> str:
        return f"<TransactionRecord(id={self.id}, type={self.type.value}, amount={self.amount})>"
