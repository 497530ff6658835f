"""Domain models."""
from banktrade.models.transaction import TransactionDraft, TransactionRecord, TransactionType

__all__ = ["TransactionDraft", "TransactionRecord", "TransactionType"]
