"""Validation and duplicate detection for transaction drafts.

These functions never touch store state: they take the records to compare
against as an argument and return an error value (or None) instead of
raising, so the store decides when to raise.
"""
from decimal import Decimal, InvalidOperation
from typing import Iterable

from banktrade.core.exceptions import DuplicateError, TransactionStoreError, ValidationError
from banktrade.models.transaction import TransactionDraft, TransactionRecord, TransactionType


def parse_amount(value) -> Decimal | None:
    """Convert a raw amount to Decimal, or None if it is not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        # Floats go through str() so 0.1 stays 0.1 rather than its binary expansion.
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            return None
    else:
        return None
    if not amount.is_finite():
        return None
    return amount


def parse_type(value) -> TransactionType | None:
    """Resolve a member or its exact textual name; None when unrecognized."""
    if isinstance(value, TransactionType):
        return value
    if isinstance(value, str):
        try:
            return TransactionType(value)
        except ValueError:
            return None
    return None


def _is_blank(value) -> bool:
    return not isinstance(value, str) or not value.strip()


def validate_draft(draft: TransactionDraft) -> ValidationError | None:
    """Return the first field error in description, amount, type, category order."""
    if _is_blank(draft.description):
        return ValidationError("description", "Description cannot be empty")

    amount = parse_amount(draft.amount)
    if amount is None or amount <= 0:
        return ValidationError("amount", "Amount must be greater than 0")

    if draft.type is None:
        return ValidationError("type", "Type cannot be null")
    if parse_type(draft.type) is None:
        return ValidationError("type", f"Invalid transaction type: {draft.type}")

    if _is_blank(draft.category):
        return ValidationError("category", "Category cannot be empty")

    return None


def normalize_draft(draft: TransactionDraft) -> TransactionDraft:
    """Return a copy with amount as Decimal and type as TransactionType.

    Only meaningful for drafts that passed validate_draft.
    """
    return TransactionDraft(
        description=draft.description,
        amount=parse_amount(draft.amount),
        type=parse_type(draft.type),
        category=draft.category,
    )


def find_duplicate(
    draft: TransactionDraft,
    records: Iterable[TransactionRecord],
    exclude_id: int | None = None,
) -> TransactionRecord | None:
    """Find a record sharing the draft's business key.

    Args:
        draft: Normalized draft
        records: Snapshot of records to compare against
        exclude_id: Id of the record being updated, skipped in the comparison

    Returns:
        The first matching record, or None
    """
    key = (draft.description, draft.amount, draft.type, draft.category)
    for record in records:
        if exclude_id is not None and record.id == exclude_id:
            continue
        if record.business_key == key:
            return record
    return None


def check_draft(
    draft: TransactionDraft,
    records: Iterable[TransactionRecord],
    exclude_id: int | None = None,
) -> TransactionStoreError | None:
    """Run field validation, then the uniqueness check."""
    error = validate_draft(draft)
    if error is not None:
        return error

    duplicate = find_duplicate(normalize_draft(draft), records, exclude_id)
    if duplicate is not None:
        return DuplicateError(duplicate.id)
    return None
