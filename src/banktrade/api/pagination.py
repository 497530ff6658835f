"""Slice full result lists into pages."""
from typing import Sequence

from banktrade.models.transaction import TransactionRecord
from banktrade.schemas.transaction import TransactionPage, TransactionResponse


def paginate(records: Sequence[TransactionRecord], page: int, size: int) -> TransactionPage:
    """Build a page from the complete list of matching records.

    A page past the end is returned empty rather than rejected.

    Args:
        records: Every matching record, already ordered
        page: Page number (0-indexed)
        size: Items per page (positive)

    Returns:
        TransactionPage with the requested slice and paging metadata
    """
    total = len(records)
    start = min(page * size, total)
    end = min(start + size, total)
    total_pages = (total + size - 1) // size if total > 0 else 0

    return TransactionPage(
        content=[TransactionResponse.model_validate(r) for r in records[start:end]],
        page=page,
        size=size,
        total_elements=total,
        total_pages=total_pages,
        first=page == 0,
        last=page + 1 >= total_pages,
    )
