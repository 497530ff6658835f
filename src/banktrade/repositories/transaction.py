"""In-memory transaction repository."""
import logging
import threading
from datetime import datetime, timezone
from typing import Callable

from banktrade.core.exceptions import NotFoundError, ValidationError
from banktrade.models.transaction import TransactionDraft, TransactionRecord, TransactionType
from banktrade.repositories.checks import check_draft, normalize_draft, parse_type

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TransactionStore:
    """Lock-guarded collection of transaction records keyed by id.

    Every mutation performs its checks and its write while holding the same
    lock, so id allocation and the uniqueness check cannot interleave with
    another writer. Returned records are frozen, so callers cannot change
    store state through them.

    Args:
        clock: Returns the current aware datetime. Defaults to UTC now.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None):
        self._records: dict[int, TransactionRecord] = {}
        self._next_id = 1
        self._lock = threading.Lock()
        self._clock = clock or _utcnow

    def create(self, draft: TransactionDraft) -> TransactionRecord:
        """Validate and store a new transaction.

        Args:
            draft: Candidate field values

        Returns:
            The stored record with its assigned id and timestamps

        Raises:
            ValidationError: If a field is missing or invalid
            DuplicateError: If a live record has the same business key
        """
        with self._lock:
            error = check_draft(draft, self._records.values())
            if error is not None:
                raise error

            fields = normalize_draft(draft)
            now = self._clock()
            record = TransactionRecord(
                id=self._next_id,
                description=fields.description,
                amount=fields.amount,
                type=fields.type,
                category=fields.category,
                created_at=now,
                updated_at=now,
            )
            self._records[record.id] = record
            self._next_id += 1

        logger.info(f"Created transaction {record.id}")
        return record

    def update(self, transaction_id: int, draft: TransactionDraft) -> TransactionRecord:
        """Replace every field of an existing transaction.

        The id and created_at are preserved; updated_at is refreshed and
        never moves backwards.

        Raises:
            NotFoundError: If no live record has the id
            ValidationError: If a field is missing or invalid
            DuplicateError: If another live record has the same business key
        """
        with self._lock:
            existing = self._records.get(transaction_id)
            if existing is None:
                raise NotFoundError(transaction_id)

            error = check_draft(draft, self._records.values(), exclude_id=transaction_id)
            if error is not None:
                raise error

            fields = normalize_draft(draft)
            record = TransactionRecord(
                id=transaction_id,
                description=fields.description,
                amount=fields.amount,
                type=fields.type,
                category=fields.category,
                created_at=existing.created_at,
                updated_at=max(self._clock(), existing.updated_at),
            )
            self._records[transaction_id] = record

        logger.info(f"Updated transaction {transaction_id}")
        return record

    def delete(self, transaction_id: int) -> None:
        """Permanently remove a transaction.

        Raises:
            NotFoundError: If no live record has the id
        """
        with self._lock:
            if self._records.pop(transaction_id, None) is None:
                raise NotFoundError(transaction_id)

        logger.info(f"Deleted transaction {transaction_id}")

    def find_by_id(self, transaction_id: int) -> TransactionRecord:
        """Get a single transaction.

        Raises:
            NotFoundError: If no live record has the id
        """
        with self._lock:
            record = self._records.get(transaction_id)
        if record is None:
            raise NotFoundError(transaction_id)
        return record

    def find_all(self) -> list[TransactionRecord]:
        """Get every live transaction, ordered by id."""
        with self._lock:
            records = list(self._records.values())
        return sorted(records, key=lambda r: r.id)

    def find_by_type(self, transaction_type: TransactionType | str) -> list[TransactionRecord]:
        """Get transactions of one type, ordered by id.

        Raises:
            ValidationError: If a textual type is not INCOME or EXPENSE
        """
        resolved = parse_type(transaction_type)
        if resolved is None:
            raise ValidationError("type", f"Invalid transaction type: {transaction_type}")
        return [r for r in self.find_all() if r.type == resolved]

    def find_by_category(self, category: str) -> list[TransactionRecord]:
        """Get transactions whose category matches exactly (case-sensitive)."""
        return [r for r in self.find_all() if r.category == category]

    def count(self) -> int:
        """Number of live transactions."""
        with self._lock:
            return len(self._records)
