"""Exception classes raised by the transaction store.

Each exception carries an ``error_code`` from the catalog in errors.py.
The code is the tag callers branch on; the HTTP layer maps it to a
response through a single exception handler.
"""

from typing import Any


class TransactionStoreError(Exception):
    """Base exception for all transaction store failures.

    Attributes:
        error_code: Code from the error catalog (e.g., "TXN_001")
        message: Human-readable description of this particular failure
        details: Additional context about the error (for logging)
        http_status: HTTP status code the API layer should return
    """

    error_code = "TXN_000"
    http_status = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize the exception.

        Args:
            message: Description of the failure
            details: Additional error context
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(TransactionStoreError):
    """Raised when a candidate field is missing, empty, or out of range."""

    error_code = "TXN_001"
    http_status = 400

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message, details={"field": field})


class DuplicateError(TransactionStoreError):
    """Raised when another live record has the same description, amount, type and category."""

    error_code = "TXN_002"
    http_status = 400

    def __init__(self, existing_id: int):
        self.existing_id = existing_id
        super().__init__(
            "Duplicate transaction found with same description, amount, type and category",
            details={"existing_id": existing_id},
        )


class NotFoundError(TransactionStoreError):
    """Raised when no live record has the requested id."""

    error_code = "TXN_003"
    http_status = 404

    def __init__(self, transaction_id: int):
        self.transaction_id = transaction_id
        super().__init__(
            f"Transaction not found with id: {transaction_id}",
            details={"transaction_id": transaction_id},
        )
