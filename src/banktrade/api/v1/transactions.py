"""Transaction CRUD and listing endpoints.

Routes only translate between HTTP and the store: every decision about
validity, duplicates and existence is made by TransactionStore, and its
exceptions are turned into responses by the registered error handlers.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status

from banktrade.api.deps import get_store
from banktrade.api.pagination import paginate
from banktrade.config import settings
from banktrade.repositories.transaction import TransactionStore
from banktrade.schemas.transaction import (
    TransactionPage,
    TransactionRequest,
    TransactionResponse,
)

router = APIRouter(prefix="/transactions", tags=["transactions"])

PageParam = Annotated[int, Query(ge=0, description="Page number (0-indexed)")]
SizeParam = Annotated[
    int,
    Query(ge=1, le=settings.max_page_size, description="Items per page"),
]


@router.post(
    "",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a transaction",
    responses={400: {"description": "Invalid or duplicate transaction"}},
)
async def create_transaction(
    body: TransactionRequest,
    store: TransactionStore = Depends(get_store),
) -> TransactionResponse:
    """
    Create a transaction.

    Args:
        body: Transaction fields
        store: Transaction store

    Returns:
        The created transaction with its id and timestamps
    """
    record = store.create(body.to_draft())
    return TransactionResponse.model_validate(record)


@router.put(
    "/{transaction_id}",
    response_model=TransactionResponse,
    summary="Replace a transaction",
    responses={
        400: {"description": "Invalid or duplicate transaction"},
        404: {"description": "Transaction not found"},
    },
)
async def update_transaction(
    transaction_id: int,
    body: TransactionRequest,
    store: TransactionStore = Depends(get_store),
) -> TransactionResponse:
    """
    Replace all fields of a transaction, keeping its id and creation time.

    Args:
        transaction_id: Transaction ID
        body: New transaction fields
        store: Transaction store

    Returns:
        The updated transaction
    """
    record = store.update(transaction_id, body.to_draft())
    return TransactionResponse.model_validate(record)


@router.delete(
    "/{transaction_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a transaction",
    responses={404: {"description": "Transaction not found"}},
)
async def delete_transaction(
    transaction_id: int,
    store: TransactionStore = Depends(get_store),
) -> Response:
    """Permanently delete a transaction."""
    store.delete(transaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{transaction_id}",
    response_model=TransactionResponse,
    summary="Get a transaction",
    responses={404: {"description": "Transaction not found"}},
)
async def get_transaction(
    transaction_id: int,
    store: TransactionStore = Depends(get_store),
) -> TransactionResponse:
    """Get a single transaction by id."""
    return TransactionResponse.model_validate(store.find_by_id(transaction_id))


@router.get(
    "",
    response_model=TransactionPage,
    summary="List transactions",
    description="""
    List all transactions ordered by id.

    Results are paginated: **page** is 0-indexed and **size** is the number
    of items per page. A page past the end is returned empty.
    """,
)
async def list_transactions(
    page: PageParam = 0,
    size: SizeParam = settings.default_page_size,
    store: TransactionStore = Depends(get_store),
) -> TransactionPage:
    """
    List transactions with pagination.

    Args:
        page: Page number (0-indexed)
        size: Items per page
        store: Transaction store

    Returns:
        One page of transactions with total count
    """
    return paginate(store.find_all(), page, size)


@router.get(
    "/type/{transaction_type}",
    response_model=TransactionPage,
    summary="List transactions by type",
    responses={400: {"description": "Unknown transaction type"}},
)
async def list_transactions_by_type(
    transaction_type: Annotated[str, Path(description="INCOME or EXPENSE")],
    page: PageParam = 0,
    size: SizeParam = settings.default_page_size,
    store: TransactionStore = Depends(get_store),
) -> TransactionPage:
    """List transactions of one type with pagination."""
    return paginate(store.find_by_type(transaction_type), page, size)


@router.get(
    "/category/{category:path}",
    response_model=TransactionPage,
    summary="List transactions by category",
)
async def list_transactions_by_category(
    category: str,
    page: PageParam = 0,
    size: SizeParam = settings.default_page_size,
    store: TransactionStore = Depends(get_store),
) -> TransactionPage:
    """List transactions in one category (exact, case-sensitive) with pagination."""
    return paginate(store.find_by_category(category), page, size)
