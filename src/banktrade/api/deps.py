"""FastAPI dependency injection for the transaction store."""

from fastapi import Request

from banktrade.repositories.transaction import TransactionStore


def get_store(request: Request) -> TransactionStore:
    """
    Get the store owned by the running application.

    Args:
        request: Incoming request

    Returns:
        TransactionStore created by the application factory
    """
    return request.app.state.store
