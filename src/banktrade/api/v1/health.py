from fastapi import APIRouter, Depends

from banktrade.api.deps import get_store
from banktrade.repositories.transaction import TransactionStore

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(store: TransactionStore = Depends(get_store)):
    """Basic health check with the live record count."""
    return {"status": "ok", "transactions": store.count()}
