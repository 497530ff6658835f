import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from banktrade import __version__
from banktrade.api.middleware.error_handler import (
    handle_generic_error,
    handle_http_exception,
    handle_transaction_store_error,
    handle_validation_error,
)
from banktrade.api.middleware.logging import RequestLoggingMiddleware
from banktrade.api.v1 import router as api_router
from banktrade.api.v1.health import router as health_router
from banktrade.config import settings
from banktrade.core.exceptions import TransactionStoreError
from banktrade.repositories.transaction import TransactionStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"{settings.app_name} starting ({settings.app_env})")
    yield
    logger.info(f"{settings.app_name} stopped with {app.state.store.count()} transactions in memory")


def create_app(store: TransactionStore | None = None) -> FastAPI:
    """Build the application around a transaction store.

    Args:
        store: Store to serve; a new empty one is created when omitted
    """
    app = FastAPI(
        title=settings.app_name,
        description="In-memory transaction records with validation and duplicate detection",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.store = store if store is not None else TransactionStore()

    app.add_middleware(RequestLoggingMiddleware)

    # Most specific first
    app.add_exception_handler(TransactionStoreError, handle_transaction_store_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_generic_error)

    app.include_router(health_router)
    app.include_router(api_router)

    return app


app = create_app()
