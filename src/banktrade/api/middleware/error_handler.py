"""Global error handling.

Every failure leaves the API in the same JSON shape: the catalog fields
(error_code, message, user_message, suggestion, retry_allowed) plus the
HTTP status, the request path and a UTC timestamp.
"""

import logging
from datetime import datetime, timezone

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from banktrade.config import settings
from banktrade.core.errors import get_error
from banktrade.core.exceptions import TransactionStoreError

logger = logging.getLogger(__name__)


def error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build the uniform error payload for a catalog code.

    Args:
        request: The incoming request
        status_code: HTTP status to return
        error_code: Code from the error catalog
        message: Specific failure description; defaults to the catalog message
        headers: Extra response headers (e.g. Allow on 405)

    Returns:
        JSONResponse with the error payload
    """
    error_info = get_error(error_code)
    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": error_code,
            "message": message or error_info["message"],
            "user_message": error_info["user_message"],
            "suggestion": error_info["suggestion"],
            "retry_allowed": error_info["retry_allowed"],
            "status": status_code,
            "path": request.url.path,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
        headers=headers,
    )


async def handle_transaction_store_error(
    request: Request, exc: TransactionStoreError
) -> JSONResponse:
    """Handle validation, duplicate and not-found errors raised by the store.

    Args:
        request: The incoming request
        exc: The store exception

    Returns:
        JSONResponse with the exception's status and message
    """
    extra = {"error_code": exc.error_code, "path": request.url.path, "method": request.method}
    if settings.debug:
        extra["details"] = exc.details

    logger.warning(f"Transaction store error: {exc.error_code}", extra=extra)

    return error_response(request, exc.http_status, exc.error_code, exc.message)


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request parsing errors (bad JSON, non-numeric amount, bad paging).

    Args:
        request: The incoming request
        exc: The validation error

    Returns:
        JSONResponse with one "field: message" entry per error
    """
    errors = exc.errors()
    error_messages = []

    for error in errors:
        field = ".".join(str(x) for x in error.get("loc", []))
        msg = error.get("msg", "Invalid value")
        error_messages.append(f"{field}: {msg}")

    extra = {"path": request.url.path, "method": request.method}
    if settings.debug:
        extra["errors"] = errors
    logger.warning(f"Validation error on {request.url.path}", extra=extra)

    return error_response(
        request, status.HTTP_400_BAD_REQUEST, "VAL_001", " | ".join(error_messages)
    )


async def handle_generic_error(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without exposing their details.

    Args:
        request: The incoming request
        exc: The unexpected exception

    Returns:
        JSONResponse with a generic 500 payload
    """
    extra = {
        "error_type": type(exc).__name__,
        "path": request.url.path,
        "method": request.method,
    }
    if settings.debug:
        logger.exception(f"Unexpected error on {request.url.path}", extra=extra)
    else:
        logger.error(f"Unexpected error on {request.url.path}", extra=extra)

    return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "SYS_001")


HTTP_ERROR_CODES = {
    status.HTTP_404_NOT_FOUND: "API_001",
    status.HTTP_405_METHOD_NOT_ALLOWED: "API_002",
}


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Handle routing errors (unknown path, wrong method) and other HTTP exceptions.

    Args:
        request: The incoming request
        exc: The HTTP exception raised by routing or a route

    Returns:
        JSONResponse in the uniform error shape, keeping the exception's headers
    """
    error_code = HTTP_ERROR_CODES.get(exc.status_code, "API_000")
    logger.info(
        f"HTTP {exc.status_code} on {request.url.path}",
        extra={"error_code": error_code, "path": request.url.path, "method": request.method},
    )
    message = exc.detail if isinstance(exc.detail, str) else None
    return error_response(
        request, exc.status_code, error_code, message, headers=getattr(exc, "headers", None)
    )
