"""Unit tests for error handlers and log filtering."""

import json
import logging
from unittest.mock import Mock

import pytest
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from banktrade.api.middleware.error_handler import (
    handle_generic_error,
    handle_http_exception,
    handle_transaction_store_error,
    handle_validation_error,
)
from banktrade.core.logging import JSONLogFormatter, filter_pii, setup_logging
from banktrade.core.errors import get_error, is_retryable
from banktrade.core.exceptions import (
    DuplicateError,
    NotFoundError,
    TransactionStoreError,
    ValidationError,
)

REQUIRED_FIELDS = [
    "error_code",
    "message",
    "user_message",
    "suggestion",
    "retry_allowed",
    "status",
    "path",
    "timestamp",
]


def _request(path="/api/transactions", method="POST"):
    request = Mock(spec=Request)
    request.url.path = path
    request.method = method
    return request


def _content(response: JSONResponse) -> dict:
    return json.loads(response.body.decode())


class TestTransactionStoreErrorHandler:
    """Test domain exception handling."""

    @pytest.mark.asyncio
    async def test_validation_error_maps_to_400(self):
        exc = ValidationError("amount", "Amount must be greater than 0")

        response = await handle_transaction_store_error(_request(), exc)

        assert isinstance(response, JSONResponse)
        assert response.status_code == 400
        content = _content(response)
        assert content["error_code"] == "TXN_001"
        assert content["message"] == "Amount must be greater than 0"

    @pytest.mark.asyncio
    async def test_duplicate_error_maps_to_400(self):
        response = await handle_transaction_store_error(_request(), DuplicateError(3))

        assert response.status_code == 400
        assert _content(response)["error_code"] == "TXN_002"

    @pytest.mark.asyncio
    async def test_not_found_maps_to_404(self):
        request = _request("/api/transactions/42", "GET")

        response = await handle_transaction_store_error(request, NotFoundError(42))

        assert response.status_code == 404
        content = _content(response)
        assert content["error_code"] == "TXN_003"
        assert content["message"] == "Transaction not found with id: 42"
        assert content["path"] == "/api/transactions/42"
        assert content["status"] == 404

    @pytest.mark.asyncio
    async def test_error_includes_all_fields(self):
        response = await handle_transaction_store_error(_request(), NotFoundError(1))

        content = _content(response)
        for field in REQUIRED_FIELDS:
            assert field in content, f"Missing required field: {field}"


class TestValidationErrorHandler:
    """Test request validation error handling."""

    @pytest.mark.asyncio
    async def test_handle_validation_error(self):
        exc = RequestValidationError(
            errors=[
                {
                    "loc": ("query", "size"),
                    "msg": "Input should be less than or equal to 100",
                    "type": "less_than_equal",
                }
            ]
        )

        response = await handle_validation_error(_request(method="GET"), exc)

        assert response.status_code == 400
        content = _content(response)
        assert content["error_code"] == "VAL_001"
        assert "query.size" in content["message"]

    @pytest.mark.asyncio
    async def test_validation_error_multiple_fields(self):
        exc = RequestValidationError(
            errors=[
                {"loc": ("body", "amount"), "msg": "invalid decimal", "type": "decimal_parsing"},
                {"loc": ("body", "type"), "msg": "not a string", "type": "string_type"},
            ]
        )

        response = await handle_validation_error(_request(), exc)

        content = _content(response)
        assert "amount" in content["message"]
        assert "type" in content["message"]


class TestHTTPExceptionHandler:
    """Test routing error handling."""

    @pytest.mark.asyncio
    async def test_not_found_route(self):
        exc = StarletteHTTPException(status_code=404, detail="Not Found")

        response = await handle_http_exception(_request("/missing", "GET"), exc)

        assert response.status_code == 404
        content = _content(response)
        assert content["error_code"] == "API_001"
        for field in REQUIRED_FIELDS:
            assert field in content, f"Missing required field: {field}"

    @pytest.mark.asyncio
    async def test_method_not_allowed_keeps_allow_header(self):
        exc = StarletteHTTPException(status_code=405, headers={"Allow": "GET, PUT"})

        response = await handle_http_exception(_request(), exc)

        assert response.status_code == 405
        assert _content(response)["error_code"] == "API_002"
        assert response.headers["allow"] == "GET, PUT"

    @pytest.mark.asyncio
    async def test_other_status_uses_generic_code(self):
        exc = StarletteHTTPException(status_code=418)

        response = await handle_http_exception(_request(), exc)

        assert response.status_code == 418
        assert _content(response)["error_code"] == "API_000"


class TestGenericErrorHandler:
    """Test generic exception handling."""

    @pytest.mark.asyncio
    async def test_handle_generic_error(self):
        response = await handle_generic_error(_request(), Exception("lock state corrupted"))

        assert response.status_code == 500
        content = _content(response)
        assert content["error_code"] == "SYS_001"
        assert "lock state corrupted" not in json.dumps(content)


class TestErrorCatalog:
    """Test catalog lookups."""

    def test_known_code(self):
        assert get_error("TXN_003")["message"] == "Transaction not found"
        assert is_retryable("TXN_001") is False

    def test_every_exception_code_is_catalogued(self):
        for exc_class in (TransactionStoreError, ValidationError, DuplicateError, NotFoundError):
            assert get_error(exc_class.error_code)["code"] == exc_class.error_code

    def test_unknown_code_falls_back(self):
        assert get_error("NOPE")["code"] == "UNKNOWN"


class TestPIIFiltering:
    """Test log text filtering."""

    def test_filter_card_number(self):
        filtered = filter_pii("Refund to 4532015112830366")
        assert "4532015112830366" not in filtered
        assert "[CARD]" in filtered

    def test_filter_email(self):
        filtered = filter_pii("Invoice for john.doe@example.com")
        assert "[EMAIL]" in filtered

    def test_filter_phone_number(self):
        filtered = filter_pii("Call +1-555-123-4567")
        assert "[PHONE]" in filtered

    def test_filter_preserves_non_pii(self):
        text = "/api/transactions/category/Salary"
        assert filter_pii(text) == text

    def test_filter_empty_and_none(self):
        assert filter_pii("") == ""
        assert filter_pii(None) is None


class TestLoggingBehavior:
    """Test logging behavior of error handlers."""

    @pytest.mark.asyncio
    async def test_store_errors_logged_as_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            await handle_transaction_store_error(_request(), DuplicateError(1))

        assert "TXN_002" in caplog.text
        assert caplog.records[-1].levelno == logging.WARNING

    def test_json_formatter_includes_extra_fields(self):
        record = logging.LogRecord(
            "banktrade", logging.INFO, __file__, 1, "Request completed", None, None
        )
        record.request_id = "abc"
        record.status_code = 201

        data = json.loads(JSONLogFormatter().format(record))

        assert data["message"] == "Request completed"
        assert data["request_id"] == "abc"
        assert data["status_code"] == 201
        assert "duration_ms" not in data


class TestSetupLogging:
    """Test root logger configuration."""

    @pytest.fixture
    def root_logger(self):
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        yield root
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)

    def test_json_handler(self, root_logger):
        setup_logging("debug", json_format=True)

        assert root_logger.level == logging.DEBUG
        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0].formatter, JSONLogFormatter)

    def test_repeated_setup_does_not_stack_handlers(self, root_logger):
        setup_logging("INFO")
        setup_logging("WARNING")

        assert len(root_logger.handlers) == 1
        assert root_logger.level == logging.WARNING
