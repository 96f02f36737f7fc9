"""Unit tests for structured errors, factories and Quart error handlers."""

from __future__ import annotations

import uuid

import pytest
from common_core.error_enums import ErrorCode, GrammarCheckErrorCode
from grammarcheck_service_libs.error_handling import (
    GrammarCheckError,
    create_error_detail_with_context,
    raise_processing_error,
    raise_validation_error,
)
from grammarcheck_service_libs.error_handling.quart_handlers import (
    register_error_handlers,
    status_code_for,
)
from quart import Quart
from werkzeug.exceptions import NotFound


class TestErrorDetailFactory:
    def test_generates_correlation_id_when_missing(self) -> None:
        detail = create_error_detail_with_context(
            error_code=ErrorCode.PROCESSING_ERROR,
            message="failed",
            service="test_service",
            operation="op",
        )

        assert isinstance(detail.correlation_id, uuid.UUID)
        assert detail.details == {}
        assert detail.stack_trace is None

    def test_capture_stack(self) -> None:
        detail = create_error_detail_with_context(
            error_code=ErrorCode.PROCESSING_ERROR,
            message="failed",
            service="test_service",
            operation="op",
            capture_stack=True,
        )

        assert detail.stack_trace


class TestFactories:
    def test_validation_error_records_field(self) -> None:
        correlation_id = uuid.uuid4()

        with pytest.raises(GrammarCheckError) as exc_info:
            raise_validation_error(
                service="test_service",
                operation="test_op",
                field="text",
                message="Something went wrong",
                correlation_id=correlation_id,
            )

        error = exc_info.value
        assert error.error_detail.error_code is ErrorCode.VALIDATION_ERROR
        assert error.correlation_id == str(correlation_id)
        assert error.message == "Something went wrong"
        assert error.error_detail.details["field"] == "text"
        assert str(error) == "[VALIDATION_ERROR] Something went wrong"

    def test_additional_context_merged_into_details(self) -> None:
        with pytest.raises(GrammarCheckError) as exc_info:
            raise_processing_error(
                service="test_service",
                operation="test_op",
                message="failed",
                details={"provider": "openai"},
                attempt=2,
            )

        assert exc_info.value.error_detail.details == {"provider": "openai", "attempt": 2}
        assert exc_info.value.to_dict()["service"] == "test_service"


@pytest.mark.parametrize(
    "code, status",
    [
        (ErrorCode.VALIDATION_ERROR, 400),
        (ErrorCode.MISSING_REQUIRED_FIELD, 400),
        (ErrorCode.RESOURCE_NOT_FOUND, 404),
        (ErrorCode.SERVICE_UNAVAILABLE, 503),
        (GrammarCheckErrorCode.CACHE_UNAVAILABLE, 503),
        (GrammarCheckErrorCode.PROVIDER_FAILED, 500),
        (ErrorCode.EXTERNAL_SERVICE_ERROR, 500),
    ],
)
def test_status_code_mapping(code: ErrorCode | GrammarCheckErrorCode, status: int) -> None:
    assert status_code_for(code) == status


class TestQuartErrorHandlers:
    @pytest.fixture
    def app(self) -> Quart:
        app = Quart(__name__)
        register_error_handlers(app)

        @app.route("/invalid")
        async def invalid() -> None:
            raise_validation_error(
                service="test_service",
                operation="invalid",
                field="text",
                message="Text is required",
            )

        @app.route("/crash")
        async def crash() -> None:
            raise RuntimeError("secret internals")

        @app.route("/missing")
        async def missing() -> None:
            raise NotFound()

        return app

    async def test_structured_error_response(self, app: Quart) -> None:
        response = await app.test_client().get("/invalid")

        assert response.status_code == 400
        body = await response.get_json()
        assert body["error"] == "Text is required"
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["service"] == "test_service"
        assert uuid.UUID(body["correlation_id"])

    async def test_unexpected_error_hides_details(self, app: Quart) -> None:
        response = await app.test_client().get("/crash")

        assert response.status_code == 500
        assert await response.get_json() == {"error": "Internal server error"}

    async def test_http_exceptions_keep_their_status(self, app: Quart) -> None:
        response = await app.test_client().get("/missing")

        assert response.status_code == 404
        assert "error" in await response.get_json()
