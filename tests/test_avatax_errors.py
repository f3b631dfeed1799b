"""Tests for AvaTax error types."""

from __future__ import annotations

from services.avatax.errors import (
    AddressValidationError,
    AvataxError,
    CancelError,
    DuplicateTransactionError,
    ErrorCode,
    HttpStatusError,
    NetworkError,
    ParseError,
    RequestTimeoutError,
    ServiceError,
)


class TestAvataxError:
    """Tests for AvataxError dataclass."""

    def test_str_includes_operation_and_code(self) -> None:
        error = AvataxError(
            code=ErrorCode.NETWORK, message="Connection failed", operation="get_tax"
        )

        assert str(error) == "[get_tax] network: Connection failed"


class TestFactories:
    """Tests for error factory functions."""

    def test_transport_factories_set_codes(self) -> None:
        assert NetworkError("get_tax").code == ErrorCode.NETWORK
        assert RequestTimeoutError("get_tax").code == ErrorCode.TIMEOUT
        assert ParseError("get_tax").code == ErrorCode.PARSE

    def test_http_status_message(self) -> None:
        error = HttpStatusError("get_tax", 500, details="Internal Server Error")

        assert error.code == ErrorCode.HTTP_STATUS
        assert "500" in error.message
        assert error.details == "Internal Server Error"

    def test_service_error_names_result_code(self) -> None:
        error = ServiceError("get_tax", "Error")

        assert error.code == ErrorCode.SERVICE_ERROR
        assert "'Error'" in error.message

    def test_cancel_error(self) -> None:
        error = CancelError(details="The tax document could not be found.")

        assert error.code == ErrorCode.CANCEL_FAILED
        assert error.operation == "cancel_tax"
        assert error.message == "Error in Cancel Tax"

    def test_address_validation_error_is_descriptive(self) -> None:
        error = AddressValidationError("Request timeout")

        assert error.code == ErrorCode.ADDRESS_VALIDATION
        assert error.message == "error in address validation: Request timeout"

    def test_duplicate_transaction_error(self) -> None:
        error = DuplicateTransactionError("R100")

        assert error.code == ErrorCode.DUPLICATE_TRANSACTION
        assert "R100" in error.message
