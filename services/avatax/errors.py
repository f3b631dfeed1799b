"""Error types for AvaTax operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for AvaTax failures."""

    UNKNOWN = "unknown"
    NETWORK = "network"
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    PARSE = "parse"
    SERVICE_ERROR = "service_error"
    CANCEL_FAILED = "cancel_failed"
    ADDRESS_VALIDATION = "address_validation"
    DUPLICATE_TRANSACTION = "duplicate_transaction"


@dataclass(frozen=True, slots=True)
class AvataxError:
    """
    Why a call to AvaTax (or the transaction store) did not succeed.

    Attributes:
        code: Error code identifying the type of error.
        message: Human-readable error message.
        operation: Client operation that failed (e.g. 'get_tax', 'cancel_tax').
        details: Raw detail such as a response excerpt or exception text.
    """

    code: ErrorCode
    message: str
    operation: str
    details: str | None = None

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"[{self.operation}] {self.code.value}: {self.message}"


def NetworkError(
    operation: str,
    message: str = "Request failed",
    details: str | None = None,
) -> AvataxError:
    """Create a connection-level error."""
    return AvataxError(
        code=ErrorCode.NETWORK,
        message=message,
        operation=operation,
        details=details,
    )


def RequestTimeoutError(operation: str, message: str = "Request timeout") -> AvataxError:
    """Create a timeout error."""
    return AvataxError(code=ErrorCode.TIMEOUT, message=message, operation=operation)


def HttpStatusError(operation: str, status_code: int, details: str | None = None) -> AvataxError:
    """Create an error for a non-2xx response."""
    return AvataxError(
        code=ErrorCode.HTTP_STATUS,
        message=f"API returned status {status_code}",
        operation=operation,
        details=details,
    )


def ParseError(
    operation: str,
    message: str = "Failed to parse response",
    details: str | None = None,
) -> AvataxError:
    """Create a parse error."""
    return AvataxError(
        code=ErrorCode.PARSE,
        message=message,
        operation=operation,
        details=details,
    )


def ServiceError(
    operation: str,
    result_code: str | None,
    details: str | None = None,
) -> AvataxError:
    """Create an error for a response whose ResultCode is not Success."""
    return AvataxError(
        code=ErrorCode.SERVICE_ERROR,
        message=f"AvaTax returned ResultCode {result_code!r}",
        operation=operation,
        details=details,
    )


def CancelError(details: str | None = None) -> AvataxError:
    """Create an error for a rejected document cancellation."""
    return AvataxError(
        code=ErrorCode.CANCEL_FAILED,
        message="Error in Cancel Tax",
        operation="cancel_tax",
        details=details,
    )


def AddressValidationError(details: str) -> AvataxError:
    """Create an error for a failed address validation call."""
    return AvataxError(
        code=ErrorCode.ADDRESS_VALIDATION,
        message=f"error in address validation: {details}",
        operation="validate_address",
        details=details,
    )


def DuplicateTransactionError(order_number: str) -> AvataxError:
    """Create an error for a second transaction record on the same order."""
    return AvataxError(
        code=ErrorCode.DUPLICATE_TRANSACTION,
        message=f"Order {order_number} already has a tax transaction",
        operation="create_transaction",
    )
