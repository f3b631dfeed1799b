"""HTTP client for the AvaTax REST v1 API."""

from __future__ import annotations

import base64
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Self

import httpx

from core.logging import get_logger
from core.result import Result, failure, success
from services.avatax.address import to_query
from services.avatax.errors import (
    AddressValidationError,
    AvataxError,
    CancelError,
    HttpStatusError,
    NetworkError,
    ParseError,
    RequestTimeoutError,
    ServiceError,
)

if TYPE_CHECKING:
    from services.avatax.types import Address, AvataxConfig

logger = get_logger(__name__)

TAX_SERVICE_PATH = "/1.0/tax/"
ADDRESS_SERVICE_PATH = "/1.0/address/"

CANCEL_CODE = "DocVoided"
SUCCESS_RESULT = "Success"

# Lower Manhattan, used to check credentials and endpoint
PING_LATITUDE = "40.714623"
PING_LONGITUDE = "-74.006605"


class AvataxClient:
    """
    HTTP client for AvaTax tax and address services.

    Every call is a single attempt bounded by the configured timeout. No
    exception from the transport or the service escapes: failures come back
    as ``Failure(AvataxError)``.

    Attributes:
        endpoint: Service base URL.
        timeout: Request timeout in seconds.
    """

    def __init__(self, config: AvataxConfig, http_client: httpx.Client | None = None) -> None:
        """
        Initialize the client.

        Args:
            config: Preferences snapshot holding endpoint and credentials.
            http_client: Preconfigured httpx client (mainly for tests).
        """
        self.endpoint = config.endpoint.rstrip("/")
        self.timeout = config.timeout
        self.tax_calculation = config.tax_calculation
        self._account = config.account
        self._license_key = config.license_key
        self._client = http_client

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()

    @property
    def tax_service_url(self) -> str:
        return self.endpoint + TAX_SERVICE_PATH

    @property
    def address_service_url(self) -> str:
        return self.endpoint + ADDRESS_SERVICE_PATH

    def _credential(self) -> str:
        """Basic auth header value for account and license key."""
        token = base64.b64encode(f"{self._account}:{self._license_key}".encode()).decode()
        return f"Basic {token}"

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(timeout=self.timeout)
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            self._client.close()
            self._client = None

    def _send(
        self,
        operation: str,
        method: str,
        url: str,
        *,
        payload: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> Result[dict[str, Any], AvataxError]:
        """
        Make one request and parse the JSON body.

        Args:
            operation: Name of the calling operation, for logs and errors.
            method: HTTP method.
            url: Absolute URL.
            payload: JSON body for POST requests.
            params: Query parameters.

        Returns:
            Result containing the decoded body or AvataxError.
        """
        logger.info("AvaTax call", operation=operation, url=url)
        if payload is not None:
            logger.debug("AvaTax request body", operation=operation, body=payload)

        headers = {"Authorization": self._credential(), "Content-Type": "application/json"}
        client = self._get_client()

        try:
            response = client.request(
                method=method,
                url=url,
                json=payload,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
        except httpx.TimeoutException:
            logger.error("AvaTax request timeout", operation=operation, url=url)
            return failure(RequestTimeoutError(operation))
        except httpx.RequestError as e:
            logger.error("AvaTax request error", operation=operation, error=str(e))
            return failure(NetworkError(operation, details=str(e)))

        logger.debug(
            "AvaTax raw response",
            operation=operation,
            status_code=response.status_code,
            response=response.text,
        )

        if not response.is_success:
            logger.error(
                "AvaTax API error",
                operation=operation,
                status_code=response.status_code,
                response_text=response.text[:500],
            )
            return failure(HttpStatusError(operation, response.status_code, response.text[:500]))

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Failed to parse AvaTax response", operation=operation, error=str(e))
            return failure(ParseError(operation, details=str(e)))

        if not isinstance(data, dict):
            return failure(ParseError(operation, details="expected a JSON object"))
        return success(data)

    def get_tax(self, request: dict[str, Any]) -> Result[dict[str, Any], AvataxError]:
        """
        Quote or commit a tax document.

        Args:
            request: GetTax request body.

        Returns:
            Result containing the GetTax response when its ResultCode is
            Success, AvataxError otherwise.
        """
        result = self._send("get_tax", "POST", self.tax_service_url + "get", payload=request)
        if result.is_failure():
            return result

        body = result.unwrap()
        result_code = body.get("ResultCode")
        if result_code != SUCCESS_RESULT:
            logger.warning(
                "AvaTax rejected tax request",
                doc_code=request.get("DocCode"),
                result_code=result_code,
                messages=body.get("Messages"),
            )
            return failure(ServiceError("get_tax", result_code, details=str(body.get("Messages"))))
        return success(body)

    def cancel_tax(self, request: dict[str, Any]) -> Result[dict[str, Any], AvataxError]:
        """
        Void a tax document.

        Args:
            request: CancelTax body (CompanyCode, DocType, DocCode, CancelCode).

        Returns:
            Result containing ``CancelTaxResult`` or a cancel AvataxError.
        """
        result = self._send("cancel_tax", "POST", self.tax_service_url + "cancel", payload=request)
        if result.is_failure():
            return failure(CancelError(details=str(result.error)))

        cancel_result = result.unwrap().get("CancelTaxResult")
        if not isinstance(cancel_result, dict):
            return failure(CancelError(details="response has no CancelTaxResult"))

        if cancel_result.get("ResultCode") != SUCCESS_RESULT:
            messages = cancel_result.get("Messages")
            details = None
            if isinstance(messages, list) and messages and isinstance(messages[0], dict):
                details = messages[0].get("Details")
            logger.info(
                "AvaTax cancel rejected",
                doc_code=request.get("DocCode"),
                details=details,
            )
            return failure(CancelError(details=details))
        return success(cancel_result)

    def estimate_tax(
        self,
        latitude: str | float | None,
        longitude: str | float | None,
        sale_amount: Decimal | int | None = None,
    ) -> Result[dict[str, Any], AvataxError] | None:
        """
        Estimate tax for a sale amount at a coordinate.

        Args:
            latitude: Latitude of the destination.
            longitude: Longitude of the destination.
            sale_amount: Amount to estimate for; zero when not given.

        Returns:
            Result containing the estimate or AvataxError; None without a
            call when tax calculation is disabled or a coordinate is missing.
        """
        if not self.tax_calculation:
            logger.debug("AvaTax tax calculation disabled", operation="estimate_tax")
            return None
        if latitude is None or longitude is None:
            return None

        amount = Decimal(0) if sale_amount is None else Decimal(sale_amount)
        url = f"{self.tax_service_url}{latitude},{longitude}/get"
        return self._send("estimate_tax", "GET", url, params={"saleamount": str(amount)})

    def ping(self) -> Result[dict[str, Any], AvataxError] | None:
        """Check endpoint and credentials with a zero-amount estimate."""
        logger.info("AvaTax ping")
        return self.estimate_tax(PING_LATITUDE, PING_LONGITUDE, 0)

    def validate_address(self, address: Address) -> Result[dict[str, Any], AvataxError]:
        """
        Validate and normalize an address.

        Best effort: whatever goes wrong comes back as an address
        validation error describing the cause.
        """
        try:
            url = f"{self.address_service_url}validate?{to_query(address)}"
            result = self._send("validate_address", "GET", url)
        except Exception as e:
            logger.error("AvaTax address validation error", error=str(e))
            return failure(AddressValidationError(str(e)))

        if result.is_failure():
            return failure(AddressValidationError(result.error.message))
        return result
