"""Order-facing tax lifecycle: quote, commit, return and void."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

from core.config import get_settings
from core.logging import bound_context, get_logger
from services.avatax.client import CANCEL_CODE, AvataxClient
from services.avatax.request_builder import build_request, order_doc_code
from services.avatax.transactions import ensure_transaction
from services.avatax.types import SALES_INVOICE, SALES_ORDER, AvataxConfig, TaxResult

if TYPE_CHECKING:
    from core.result import Result
    from services.avatax.errors import AvataxError
    from services.avatax.types import Order, Refund

logger = get_logger(__name__)


class TaxTransactionService:
    """
    Drives one order's tax document through AvaTax.

    Feature toggles come from the configuration snapshot the service was
    built with, so a single call never sees preferences change under it.
    Service outages never block checkout: quotes and commits fall back to
    zero tax.

    Example:
        >>> service = TaxTransactionService.from_settings()
        >>> result = service.commit_tax(order, "SalesInvoice")
        >>> result.total_tax
        Decimal('12.34')
    """

    def __init__(self, config: AvataxConfig, client: AvataxClient | None = None) -> None:
        """
        Initialize the service.

        Args:
            config: Preferences snapshot.
            client: AvaTax client; one is built from ``config`` when omitted.
        """
        self.config = config
        self._owns_client = client is None
        self.client = client or AvataxClient(config)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the AvaTax client if this service created it."""
        if self._owns_client:
            self.client.close()

    @classmethod
    def from_settings(cls) -> TaxTransactionService:
        """Build a service from the current application settings."""
        settings = get_settings().avatax
        if not settings.is_configured:
            logger.warning("AvaTax credentials are not configured", endpoint=settings.endpoint)
        return cls(AvataxConfig.from_settings(settings))

    def lookup_tax(self, order: Order) -> TaxResult:
        """Quote the order as an uncommitted SalesOrder."""
        return self._post(order, commit=False, invoice_type=SALES_ORDER)

    def commit_tax(
        self,
        order: Order,
        invoice_type: str | None = None,
        refund: Refund | None = None,
    ) -> TaxResult:
        """
        Send an uncommitted sale or return document.

        Args:
            order: Order being taxed.
            invoice_type: Document type; return types are reported as returns.
            refund: Refund behind a return document.

        Returns:
            The AvaTax response, or zero tax when calculation is disabled or
            the service fails.
        """
        if not self.config.tax_calculation:
            logger.debug("AvaTax tax calculation disabled", order_number=order.number)
            return TaxResult.zero_tax()
        return self._post(order, commit=False, invoice_type=invoice_type, refund=refund)

    def commit_tax_final(
        self,
        order: Order,
        invoice_type: str | None = None,
        refund: Refund | None = None,
    ) -> TaxResult:
        """
        Send a committed sale or return document.

        Returns:
            The AvaTax response; a committing-disabled result when document
            committing is off; zero tax when calculation is off or the
            service fails.
        """
        if not self.config.document_commit:
            logger.debug("AvaTax document committing disabled", order_number=order.number)
            return TaxResult.committing_disabled()
        if not self.config.tax_calculation:
            logger.debug("AvaTax tax calculation disabled", order_number=order.number)
            return TaxResult.zero_tax()
        return self._post(order, commit=True, invoice_type=invoice_type, refund=refund)

    def cancel_order_tax(self, order: Order) -> Result[dict[str, Any], AvataxError] | None:
        """
        Void the order's SalesInvoice.

        Returns:
            The cancel Result, or None when tax calculation is disabled.
        """
        if not self.config.tax_calculation:
            return None

        request = {
            "CompanyCode": self.config.company_code,
            "DocType": SALES_INVOICE,
            "DocCode": order_doc_code(order),
            "CancelCode": CANCEL_CODE,
        }
        logger.info("Cancel order tax", order_number=order.number)
        result = self.client.cancel_tax(request)
        if result.is_failure():
            logger.warning(
                "AvaTax cancel failed", order_number=order.number, error=str(result.error)
            )
        return result

    def capture(self, order: Order) -> TaxResult:
        """Record the submission and quote the order as a SalesOrder."""
        ensure_transaction(order.number)
        return self.commit_tax(order, SALES_ORDER)

    def capture_finalize(self, order: Order) -> TaxResult:
        """Record the submission and commit the order as a SalesInvoice."""
        ensure_transaction(order.number)
        return self.commit_tax_final(order, SALES_INVOICE)

    def _post(
        self,
        order: Order,
        *,
        commit: bool,
        invoice_type: str | None,
        refund: Refund | None = None,
    ) -> TaxResult:
        if order is None:
            msg = "cannot post tax for a missing order"
            raise ValueError(msg)

        request = build_request(
            order,
            self.config,
            commit=commit,
            invoice_type=invoice_type,
            refund=refund,
        )

        with bound_context(order_number=order.number, doc_code=request["DocCode"]):
            logger.info("Post document to AvaTax", doc_type=request["DocType"], commit=commit)
            result = self.client.get_tax(request)
            if result.is_failure():
                logger.warning("Tax degraded to zero", error=str(result.error))
                return TaxResult.zero_tax(result.error)

            payload = result.unwrap()
            logger.info("Tax result", total_tax=payload.get("TotalTax"))
            return TaxResult.succeeded(payload)
