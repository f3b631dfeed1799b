"""Assemble GetTax request bodies from orders and refunds."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from services.avatax.address import build_addresses
from services.avatax.lines import build_lines
from services.avatax.types import RETURN_DOC_TYPES, RETURN_ORDER, SALES_ORDER

if TYPE_CHECKING:
    from services.avatax.types import AvataxConfig, Order, Refund

DATE_FORMAT = "%Y-%m-%d"
MAX_OVERRIDE_REASON_LENGTH = 255
DEFAULT_RETURN_REASON = "Return"


def is_return(invoice_type: str | None) -> bool:
    """Check whether an invoice type names a return document."""
    return invoice_type in RETURN_DOC_TYPES


def order_doc_code(order: Order) -> str:
    return str(order.number)


def return_doc_code(order: Order, refund: Refund) -> str:
    """Returns are told apart from the sale by the refund id."""
    return f"{order.number}.{refund.id}"


def promotion_discount(order: Order) -> str:
    """Absolute sum of eligible promotion adjustments, as a decimal string."""
    total = sum(
        (
            Decimal(adjustment.amount)
            for adjustment in order.adjustments
            if adjustment.is_promotion and adjustment.eligible
        ),
        Decimal("0"),
    )
    return str(abs(total))


def override_reason(refund: Refund | None) -> str:
    """Refund reason name capped at 255 characters, or ``"Return"``."""
    reason = getattr(refund, "reason", None)
    name = getattr(reason, "name", None)
    if not name:
        return DEFAULT_RETURN_REASON
    return name[:MAX_OVERRIDE_REASON_LENGTH]


def customer_code(order: Order) -> str:
    """User id for registered customers, otherwise the e-mail address."""
    if order.user is not None:
        return str(order.user.id)
    return order.email or ""


def business_id_no(order: Order) -> str | None:
    """The customer's VAT id when it is non-blank."""
    vat_id = getattr(order.user, "vat_id", None)
    if vat_id and vat_id.strip():
        return vat_id
    return None


def _base_fields(order: Order, config: AvataxConfig) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "CustomerCode": customer_code(order),
        "CompanyCode": config.company_code,
        "CustomerUsageType": order.customer_usage_type,
        "ExemptionNo": getattr(order.user, "exemption_number", None) or "",
        "Client": config.client_version,
        "ReferenceCode": order.number,
        "DetailLevel": "Tax",
        "CurrencyCode": order.currency,
    }
    vat_id = business_id_no(order)
    if vat_id is not None:
        fields["BusinessIdentificationNo"] = vat_id
    return fields


def _require_order(order: Order | None) -> Order:
    if order is None:
        msg = "a tax request needs an order"
        raise ValueError(msg)
    return order


def build_order_request(
    order: Order,
    config: AvataxConfig,
    *,
    commit: bool = False,
    invoice_type: str | None = None,
) -> dict[str, Any]:
    """
    Build a sale document request.

    The document is dated on the order's completion, or today for an order
    still in checkout.

    Args:
        order: Order being taxed.
        config: Preferences snapshot.
        commit: Whether AvaTax should commit the document.
        invoice_type: Document type, ``SalesOrder`` when not given.

    Returns:
        GetTax request body.

    Raises:
        ValueError: If no order is given.
    """
    order = _require_order(order)
    doc_date = order.completed_at.date() if order.completed_at else date.today()

    request: dict[str, Any] = {
        "DocCode": order_doc_code(order),
        "DocDate": doc_date.strftime(DATE_FORMAT),
        "Discount": promotion_discount(order),
        "Commit": commit,
        "DocType": invoice_type or SALES_ORDER,
        "Addresses": build_addresses(order, config.origin),
        "Lines": build_lines(order, invoice_type),
    }
    request.update(_base_fields(order, config))
    return request


def build_return_request(
    order: Order,
    config: AvataxConfig,
    refund: Refund,
    *,
    commit: bool = False,
    invoice_type: str | None = None,
) -> dict[str, Any]:
    """
    Build a return document request.

    The return is dated today but taxed as of the original sale through a
    ``TaxDate`` override.

    Raises:
        ValueError: If no order or no refund is given.
    """
    order = _require_order(order)
    if refund is None:
        msg = "a return request needs a refund"
        raise ValueError(msg)

    today = date.today()
    tax_date = order.completed_at.date() if order.completed_at else today
    doc_type = invoice_type or RETURN_ORDER

    request: dict[str, Any] = {
        "DocCode": return_doc_code(order, refund),
        "DocDate": today.strftime(DATE_FORMAT),
        "Commit": commit,
        "DocType": doc_type,
        "Addresses": build_addresses(order, config.origin),
        "Lines": build_lines(order, doc_type, refund),
    }
    request.update(_base_fields(order, config))
    request["TaxOverride"] = {
        "TaxOverrideType": "TaxDate",
        "Reason": override_reason(refund),
        "TaxDate": tax_date.strftime(DATE_FORMAT),
    }
    return request


def build_request(
    order: Order,
    config: AvataxConfig,
    *,
    commit: bool = False,
    invoice_type: str | None = None,
    refund: Refund | None = None,
) -> dict[str, Any]:
    """Route to the return or the order builder by invoice type alone."""
    if is_return(invoice_type):
        return build_return_request(
            order, config, refund, commit=commit, invoice_type=invoice_type
        )
    return build_order_request(order, config, commit=commit, invoice_type=invoice_type)
