"""Map order line items, shipments and refunds onto AvaTax lines."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any

from services.avatax.address import DESTINATION_CODE, ORIGIN_CODE
from services.avatax.types import RETURN_DOC_TYPES

if TYPE_CHECKING:
    from services.avatax.types import LineItem, Order, Refund, Shipment

DEFAULT_ITEM_TAX_CODE = "P0000000"
DEFAULT_SHIPPING_TAX_CODE = "FR000000"
MAX_DESCRIPTION_LENGTH = 255


def _money(amount: Decimal) -> str:
    return str(Decimal(amount).quantize(Decimal("0.01")))


def item_line(order: Order, line_item: LineItem) -> dict[str, Any]:
    """Taxable line for one purchased item."""
    return {
        "LineNo": f"{line_item.id}-LI",
        "ItemCode": line_item.sku or "",
        "Qty": line_item.quantity,
        "Amount": _money(line_item.discounted_amount),
        "OriginCode": ORIGIN_CODE,
        "DestinationCode": DESTINATION_CODE,
        "Description": (line_item.name or "")[:MAX_DESCRIPTION_LENGTH],
        "TaxCode": line_item.tax_code or DEFAULT_ITEM_TAX_CODE,
        "CustomerUsageType": order.customer_usage_type,
        "Discounted": line_item.promo_total != 0,
    }


def shipment_line(order: Order, shipment: Shipment) -> dict[str, Any]:
    """Taxable freight line for one shipment."""
    return {
        "LineNo": f"{shipment.id}-FR",
        "ItemCode": shipment.shipping_method,
        "Qty": 1,
        "Amount": _money(shipment.amount),
        "OriginCode": ORIGIN_CODE,
        "DestinationCode": DESTINATION_CODE,
        "Description": "Shipping Charge",
        "TaxCode": shipment.tax_code or DEFAULT_SHIPPING_TAX_CODE,
        "CustomerUsageType": order.customer_usage_type,
    }


def return_lines(order: Order, refund: Refund) -> list[dict[str, Any]]:
    """
    Negative lines for what a refund gives back.

    Each refunded line item is returned at its unit price times the refunded
    quantity. A refund that names no items (e.g. a goodwill refund) becomes a
    single line for the refunded amount.
    """
    items = {str(item.id): item for item in order.line_items}
    lines = []
    for item_id, quantity in refund.refunded_items.items():
        line_item = items.get(str(item_id))
        if line_item is None or quantity <= 0:
            continue
        lines.append(
            {
                "LineNo": f"{line_item.id}-RA",
                "ItemCode": line_item.sku or "",
                "Qty": quantity,
                "Amount": _money(-(line_item.price * quantity)),
                "OriginCode": ORIGIN_CODE,
                "DestinationCode": DESTINATION_CODE,
                "Description": (line_item.name or "")[:MAX_DESCRIPTION_LENGTH],
                "TaxCode": line_item.tax_code or DEFAULT_ITEM_TAX_CODE,
                "CustomerUsageType": order.customer_usage_type,
            }
        )

    if lines:
        return lines

    return [
        {
            "LineNo": f"{refund.id}-RA",
            "ItemCode": refund.transaction_id or "Refund",
            "Qty": 1,
            "Amount": _money(-refund.amount),
            "OriginCode": ORIGIN_CODE,
            "DestinationCode": DESTINATION_CODE,
            "Description": "Refund",
            "CustomerUsageType": order.customer_usage_type,
        }
    ]


def build_lines(
    order: Order,
    invoice_type: str | None = None,
    refund: Refund | None = None,
) -> list[dict[str, Any]]:
    """
    Build the ``Lines`` of a tax request.

    Args:
        order: Order being taxed.
        invoice_type: Document type; return types produce return lines.
        refund: Refund being reported, required for return types.

    Returns:
        Line entries in request order.
    """
    if invoice_type in RETURN_DOC_TYPES and refund is not None:
        return return_lines(order, refund)

    lines = [item_line(order, line_item) for line_item in order.line_items]
    lines.extend(shipment_line(order, shipment) for shipment in order.shipments)
    return lines
