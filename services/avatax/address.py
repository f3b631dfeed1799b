"""Map order addresses onto AvaTax address entries."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

if TYPE_CHECKING:
    from services.avatax.types import Address, Order, OriginAddress

ORIGIN_CODE = "Orig"
DESTINATION_CODE = "Dest"


def address_entry(code: str, address: Address | OriginAddress) -> dict[str, Any]:
    """Render one address in the GetTax ``Addresses`` schema."""
    return {
        "AddressCode": code,
        "Line1": address.line1,
        "Line2": address.line2,
        "City": address.city,
        "Region": address.region,
        "Country": address.country,
        "PostalCode": address.postal_code,
    }


def is_complete(entry: dict[str, Any]) -> bool:
    """
    Check an address entry carries enough to locate a jurisdiction.

    It needs a code, a country, and at least one of city, region or
    postal code.
    """
    if not entry.get("AddressCode") or not entry.get("Country"):
        return False
    return any(entry.get(key) for key in ("City", "Region", "PostalCode"))


def filter_complete(entries: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Drop entries AvaTax could not geocode."""
    return [entry for entry in entries if is_complete(entry)]


def build_addresses(order: Order, origin: OriginAddress | None = None) -> list[dict[str, Any]]:
    """
    Build the complete address list for an order's tax request.

    The ship-from address is coded ``Orig``; the destination is the shipping
    address, or the billing address when the order ships nowhere.

    Args:
        order: Order being taxed.
        origin: Configured ship-from address.

    Returns:
        Address entries, incomplete ones removed.
    """
    entries: list[dict[str, Any]] = []
    if origin is not None:
        entries.append(address_entry(ORIGIN_CODE, origin))

    destination = order.ship_address or order.bill_address
    if destination is not None:
        entries.append(address_entry(DESTINATION_CODE, destination))

    return filter_complete(entries)


def to_query(address: Address) -> str:
    """Encode an address as the query string of an address validation call."""
    params = {
        "Line1": address.line1,
        "Line2": address.line2,
        "City": address.city,
        "Region": address.region,
        "Country": address.country,
        "PostalCode": address.postal_code,
    }
    return urlencode({key: value for key, value in params.items() if value})
