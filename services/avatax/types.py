"""Types for the AvaTax integration."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from datetime import datetime

    from core.config import AvataxSettings
    from services.avatax.errors import AvataxError

SALES_ORDER = "SalesOrder"
SALES_INVOICE = "SalesInvoice"
RETURN_ORDER = "ReturnOrder"
RETURN_INVOICE = "ReturnInvoice"

RETURN_DOC_TYPES = frozenset({RETURN_ORDER, RETURN_INVOICE})

ZERO_TAX: dict[str, str] = {"TotalTax": "0.00"}


class Address(Protocol):
    line1: str | None
    line2: str | None
    city: str | None
    region: str | None
    postal_code: str | None
    country: str | None


class User(Protocol):
    id: int | str
    email: str | None
    exemption_number: str | None
    vat_id: str | None


class LineItem(Protocol):
    id: int | str
    sku: str | None
    name: str
    quantity: int
    price: Decimal
    discounted_amount: Decimal
    promo_total: Decimal
    tax_code: str | None


class Shipment(Protocol):
    id: int | str
    shipping_method: str
    amount: Decimal
    tax_code: str | None


class Adjustment(Protocol):
    amount: Decimal
    is_promotion: bool
    eligible: bool


class Order(Protocol):
    """
    The commerce system's order, as far as tax requests need it.

    An order is completed when ``completed_at`` is set.
    """

    number: str
    currency: str
    email: str | None
    completed_at: datetime | None
    customer_usage_type: str | None
    user: User | None
    line_items: Sequence[LineItem]
    shipments: Sequence[Shipment]
    adjustments: Sequence[Adjustment]
    ship_address: Address | None
    bill_address: Address | None


class RefundReason(Protocol):
    name: str


class Refund(Protocol):
    id: int | str
    amount: Decimal
    transaction_id: str | None
    reason: RefundReason | None
    refunded_items: Mapping[int | str, int]


@dataclass(frozen=True, slots=True)
class OriginAddress:
    """Ship-from address sent as the ``Orig`` address of every request."""

    line1: str | None = None
    line2: str | None = None
    city: str | None = None
    region: str | None = None
    postal_code: str | None = None
    country: str | None = None


@dataclass(frozen=True, slots=True)
class AvataxConfig:
    """
    Immutable snapshot of the AvaTax preferences for one call.

    Attributes:
        company_code: AvaTax company code.
        tax_calculation: Whether orders are sent to AvaTax at all.
        document_commit: Whether final documents may be committed.
        endpoint: Service base URL without trailing slash.
        account: Account number for Basic auth.
        license_key: License key for Basic auth.
        client_version: Value of the ``Client`` request field.
        timeout: Per-request timeout in seconds.
        origin: Ship-from address, if configured.
    """

    company_code: str
    tax_calculation: bool
    document_commit: bool
    endpoint: str
    account: str
    license_key: str
    client_version: str
    timeout: float = 5.0
    origin: OriginAddress | None = None

    @classmethod
    def from_settings(cls, settings: AvataxSettings) -> AvataxConfig:
        """Freeze the current AvaTax settings."""
        origin = None
        if settings.origin_country:
            origin = OriginAddress(
                line1=settings.origin_line1,
                line2=settings.origin_line2,
                city=settings.origin_city,
                region=settings.origin_region,
                postal_code=settings.origin_postal_code,
                country=settings.origin_country,
            )
        return cls(
            company_code=settings.company_code,
            tax_calculation=settings.tax_calculation,
            document_commit=settings.document_commit,
            endpoint=settings.endpoint,
            account=settings.account,
            license_key=settings.license_key.get_secret_value(),
            client_version=settings.client_version,
            timeout=settings.timeout,
            origin=origin,
        )


class TaxResultKind(str, Enum):
    """Discriminant of a TaxResult."""

    SUCCESS = "success"
    DEGRADED = "degraded"
    COMMITTING_DISABLED = "committing_disabled"


@dataclass(frozen=True, slots=True)
class TaxResult:
    """
    Outcome of a quote or commit.

    A degraded result carries the zero-tax payload and, when the service
    was actually called, the error that caused the degradation.

    Attributes:
        kind: Which outcome this is.
        payload: AvaTax response, zero-tax payload, or empty.
        error: Failure behind a degraded result, if any.
    """

    kind: TaxResultKind
    payload: dict[str, Any] = field(default_factory=dict)
    error: AvataxError | None = None

    @classmethod
    def succeeded(cls, payload: dict[str, Any]) -> TaxResult:
        return cls(kind=TaxResultKind.SUCCESS, payload=payload)

    @classmethod
    def zero_tax(cls, error: AvataxError | None = None) -> TaxResult:
        return cls(kind=TaxResultKind.DEGRADED, payload=dict(ZERO_TAX), error=error)

    @classmethod
    def committing_disabled(cls) -> TaxResult:
        return cls(kind=TaxResultKind.COMMITTING_DISABLED)

    def is_success(self) -> bool:
        return self.kind is TaxResultKind.SUCCESS

    @property
    def total_tax(self) -> Decimal:
        """TotalTax of the payload; zero when absent."""
        return Decimal(str(self.payload.get("TotalTax", "0.00")))
