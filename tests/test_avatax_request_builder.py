"""Tests for GetTax request assembly."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from services.avatax.request_builder import (
    build_order_request,
    build_request,
    build_return_request,
    override_reason,
)
from tests.fakes import (
    FakeAddress,
    FakeAdjustment,
    FakeOrder,
    FakeReason,
    FakeRefund,
    FakeUser,
    make_config,
)

TODAY = date.today().strftime("%Y-%m-%d")


class TestOrderRequest:
    """Tests for sale document requests."""

    def test_wire_keys(self, order: FakeOrder, config) -> None:
        request = build_order_request(order, config)

        assert set(request) == {
            "DocCode",
            "DocDate",
            "Discount",
            "Commit",
            "DocType",
            "Addresses",
            "Lines",
            "CustomerCode",
            "CompanyCode",
            "CustomerUsageType",
            "ExemptionNo",
            "Client",
            "ReferenceCode",
            "DetailLevel",
            "CurrencyCode",
        }

    def test_base_fields(self, order: FakeOrder, config) -> None:
        request = build_order_request(order, config)

        assert request["DocCode"] == "R123456789"
        assert request["ReferenceCode"] == "R123456789"
        assert request["CustomerCode"] == "7"
        assert request["CompanyCode"] == "DEFAULT"
        assert request["Client"] == "a0o33000004FH8l"
        assert request["DetailLevel"] == "Tax"
        assert request["CurrencyCode"] == "USD"
        assert request["ExemptionNo"] == ""

    def test_defaults_to_uncommitted_sales_order(self, order: FakeOrder, config) -> None:
        request = build_order_request(order, config)

        assert request["DocType"] == "SalesOrder"
        assert request["Commit"] is False

    def test_doc_date_for_open_order_is_today(self, order: FakeOrder, config) -> None:
        assert build_order_request(order, config)["DocDate"] == TODAY

    def test_doc_date_for_completed_order(self, completed_order: FakeOrder, config) -> None:
        assert build_order_request(completed_order, config)["DocDate"] == "2024-03-15"

    def test_discount_sums_eligible_promotions(self, config) -> None:
        order = FakeOrder(
            adjustments=[
                FakeAdjustment(Decimal("-5.00")),
                FakeAdjustment(Decimal("-2.50")),
                FakeAdjustment(Decimal("-9.00"), eligible=False),
                FakeAdjustment(Decimal("3.00"), is_promotion=False),
            ]
        )

        assert build_order_request(order, config)["Discount"] == "7.50"

    def test_no_discount(self, order: FakeOrder, config) -> None:
        assert build_order_request(order, config)["Discount"] == "0"

    def test_guest_customer_code_is_email(self, config) -> None:
        order = FakeOrder(user=None, email="guest@example.com")

        assert build_order_request(order, config)["CustomerCode"] == "guest@example.com"

    def test_exemption_number(self, config) -> None:
        order = FakeOrder(user=FakeUser(exemption_number="EX-1"))

        assert build_order_request(order, config)["ExemptionNo"] == "EX-1"

    def test_business_identification_number(self, config) -> None:
        order = FakeOrder(user=FakeUser(vat_id="DE123456789"))

        request = build_order_request(order, config)

        assert request["BusinessIdentificationNo"] == "DE123456789"

    def test_blank_vat_id_is_omitted(self, config) -> None:
        order = FakeOrder(user=FakeUser(vat_id="   "))

        assert "BusinessIdentificationNo" not in build_order_request(order, config)

    def test_incomplete_addresses_are_not_sent(self, origin) -> None:
        config = make_config(origin=origin)
        order = FakeOrder(ship_address=FakeAddress(city=None, region=None, postal_code=None))

        request = build_order_request(order, config)

        assert [a["AddressCode"] for a in request["Addresses"]] == ["Orig"]

    def test_missing_order_is_rejected(self, config) -> None:
        with pytest.raises(ValueError, match="order"):
            build_order_request(None, config)  # type: ignore[arg-type]


class TestReturnRequest:
    """Tests for return document requests."""

    def test_doc_code_includes_refund_id(self, completed_order, refund, config) -> None:
        request = build_return_request(completed_order, config, refund)

        assert request["DocCode"] == "R123456789.42"
        assert request["ReferenceCode"] == "R123456789"

    def test_dated_today_with_tax_date_override(self, completed_order, refund, config) -> None:
        request = build_return_request(completed_order, config, refund)

        assert request["DocDate"] == TODAY
        assert request["TaxOverride"] == {
            "TaxOverrideType": "TaxDate",
            "Reason": "Return",
            "TaxDate": "2024-03-15",
        }

    def test_defaults_to_return_order(self, completed_order, refund, config) -> None:
        request = build_return_request(completed_order, config, refund)

        assert request["DocType"] == "ReturnOrder"
        assert "Discount" not in request

    def test_reason_from_refund(self, completed_order, config) -> None:
        refund = FakeRefund(reason=FakeReason("Damaged"))

        request = build_return_request(completed_order, config, refund)

        assert request["TaxOverride"]["Reason"] == "Damaged"

    def test_reason_is_truncated(self) -> None:
        refund = FakeRefund(reason=FakeReason("r" * 400))

        assert len(override_reason(refund)) == 255

    def test_reason_defaults_without_refund_reason(self) -> None:
        assert override_reason(FakeRefund(reason=FakeReason(""))) == "Return"
        assert override_reason(None) == "Return"

    def test_missing_refund_is_rejected(self, completed_order, config) -> None:
        with pytest.raises(ValueError, match="refund"):
            build_return_request(completed_order, config, None)  # type: ignore[arg-type]


class TestBuildRequest:
    """Tests for routing between order and return requests."""

    @pytest.mark.parametrize("invoice_type", ["ReturnInvoice", "ReturnOrder"])
    def test_return_types_route_to_return_request(
        self, completed_order, refund, config, invoice_type: str
    ) -> None:
        request = build_request(
            completed_order, config, commit=True, invoice_type=invoice_type, refund=refund
        )

        assert request["DocType"] == invoice_type
        assert request["Commit"] is True
        assert "TaxOverride" in request

    def test_sale_types_ignore_refund(self, completed_order, refund, config) -> None:
        request = build_request(
            completed_order, config, invoice_type="SalesInvoice", refund=refund
        )

        assert request["DocCode"] == "R123456789"
        assert "TaxOverride" not in request

    def test_no_invoice_type_is_sales_order(self, order, config) -> None:
        assert build_request(order, config)["DocType"] == "SalesOrder"
