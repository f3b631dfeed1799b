"""
Pytest configuration and fixtures for the test suite.

This module contains shared fixtures used across all tests.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from unittest.mock import MagicMock

import pytest

from core.result import Success
from services.avatax.client import AvataxClient
from services.avatax.types import AvataxConfig, OriginAddress
from tests.fakes import FakeOrder, FakeRefund, make_config


@pytest.fixture()
def config() -> AvataxConfig:
    """Config with tax calculation and document committing enabled."""
    return make_config()


@pytest.fixture()
def origin() -> OriginAddress:
    return OriginAddress(
        line1="915 S Jackson St",
        city="Montgomery",
        region="AL",
        postal_code="36104",
        country="US",
    )


@pytest.fixture()
def order() -> FakeOrder:
    """An order still in checkout."""
    return FakeOrder()


@pytest.fixture()
def completed_order() -> FakeOrder:
    return FakeOrder(completed_at=datetime(2024, 3, 15, 14, 30, tzinfo=UTC))


@pytest.fixture()
def refund() -> FakeRefund:
    return FakeRefund()


@pytest.fixture()
def tax_response() -> dict[str, Any]:
    """A successful GetTax response."""
    return {
        "DocCode": "R123456789",
        "ResultCode": "Success",
        "TotalAmount": "20.00",
        "TotalTax": "12.34",
        "TaxLines": [],
    }


@pytest.fixture()
def mock_client(tax_response: dict[str, Any]) -> MagicMock:
    """AvaTax client double answering every GetTax with success."""
    client = MagicMock(spec=AvataxClient)
    client.get_tax.return_value = Success(tax_response)
    client.cancel_tax.return_value = Success({"ResultCode": "Success"})
    return client
