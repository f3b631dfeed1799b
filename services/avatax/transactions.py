"""Persistence of the one-per-order tax transaction record."""

from __future__ import annotations

from django.db import IntegrityError, transaction

from apps.taxes.models import TaxTransaction
from core.logging import get_logger
from core.result import Result, failure, success
from services.avatax.errors import AvataxError, DuplicateTransactionError

logger = get_logger(__name__)


def create_transaction(order_number: str) -> Result[TaxTransaction, AvataxError]:
    """
    Record that an order has been submitted to AvaTax.

    Args:
        order_number: Number of the submitted order.

    Returns:
        Result containing the new record, or a duplicate-transaction error
        when the order already has one.
    """
    try:
        with transaction.atomic():
            record = TaxTransaction.objects.create(order_number=order_number)
    except IntegrityError:
        logger.warning("Duplicate tax transaction", order_number=order_number)
        return failure(DuplicateTransactionError(order_number))

    logger.info("Tax transaction created", order_number=order_number)
    return success(record)


def ensure_transaction(order_number: str) -> TaxTransaction:
    """Return the order's record, creating it on first submission."""
    record, created = TaxTransaction.objects.get_or_create(order_number=order_number)
    if created:
        logger.info("Tax transaction created", order_number=order_number)
    return record
