"""Models for the taxes application."""

from __future__ import annotations

from django.db import models


class TaxTransaction(models.Model):
    """
    Marks an order as submitted to AvaTax.

    Exactly one row exists per order. Tax amounts themselves are not stored
    here; they live in the service response returned to the caller.
    """

    order_number = models.CharField(
        max_length=64,
        unique=True,
        help_text="Number of the order submitted to AvaTax",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Meta options for TaxTransaction model."""

        db_table = "tax_transactions"
        ordering = ["-created_at"]
        verbose_name = "Tax Transaction"
        verbose_name_plural = "Tax Transactions"

    def __str__(self) -> str:
        """Return string representation."""
        return f"Tax transaction for order {self.order_number}"
