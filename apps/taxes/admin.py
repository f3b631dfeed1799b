"""Admin configuration for taxes app."""

from django.contrib import admin

from .models import TaxTransaction


@admin.register(TaxTransaction)
class TaxTransactionAdmin(admin.ModelAdmin):
    """Admin configuration for TaxTransaction model."""

    list_display = ("order_number", "created_at", "updated_at")
    search_fields = ("order_number",)
    readonly_fields = ("created_at", "updated_at")
    ordering = ("-created_at",)
