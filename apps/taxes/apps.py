"""Taxes app configuration."""

from django.apps import AppConfig


class TaxesConfig(AppConfig):
    """Configuration for the taxes application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.taxes"
    verbose_name = "Taxes"
