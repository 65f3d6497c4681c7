# sales/apps.py

"""
SALES APP CONFIG

Sale transaction & inventory reconciliation engine:
- Sale creation against live inventory
- Line corrections (cancel / return / rendu)
- Payment updates and invoice mirror sync
"""

from django.apps import AppConfig


class SalesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "sales"
    verbose_name = "Sales"
