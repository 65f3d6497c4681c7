# invoices/apps.py

"""
INVOICES APP CONFIG

Financial mirror of sales:
- Rows are created by the invoicing workflow (or admin)
- The sales engine only keeps their amounts/status in sync
"""

from django.apps import AppConfig


class InvoicesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "invoices"
    verbose_name = "Invoices"
