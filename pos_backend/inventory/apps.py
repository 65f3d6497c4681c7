# inventory/apps.py

"""
INVENTORY APP CONFIG

Inventory unit ledger:
- IMEI-identified units and their suppliers
- Unit status (active/sold/returned) and on-hand quantity
"""

from django.apps import AppConfig


class InventoryConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "inventory"
    verbose_name = "Inventory"
