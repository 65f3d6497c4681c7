# inventory/models/__init__.py

"""
INVENTORY MODELS PACKAGE EXPORTS
"""

from .supplier import Supplier
from .unit import InventoryUnit

__all__ = [
    "Supplier",
    "InventoryUnit",
]
