# invoices/models/__init__.py

from .invoice import Invoice

__all__ = ["Invoice"]
