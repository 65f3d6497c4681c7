# sales/exceptions.py

"""
SALES ENGINE ERRORS

Centralized domain errors for sale creation, corrections and payment updates,
shared with the clients/inventory/invoices services they call into.

Every error carries:
- code     stable machine-readable string (mapped to HTTP by the API layer)
- message  human-readable explanation
- details  dict with the offending ids / IMEI / amounts
"""

from __future__ import annotations


class SaleEngineError(Exception):
    """Base exception for all sales engine failures."""

    code = "SALE_ENGINE_ERROR"

    def __init__(self, message: str = "", *, details: dict | None = None):
        super().__init__(message)
        self.message = message or self.__class__.__doc__ or self.code
        self.details = dict(details or {})

    def as_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "details": self.details}


class InvalidInputError(SaleEngineError):
    """Raised when a required field is missing or malformed."""

    code = "INVALID_INPUT"


class NotFoundError(SaleEngineError):
    """Raised when a referenced sale, line or unit does not exist."""

    code = "NOT_FOUND"


class InvalidStateError(SaleEngineError):
    """Raised when an entity is not in a state that permits the operation."""

    code = "INVALID_STATE"


class PricingViolationError(SaleEngineError):
    """Raised when a sale price is non-positive or below purchase cost."""

    code = "PRICING_VIOLATION"


class ConflictError(SaleEngineError):
    """Raised when amounts contradict each other (e.g. paid above total)."""

    code = "CONFLICT"


class ItemAlreadyProcessedError(ConflictError, InvalidStateError):
    """Raised when a sale line was already cancelled, returned or restocked."""

    code = "CONFLICT"


class InternalError(SaleEngineError):
    """Raised when the storage layer fails underneath an operation."""

    code = "INTERNAL"
