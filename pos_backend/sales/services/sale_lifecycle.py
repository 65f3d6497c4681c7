"""
SALE LIFECYCLE DOMAIN RULES

This module defines the payment-status derivation and the ONLY allowed
status transitions for sale lines.

DESIGN PRINCIPLES:
- No database writes
- No inventory mutation
- No side effects
- Single source of truth (creation, corrections and payment updates all
  call into here)
"""

from __future__ import annotations

from decimal import Decimal

from sales.models import Sale, SaleItem
from sales.exceptions import ItemAlreadyProcessedError

ZERO = Decimal("0.00")

# ============================================================
# PAYMENT STATUS
# ============================================================


def derive_payment_status(total, paid) -> str:
    """
    total <= paid      -> fully_paid
    0 < paid < total   -> partially_paid
    paid == 0          -> awaiting_payment
    """
    total = Decimal(str(total))
    paid = Decimal(str(paid))

    if total <= paid:
        return Sale.STATUS_FULLY_PAID
    if paid > ZERO:
        return Sale.STATUS_PARTIALLY_PAID
    return Sale.STATUS_AWAITING_PAYMENT


def is_fully_inactive(*, total_items: int, inactive_items: int) -> bool:
    """A sale whose every line left `active` is cancelled as a whole."""
    return total_items > 0 and inactive_items == total_items


# ============================================================
# ITEM STATE DEFINITIONS
# ============================================================

TERMINAL_ITEM_STATES = set(SaleItem.INACTIVE_STATUSES)

ALLOWED_ITEM_TRANSITIONS = {
    SaleItem.STATUS_ACTIVE: {
        SaleItem.STATUS_CANCELLED,
        SaleItem.STATUS_RETURNED,
        SaleItem.STATUS_RETURNED_TO_STOCK,
    },
}


# ============================================================
# DOMAIN RULES
# ============================================================


def can_transition_item(*, from_status: str, to_status: str) -> bool:
    if from_status in TERMINAL_ITEM_STATES:
        return False

    return to_status in ALLOWED_ITEM_TRANSITIONS.get(from_status, set())


def validate_item_transition(*, item: SaleItem, target_status: str):
    if not can_transition_item(from_status=item.status, to_status=target_status):
        raise ItemAlreadyProcessedError(
            f"Sale item {item.id} cannot transition from "
            f"'{item.status}' to '{target_status}'",
            details={
                "sale_id": str(item.sale_id),
                "item_id": str(item.id),
                "imei": item.imei,
                "current_status": item.status,
                "target_status": target_status,
            },
        )
