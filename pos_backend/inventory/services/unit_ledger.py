# inventory/services/unit_ledger.py

"""
======================================================
PATH: inventory/services/unit_ledger.py
======================================================
INVENTORY UNIT LEDGER

Purpose:
- Find the unit a sale line refers to (full attribute tuple, NULL-aware).
- Apply the status/quantity changes driven by sales and corrections.

Rules:
- Lookups used for writes lock the row (select_for_update).
- Writes are keyed by primary key and return the number of rows updated,
  so callers can tell "no such unit" apart from success.
- reactivate/mark_returned/restock also match the IMEI: a stale id never flips
  some other unit.
- Callers own the transaction; nothing here opens its own.
"""

from __future__ import annotations

import logging
from typing import Optional

from django.db.models import Case, F, IntegerField, Value, When
from django.utils import timezone

from inventory.models import InventoryUnit

logger = logging.getLogger("inventory")


def _optional(value) -> Optional[str]:
    cleaned = str(value).strip() if value is not None else ""
    return cleaned or None


def find_unit_for_sale(
    *,
    imei,
    brand,
    model_name,
    storage=None,
    kind=None,
    carton_type=None,
) -> Optional[InventoryUnit]:
    """
    Locked lookup of the unit matching the whole identity tuple.

    Optional attributes that are blank/absent match NULL columns only, the
    way `filter(field=None)` translates to IS NULL. When several rows match
    (duplicate catalog entries) an `active` row is preferred, then the oldest;
    a non-active row is only returned when no active one matches.
    """
    return (
        InventoryUnit.objects.select_for_update()
        .filter(
            imei=str(imei).strip(),
            brand=str(brand).strip(),
            model_name=str(model_name).strip(),
            storage=_optional(storage),
            kind=_optional(kind),
            carton_type=_optional(carton_type),
        )
        .annotate(
            sellable=Case(
                When(status=InventoryUnit.Status.ACTIVE, then=Value(0)),
                default=Value(1),
                output_field=IntegerField(),
            )
        )
        .order_by("sellable", "created_at", "id")
        .first()
    )


def _set_status(*, unit_id, status: str, imei=None, event: str) -> int:
    qs = InventoryUnit.objects.filter(pk=unit_id)
    if imei is not None:
        qs = qs.filter(imei=str(imei).strip())

    updated = qs.update(status=status, updated_at=timezone.now())

    logger.info(
        "Inventory unit %s",
        event,
        extra={
            "unit_id": str(unit_id),
            "imei": imei,
            "status": status,
            "rows": updated,
        },
    )
    return updated


def mark_unit_sold(unit_id) -> int:
    return _set_status(
        unit_id=unit_id, status=InventoryUnit.Status.SOLD, event="sold"
    )


def reactivate_unit(*, unit_id, imei) -> int:
    """Back to stock after a cancelled sale line (id AND imei must match)."""
    return _set_status(
        unit_id=unit_id,
        imei=imei,
        status=InventoryUnit.Status.ACTIVE,
        event="reactivated",
    )


def mark_unit_returned(*, unit_id, imei) -> int:
    return _set_status(
        unit_id=unit_id,
        imei=imei,
        status=InventoryUnit.Status.RETURNED,
        event="returned",
    )


def restock_unit(*, unit_id, imei) -> int:
    """
    "Rendu": the unit is back on the shelf. Status returns to active and the
    on-hand quantity goes up by one.
    """
    qs = InventoryUnit.objects.filter(pk=unit_id, imei=str(imei).strip())
    updated = qs.update(
        status=InventoryUnit.Status.ACTIVE,
        quantity=F("quantity") + 1,
        updated_at=timezone.now(),
    )
    logger.info(
        "Inventory unit restocked",
        extra={"unit_id": str(unit_id), "imei": imei, "rows": updated},
    )
    return updated
