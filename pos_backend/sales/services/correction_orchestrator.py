# sales/services/correction_orchestrator.py

"""
======================================================
PATH: sales/services/correction_orchestrator.py
======================================================
SALE CORRECTION ORCHESTRATOR (APPLICATION SERVICE)

Corrections move ONE sale line out of `active`:
- cancel_item  -> cancelled          unit back to `active`
- return_item  -> returned           unit set to `returned` + SaleReturn audit row
- mark_rendu   -> returned_to_stock  unit back to `active`, quantity + 1

STATE TRANSITION (every correction):
1) Lock the sale (select_for_update)
2) Lock the line and verify it belongs to the sale and matches the IMEI
3) Validate active -> target (ItemAlreadyProcessedError otherwise)
4) Reverse/adjust the inventory unit
5) Append the audit row (returns only)
6) Reconcile: totals -> invoice mirror -> full-inactivity override

Hard rules:
- Lines of special (negotiated) sales do not touch inventory on cancel/return.
  Rendu always restocks.
- Everything above happens in one transaction.atomic block.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from django.db import DatabaseError, transaction
from django.utils import timezone

from clients.services import find_client_by_name
from inventory.services import mark_unit_returned, reactivate_unit, restock_unit
from sales.models import Sale, SaleItem, SaleReturn
from sales.exceptions import (
    InternalError,
    InvalidInputError,
    NotFoundError,
)
from sales.services.reconciliation import Reconciliation, reconcile_sale
from sales.services.sale_lifecycle import validate_item_transition
from sales.services.validators import optional_text, require_text, to_uuid

logger = logging.getLogger("sales")


@dataclass(frozen=True)
class CorrectionResult:
    sale: Sale
    item: SaleItem
    reconciliation: Reconciliation
    sale_return: Optional[SaleReturn] = None


# ======================================================
# LOOKUPS
# ======================================================


def _lock_sale(sale_id) -> Sale:
    sale = Sale.objects.select_for_update().filter(pk=sale_id).first()
    if sale is None:
        raise NotFoundError(
            f"Sale {sale_id} not found", details={"sale_id": str(sale_id)}
        )
    return sale


def _lock_item(*, sale: Sale, item_id) -> SaleItem:
    item = SaleItem.objects.select_for_update().filter(pk=item_id, sale=sale).first()
    if item is None:
        raise NotFoundError(
            f"Sale item {item_id} not found on sale {sale.id}",
            details={"sale_id": str(sale.id), "item_id": str(item_id)},
        )
    return item


def _check_imei(item: SaleItem, imei: str) -> None:
    if imei != item.imei:
        raise InvalidInputError(
            f"IMEI {imei} does not match sale item {item.id}",
            details={"item_id": str(item.id), "imei": imei, "item_imei": item.imei},
        )


def _resolve_unit_id(item: SaleItem, unit_id):
    """
    The unit defaults to the line's unit; a supplied id must agree with it.
    A supplied id on a line whose unit row was deleted is NotFound.
    """
    if unit_id is None or unit_id == "":
        return item.unit_id

    supplied = to_uuid(unit_id, field_name="unit_id")
    if item.unit_id is None:
        raise NotFoundError(
            f"Inventory unit {supplied} (IMEI {item.imei}) no longer exists",
            details={"item_id": str(item.id), "unit_id": str(supplied), "imei": item.imei},
        )
    if supplied != item.unit_id:
        raise InvalidInputError(
            f"Unit {supplied} is not the unit sold on item {item.id}",
            details={
                "item_id": str(item.id),
                "unit_id": str(supplied),
                "item_unit_id": str(item.unit_id),
            },
        )
    return supplied


def _require_unit_updated(rows: int, *, item: SaleItem, unit_id) -> None:
    if rows == 0:
        raise NotFoundError(
            f"Inventory unit {unit_id} (IMEI {item.imei}) not found",
            details={"unit_id": str(unit_id), "imei": item.imei},
        )


def _transition(item: SaleItem, *, status: str, reason, restocked: bool = False):
    validate_item_transition(item=item, target_status=status)

    item.status = status
    item.cancellation_reason = reason
    fields = ["status", "cancellation_reason"]
    if restocked:
        item.restocked_at = timezone.now()
        fields.append("restocked_at")
    item.save(update_fields=fields)


def _run(operation: str, fn, **kwargs) -> CorrectionResult:
    try:
        return fn(**kwargs)
    except DatabaseError as exc:
        logger.exception(
            "Sale correction failed in storage",
            extra={
                "operation": operation,
                "sale_id": str(kwargs.get("sale_id")),
                "item_id": str(kwargs.get("item_id")),
            },
        )
        raise InternalError(
            f"{operation} could not be saved",
            details={
                "sale_id": str(kwargs.get("sale_id")),
                "item_id": str(kwargs.get("item_id")),
            },
        ) from exc


# ======================================================
# CANCEL
# ======================================================


@transaction.atomic
def _cancel_item_atomic(*, sale_id, item_id, imei, reason, unit_id) -> CorrectionResult:
    sale = _lock_sale(sale_id)
    item = _lock_item(sale=sale, item_id=item_id)
    _check_imei(item, imei)
    target_unit_id = _resolve_unit_id(item, unit_id)

    _transition(item, status=SaleItem.STATUS_CANCELLED, reason=reason)

    if not item.is_special_sale_item:
        if target_unit_id is None:
            logger.warning(
                "Cancelled line has no inventory unit left to reactivate",
                extra={"sale_id": str(sale.id), "item_id": str(item.id), "imei": imei},
            )
        else:
            rows = reactivate_unit(unit_id=target_unit_id, imei=imei)
            _require_unit_updated(rows, item=item, unit_id=target_unit_id)

    reconciliation = reconcile_sale(sale)

    logger.info(
        "Sale item cancelled",
        extra={
            "sale_id": str(sale.id),
            "item_id": str(item.id),
            "imei": imei,
            "total_amount": str(reconciliation.total_amount),
            "payment_status": reconciliation.payment_status,
        },
    )
    return CorrectionResult(sale=sale, item=item, reconciliation=reconciliation)


def cancel_item(*, sale_id, item_id, imei, reason=None, unit_id=None) -> CorrectionResult:
    """
    Cancel one sale line and put its unit back on sale.

    `reason` is optional. Lines of special sales leave inventory untouched.
    """
    return _run(
        "cancel_item",
        _cancel_item_atomic,
        sale_id=to_uuid(sale_id, field_name="sale_id"),
        item_id=to_uuid(item_id, field_name="item_id"),
        imei=require_text(imei, field_name="imei"),
        reason=optional_text(reason),
        unit_id=unit_id,
    )


# ======================================================
# RETURN
# ======================================================


@transaction.atomic
def _return_item_atomic(
    *, sale_id, item_id, client_name, imei, reason, unit_id
) -> CorrectionResult:
    sale = _lock_sale(sale_id)
    item = _lock_item(sale=sale, item_id=item_id)
    _check_imei(item, imei)
    target_unit_id = _resolve_unit_id(item, unit_id)

    _transition(item, status=SaleItem.STATUS_RETURNED, reason=reason)

    if not item.is_special_sale_item:
        if target_unit_id is None:
            logger.warning(
                "Returned line has no inventory unit left to flag",
                extra={"sale_id": str(sale.id), "item_id": str(item.id), "imei": imei},
            )
        else:
            rows = mark_unit_returned(unit_id=target_unit_id, imei=imei)
            _require_unit_updated(rows, item=item, unit_id=target_unit_id)

    client = find_client_by_name(client_name)
    if client is None:
        logger.warning(
            "Client not found for return; recording without client reference",
            extra={
                "sale_id": str(sale.id),
                "item_id": str(item.id),
                "client_name": client_name,
            },
        )

    sale_return = SaleReturn.objects.create(
        sale=sale,
        sale_item=item,
        client=client,
        client_name=client_name,
        unit_id=target_unit_id,
        imei=item.imei,
        brand=item.brand,
        model_name=item.model_name,
        storage=item.storage,
        kind=item.kind,
        carton_type=item.carton_type,
        reason=reason,
        status=SaleReturn.STATUS_RETURNED,
        is_special_sale_item=item.is_special_sale_item,
    )

    reconciliation = reconcile_sale(sale)

    logger.info(
        "Sale item returned",
        extra={
            "sale_id": str(sale.id),
            "item_id": str(item.id),
            "return_id": str(sale_return.id),
            "imei": imei,
            "total_amount": str(reconciliation.total_amount),
            "payment_status": reconciliation.payment_status,
        },
    )
    return CorrectionResult(
        sale=sale,
        item=item,
        reconciliation=reconciliation,
        sale_return=sale_return,
    )


def return_item(
    *, sale_id, item_id, client_name, imei, reason, unit_id=None
) -> CorrectionResult:
    """
    Record a client return for one sale line.

    The unit is flagged `returned` (not resellable until restocked) unless
    the line belongs to a special sale. A SaleReturn row is always written.
    """
    return _run(
        "return_item",
        _return_item_atomic,
        sale_id=to_uuid(sale_id, field_name="sale_id"),
        item_id=to_uuid(item_id, field_name="item_id"),
        client_name=require_text(client_name, field_name="client_name"),
        imei=require_text(imei, field_name="imei"),
        reason=require_text(reason, field_name="reason"),
        unit_id=unit_id,
    )


# ======================================================
# RENDU (RETURNED TO STOCK)
# ======================================================


@transaction.atomic
def _mark_rendu_atomic(*, sale_id, item_id, imei, reason, unit_id) -> CorrectionResult:
    sale = _lock_sale(sale_id)
    item = _lock_item(sale=sale, item_id=item_id)
    _check_imei(item, imei)
    target_unit_id = _resolve_unit_id(item, unit_id)

    _transition(
        item,
        status=SaleItem.STATUS_RETURNED_TO_STOCK,
        reason=reason,
        restocked=True,
    )

    rows = restock_unit(unit_id=target_unit_id, imei=imei)
    _require_unit_updated(rows, item=item, unit_id=target_unit_id)

    reconciliation = reconcile_sale(sale)

    logger.info(
        "Sale item returned to stock",
        extra={
            "sale_id": str(sale.id),
            "item_id": str(item.id),
            "unit_id": str(target_unit_id),
            "imei": imei,
            "total_amount": str(reconciliation.total_amount),
            "payment_status": reconciliation.payment_status,
        },
    )
    return CorrectionResult(sale=sale, item=item, reconciliation=reconciliation)


def mark_rendu(*, sale_id, item_id, imei, reason, unit_id) -> CorrectionResult:
    """
    The client brought the unit back and it goes straight back on the shelf:
    unit `active` again with quantity + 1, line `returned_to_stock`.
    """
    return _run(
        "mark_rendu",
        _mark_rendu_atomic,
        sale_id=to_uuid(sale_id, field_name="sale_id"),
        item_id=to_uuid(item_id, field_name="item_id"),
        imei=require_text(imei, field_name="imei"),
        reason=require_text(reason, field_name="reason"),
        unit_id=to_uuid(unit_id, field_name="unit_id"),
    )
