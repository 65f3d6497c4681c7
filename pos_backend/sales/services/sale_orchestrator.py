# sales/services/sale_orchestrator.py

"""
SALE CREATION ORCHESTRATOR (APPLICATION SERVICE)

Purpose:
- Turn a client name + list of IMEI lines into a persisted Sale (atomic).
- Validate every line against live inventory before anything is written.
- Flip each sold unit to `sold`.

Hard rules:
- Unit rows are locked while read (two sales can never take the same unit).
- No line may be priced at or below zero, or below its purchase price.
  This holds for negotiated sales too.
- A negotiated total, when supplied, is stored verbatim as total_amount.
- A unit may appear on at most one line of a sale.
- amount_paid above the total is accepted and derives `fully_paid`.

Notes:
- Client resolution, line validation, sale/line inserts and unit flips all
  succeed together or roll back together.
- Invoice rows for special sales are created by the invoicing workflow,
  not here.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.db import DatabaseError, transaction

from clients.services import resolve_client
from inventory.models import InventoryUnit
from inventory.services import find_unit_for_sale, mark_unit_sold
from sales.models import Sale, SaleItem
from sales.exceptions import (
    InternalError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
    PricingViolationError,
)
from sales.services.sale_lifecycle import derive_payment_status
from sales.services.validators import (
    money,
    optional_text,
    require_text,
    to_money,
    to_positive_int,
)

logger = logging.getLogger("sales")

ZERO = Decimal("0.00")


# ======================================================
# INPUT NORMALIZATION
# ======================================================


def _normalize_items(items) -> list[dict]:
    if not isinstance(items, (list, tuple)) or not items:
        raise InvalidInputError(
            "items must be a non-empty list", details={"field": "items"}
        )

    out = []
    for idx, raw in enumerate(items):
        if not isinstance(raw, dict):
            raise InvalidInputError(
                f"items[{idx}] must be an object", details={"index": idx}
            )

        override = raw.get("unit_sale_price")
        out.append(
            {
                "imei": require_text(raw.get("imei"), field_name=f"items[{idx}].imei"),
                "brand": require_text(raw.get("brand"), field_name=f"items[{idx}].brand"),
                "model_name": require_text(
                    raw.get("model_name"), field_name=f"items[{idx}].model_name"
                ),
                "storage": optional_text(raw.get("storage")),
                "kind": optional_text(raw.get("kind")),
                "carton_type": optional_text(raw.get("carton_type")),
                "quantity_sold": to_positive_int(
                    raw.get("quantity_sold"), field_name=f"items[{idx}].quantity_sold"
                ),
                "unit_sale_price": (
                    None
                    if override is None or override == ""
                    else to_money(override, field_name=f"items[{idx}].unit_sale_price")
                ),
            }
        )

    return out


def _normalize_negotiated_total(value):
    if value is None or value == "":
        return None
    total = to_money(value, field_name="negotiated_total")
    if total <= ZERO:
        raise InvalidInputError(
            "negotiated_total must be greater than zero",
            details={"negotiated_total": str(total)},
        )
    return total


# ======================================================
# LINE PRICING
# ======================================================


def _load_unit(line: dict) -> InventoryUnit:
    unit = find_unit_for_sale(
        imei=line["imei"],
        brand=line["brand"],
        model_name=line["model_name"],
        storage=line["storage"],
        kind=line["kind"],
        carton_type=line["carton_type"],
    )
    if unit is None:
        raise NotFoundError(
            f"No inventory unit matches IMEI {line['imei']} "
            f"({line['brand']} {line['model_name']})",
            details={
                "imei": line["imei"],
                "brand": line["brand"],
                "model_name": line["model_name"],
                "storage": line["storage"],
                "kind": line["kind"],
                "carton_type": line["carton_type"],
            },
        )

    if unit.status != InventoryUnit.Status.ACTIVE:
        raise InvalidStateError(
            f"Unit with IMEI {unit.imei} is not available for sale "
            f"(status: {unit.status})",
            details={"imei": unit.imei, "unit_id": str(unit.id), "status": unit.status},
        )

    return unit


def _price_line(line: dict, unit: InventoryUnit) -> tuple[Decimal, Decimal]:
    sale_price = (
        line["unit_sale_price"]
        if line["unit_sale_price"] is not None
        else money(unit.sale_price)
    )
    purchase_price = money(unit.purchase_price)

    if sale_price <= ZERO or sale_price < purchase_price:
        raise PricingViolationError(
            f"Invalid sale price for IMEI {unit.imei}: {sale_price} "
            f"(purchase price {purchase_price})",
            details={
                "imei": unit.imei,
                "unit_sale_price": str(sale_price),
                "unit_purchase_price": str(purchase_price),
            },
        )

    return sale_price, purchase_price


# ======================================================
# ORCHESTRATOR
# ======================================================


@transaction.atomic
def _create_sale_atomic(
    *,
    client_name: str,
    client_phone,
    lines: list[dict],
    amount_paid: Decimal,
    is_special_invoice: bool,
    negotiated_total,
) -> Sale:
    client = resolve_client(name=client_name, phone=client_phone)

    priced = []
    seen_units = set()
    computed_total = ZERO
    for idx, line in enumerate(lines):
        unit = _load_unit(line)
        if unit.id in seen_units:
            raise InvalidInputError(
                f"Unit with IMEI {unit.imei} appears more than once in this sale",
                details={"index": idx, "imei": unit.imei, "unit_id": str(unit.id)},
            )
        seen_units.add(unit.id)
        sale_price, purchase_price = _price_line(line, unit)
        computed_total += sale_price * line["quantity_sold"]
        priced.append((line, unit, sale_price, purchase_price))

    total = negotiated_total if negotiated_total is not None else money(computed_total)

    sale = Sale.objects.create(
        client=client,
        total_amount=total,
        amount_paid=amount_paid,
        payment_status=derive_payment_status(total, amount_paid),
        is_special_invoice=is_special_invoice,
        negotiated_total=negotiated_total,
    )

    for line, unit, sale_price, purchase_price in priced:
        SaleItem.objects.create(
            sale=sale,
            unit=unit,
            imei=unit.imei,
            brand=unit.brand,
            model_name=unit.model_name,
            storage=unit.storage,
            kind=unit.kind,
            carton_type=unit.carton_type,
            unit_sale_price=sale_price,
            unit_purchase_price=purchase_price,
            quantity_sold=line["quantity_sold"],
            status=SaleItem.STATUS_ACTIVE,
            is_special_sale_item=is_special_invoice,
        )
        mark_unit_sold(unit.id)

    logger.info(
        "Sale created",
        extra={
            "sale_id": str(sale.id),
            "client_id": str(client.id),
            "items": len(priced),
            "total_amount": str(total),
            "amount_paid": str(amount_paid),
            "payment_status": sale.payment_status,
            "is_special_invoice": is_special_invoice,
        },
    )
    return sale


def create_sale(
    *,
    client_name,
    items,
    amount_paid,
    client_phone=None,
    is_special_invoice: bool = False,
    negotiated_total=None,
) -> Sale:
    """
    Create a sale and its lines against live inventory.

    Raises:
        InvalidInputError: missing/malformed fields, the same unit on two lines.
        NotFoundError: a line matches no inventory unit.
        InvalidStateError: a matched unit is not `active`.
        PricingViolationError: a line is priced at/below zero or below cost.
        InternalError: the database failed; nothing was written.
    """
    name = require_text(client_name, field_name="client_name")
    lines = _normalize_items(items)
    paid = to_money(amount_paid, field_name="amount_paid")
    if paid < ZERO:
        raise InvalidInputError(
            "amount_paid cannot be negative", details={"amount_paid": str(paid)}
        )
    negotiated = _normalize_negotiated_total(negotiated_total)

    try:
        return _create_sale_atomic(
            client_name=name,
            client_phone=client_phone,
            lines=lines,
            amount_paid=paid,
            is_special_invoice=bool(is_special_invoice),
            negotiated_total=negotiated,
        )
    except DatabaseError as exc:
        logger.exception(
            "Sale creation failed in storage", extra={"client_name": name}
        )
        raise InternalError(
            "Sale could not be saved", details={"client_name": name}
        ) from exc
