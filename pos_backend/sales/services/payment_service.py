# sales/services/payment_service.py

"""
SALE PAYMENT / TOTAL UPDATE

Records a new amount_paid (and optionally a renegotiated total) on a sale,
then re-derives payment_status and syncs the invoice mirror.

Hard rules:
- The sale row is locked for the whole read-then-write.
- Cancelled sales are terminal.
- Never below collected money: a new total may not drop under what the
  sale has already collected.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.db import DatabaseError, transaction

from sales.models import Sale
from sales.exceptions import (
    ConflictError,
    InternalError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
)
from sales.services.reconciliation import sync_sale_invoice
from sales.services.sale_lifecycle import derive_payment_status
from sales.services.validators import money, to_money, to_uuid

logger = logging.getLogger("sales")

ZERO = Decimal("0.00")


@transaction.atomic
def _update_payment_atomic(*, sale_id, amount_paid: Decimal, new_total) -> Sale:
    sale = Sale.objects.select_for_update().filter(pk=sale_id).first()
    if sale is None:
        raise NotFoundError(
            f"Sale {sale_id} not found", details={"sale_id": str(sale_id)}
        )

    if sale.payment_status == Sale.STATUS_CANCELLED:
        raise InvalidStateError(
            f"Sale {sale.id} is cancelled; payments can no longer be recorded",
            details={"sale_id": str(sale.id), "payment_status": sale.payment_status},
        )

    current_total = money(sale.total_amount)
    current_paid = money(sale.amount_paid)
    resolved_total = new_total if new_total is not None else current_total

    if resolved_total <= ZERO:
        raise InvalidInputError(
            "Sale total must be greater than zero",
            details={"sale_id": str(sale.id), "total_amount": str(resolved_total)},
        )

    if amount_paid > resolved_total:
        raise ConflictError(
            f"Amount paid ({amount_paid}) exceeds the sale total ({resolved_total})",
            details={
                "sale_id": str(sale.id),
                "amount_paid": str(amount_paid),
                "total_amount": str(resolved_total),
            },
        )

    if new_total is not None and current_paid > ZERO and new_total < current_paid:
        raise ConflictError(
            f"New total ({new_total}) is below the amount already paid ({current_paid})",
            details={
                "sale_id": str(sale.id),
                "new_total_amount": str(new_total),
                "amount_paid": str(current_paid),
            },
        )

    sale.amount_paid = amount_paid
    sale.total_amount = resolved_total
    sale.payment_status = derive_payment_status(resolved_total, amount_paid)
    sale.save(
        update_fields=["amount_paid", "total_amount", "payment_status", "updated_at"]
    )

    invoice_rows = sync_sale_invoice(sale)

    logger.info(
        "Sale payment updated",
        extra={
            "sale_id": str(sale.id),
            "amount_paid": str(amount_paid),
            "previous_amount_paid": str(current_paid),
            "total_amount": str(resolved_total),
            "payment_status": sale.payment_status,
            "invoice_rows": invoice_rows,
        },
    )
    return sale


def update_payment(*, sale_id, amount_paid, new_total_amount=None) -> Sale:
    sale_uuid = to_uuid(sale_id, field_name="sale_id")

    paid = to_money(amount_paid, field_name="amount_paid")
    if paid < ZERO:
        raise InvalidInputError(
            "amount_paid cannot be negative", details={"amount_paid": str(paid)}
        )

    new_total = None
    if new_total_amount is not None and new_total_amount != "":
        new_total = to_money(new_total_amount, field_name="new_total_amount")

    try:
        return _update_payment_atomic(
            sale_id=sale_uuid, amount_paid=paid, new_total=new_total
        )
    except DatabaseError as exc:
        logger.exception(
            "Payment update failed in storage", extra={"sale_id": str(sale_uuid)}
        )
        raise InternalError(
            "Payment update could not be saved", details={"sale_id": str(sale_uuid)}
        ) from exc
