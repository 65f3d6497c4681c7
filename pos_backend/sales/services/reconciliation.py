# sales/services/reconciliation.py

"""
======================================================
PATH: sales/services/reconciliation.py
======================================================
SALE RECONCILIATION

Purpose:
- Recompute a sale's total from its ACTIVE lines.
- Re-derive payment_status from (total, amount_paid).
- Push the figures onto the invoice mirror.
- Cancel the sale (and its invoice) once no line is active any more.

Hard rules:
- The caller holds the Sale row lock (select_for_update) and the
  surrounding transaction.atomic block.
- amount_paid is payment history: it is read from the sale, never derived
  from line statuses.
- Order matters: totals -> invoice sync -> full-inactivity override.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from django.db.models import Count, DecimalField, ExpressionWrapper, F, Q, Sum

from invoices.services import cancel_invoice_mirror, sync_invoice_mirror
from sales.models import Sale, SaleItem
from sales.services.sale_lifecycle import derive_payment_status, is_fully_inactive
from sales.services.validators import money

logger = logging.getLogger("sales")


@dataclass(frozen=True)
class Reconciliation:
    total_amount: Decimal
    amount_paid: Decimal
    payment_status: str
    amount_due: Decimal
    sale_cancelled: bool
    invoice_rows: int


def active_items_total(sale: Sale) -> Decimal:
    line_total = ExpressionWrapper(
        F("unit_sale_price") * F("quantity_sold"),
        output_field=DecimalField(max_digits=14, decimal_places=2),
    )
    total = SaleItem.objects.filter(
        sale=sale, status=SaleItem.STATUS_ACTIVE
    ).aggregate(total=Sum(line_total))["total"]
    return money(total or 0)


def recompute_sale(sale: Sale) -> Sale:
    """
    Persist (sum of active lines, derived payment_status) on a locked sale.
    """
    new_total = active_items_total(sale)
    paid = money(sale.amount_paid)

    sale.total_amount = new_total
    sale.payment_status = derive_payment_status(new_total, paid)
    sale.save(update_fields=["total_amount", "payment_status", "updated_at"])

    logger.info(
        "Sale recomputed",
        extra={
            "sale_id": str(sale.id),
            "total_amount": str(new_total),
            "amount_paid": str(paid),
            "payment_status": sale.payment_status,
        },
    )
    return sale


def sync_sale_invoice(sale: Sale) -> int:
    total = money(sale.total_amount)
    paid = money(sale.amount_paid)
    return sync_invoice_mirror(
        sale_id=sale.id,
        status=sale.payment_status,
        original_amount=total,
        current_amount_due=total - paid,
        amount_paid=paid,
    )


def apply_full_inactivity_override(sale: Sale) -> bool:
    """
    When every line is cancelled/returned/restocked the sale is cancelled,
    whatever was paid. Returns True when the override fired.
    """
    counts = SaleItem.objects.filter(sale=sale).aggregate(
        total=Count("id"),
        inactive=Count("id", filter=Q(status__in=SaleItem.INACTIVE_STATUSES)),
    )
    if not is_fully_inactive(
        total_items=counts["total"] or 0,
        inactive_items=counts["inactive"] or 0,
    ):
        return False

    sale.payment_status = Sale.STATUS_CANCELLED
    sale.save(update_fields=["payment_status", "updated_at"])
    cancel_invoice_mirror(sale_id=sale.id)

    logger.info(
        "Sale cancelled: no active line left",
        extra={"sale_id": str(sale.id), "items": counts["total"]},
    )
    return True


def reconcile_sale(sale: Sale) -> Reconciliation:
    recompute_sale(sale)
    invoice_rows = sync_sale_invoice(sale)
    cancelled = apply_full_inactivity_override(sale)

    return Reconciliation(
        total_amount=money(sale.total_amount),
        amount_paid=money(sale.amount_paid),
        payment_status=sale.payment_status,
        amount_due=money(sale.total_amount) - money(sale.amount_paid),
        sale_cancelled=cancelled,
        invoice_rows=invoice_rows,
    )
