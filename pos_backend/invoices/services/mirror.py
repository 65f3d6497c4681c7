# invoices/services/mirror.py

"""
======================================================
PATH: invoices/services/mirror.py
======================================================
INVOICE MIRROR SYNC

Purpose:
- Copy a sale's reconciled figures onto its invoice row.

Rules:
- Keyed by sale id; returns the number of rows updated.
- A sale without an invoice is NOT an error (0 rows, logged at debug).
- Runs inside the caller's transaction so a failed correction never leaves
  a half-synced invoice behind.
"""

from __future__ import annotations

import logging

from django.utils import timezone

from invoices.models import Invoice

logger = logging.getLogger("invoices")


def sync_invoice_mirror(
    *,
    sale_id,
    status: str,
    original_amount,
    current_amount_due,
    amount_paid,
) -> int:
    updated = Invoice.objects.filter(sale_id=sale_id).update(
        status=status,
        original_amount=original_amount,
        current_amount_due=current_amount_due,
        amount_paid=amount_paid,
        updated_at=timezone.now(),
    )

    if updated:
        logger.info(
            "Invoice mirror synced",
            extra={
                "sale_id": str(sale_id),
                "status": status,
                "original_amount": str(original_amount),
                "current_amount_due": str(current_amount_due),
                "amount_paid": str(amount_paid),
            },
        )
    else:
        logger.debug("No invoice to sync", extra={"sale_id": str(sale_id)})

    return updated


def cancel_invoice_mirror(*, sale_id) -> int:
    updated = Invoice.objects.filter(sale_id=sale_id).update(
        status=Invoice.Status.CANCELLED,
        updated_at=timezone.now(),
    )
    if updated:
        logger.info("Invoice mirror cancelled", extra={"sale_id": str(sale_id)})
    return updated
