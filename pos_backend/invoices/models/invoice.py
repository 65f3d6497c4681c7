# invoices/models/invoice.py

"""
INVOICE (FINANCIAL MIRROR)

One invoice per sale. Status uses the same vocabulary as
Sale.payment_status.

After every sync:
    current_amount_due == original_amount - amount_paid
"""

import uuid
from decimal import Decimal

from django.db import models


class Invoice(models.Model):
    class Status(models.TextChoices):
        AWAITING_PAYMENT = "awaiting_payment", "Awaiting payment"
        PARTIALLY_PAID = "partially_paid", "Partially paid"
        FULLY_PAID = "fully_paid", "Fully paid"
        CANCELLED = "cancelled", "Cancelled"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    sale = models.OneToOneField(
        "sales.Sale",
        on_delete=models.PROTECT,
        related_name="invoice",
    )

    invoice_no = models.CharField(max_length=64, unique=True)

    status = models.CharField(
        max_length=32,
        choices=Status.choices,
        default=Status.AWAITING_PAYMENT,
        db_index=True,
    )

    original_amount = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    current_amount_due = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    amount_paid = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.invoice_no} ({self.status})"
