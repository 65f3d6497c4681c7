# sales/models/sale.py

import uuid
from decimal import Decimal

from django.db import models
from django.utils import timezone

from clients.models import Client


class Sale(models.Model):
    """
    A sale of one or more IMEI-tracked units to a client.

    GUARANTEES:
    - total_amount / payment_status are derived by the sales services only
    - client, sold_at and the special-invoice flags never change after creation
    - Never deleted (history is corrected through item statuses instead)

    SPECIAL SALES:
    - is_special_invoice marks a negotiated sale
    - negotiated_total records the figure agreed at creation time; it is the
      authoritative total until the first correction recomputes from items
    """

    STATUS_AWAITING_PAYMENT = "awaiting_payment"
    STATUS_PARTIALLY_PAID = "partially_paid"
    STATUS_FULLY_PAID = "fully_paid"
    STATUS_CANCELLED = "cancelled"

    STATUS_CHOICES = [
        (STATUS_AWAITING_PAYMENT, "Awaiting payment"),
        (STATUS_PARTIALLY_PAID, "Partially paid"),
        (STATUS_FULLY_PAID, "Fully paid"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    client = models.ForeignKey(
        Client,
        on_delete=models.PROTECT,
        related_name="sales",
    )

    sold_at = models.DateTimeField(default=timezone.now, db_index=True)

    total_amount = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    amount_paid = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )

    payment_status = models.CharField(
        max_length=32,
        choices=STATUS_CHOICES,
        default=STATUS_AWAITING_PAYMENT,
    )

    is_special_invoice = models.BooleanField(default=False)

    negotiated_total = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Total agreed at creation time for negotiated sales (record only).",
    )

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-sold_at"]
        indexes = [
            models.Index(fields=["sold_at"], name="sales_sale_sold_at_idx"),
            models.Index(fields=["payment_status"], name="sales_sale_pay_status_idx"),
        ]

    _IMMUTABLE_FIELDS = (
        "client_id",
        "sold_at",
        "is_special_invoice",
        "negotiated_total",
    )

    @property
    def amount_due(self) -> Decimal:
        return Decimal(self.total_amount) - Decimal(self.amount_paid)

    def _validate_immutable(self, previous: "Sale"):
        for field in self._IMMUTABLE_FIELDS:
            if getattr(self, field) != getattr(previous, field):
                raise ValueError(f"Sale field '{field}' cannot be changed.")

    def save(self, *args, **kwargs):
        if not self._state.adding:
            previous = Sale.objects.filter(pk=self.pk).first()
            if previous is not None:
                self._validate_immutable(previous)

        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise RuntimeError("Sale records cannot be deleted")

    def __str__(self):
        return f"Sale {self.id} | {self.total_amount} | {self.payment_status}"
