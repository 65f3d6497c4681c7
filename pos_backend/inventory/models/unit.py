# inventory/models/unit.py

"""
INVENTORY UNIT

One physical unit (phone, tablet, ...) identified by its IMEI and catalog
attributes.

STATUS MODEL:
- active   -> on hand, may be sold
- sold     -> referenced by an active sale line
- returned -> came back from a client, NOT automatically resellable

Identity tuple used at sale time:
    (imei, brand, model_name, storage?, kind?, carton_type?)
Absent optional attributes are stored as NULL and matched as NULL.
"""

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from .supplier import Supplier


class InventoryUnit(models.Model):
    class Status(models.TextChoices):
        ACTIVE = "active", "Active"
        SOLD = "sold", "Sold"
        RETURNED = "returned", "Returned"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    imei = models.CharField(max_length=64, db_index=True)
    brand = models.CharField(max_length=128)
    model_name = models.CharField(max_length=128)
    storage = models.CharField(max_length=64, null=True, blank=True)
    kind = models.CharField(
        max_length=64,
        null=True,
        blank=True,
        help_text="Product type, e.g. phone / tablet / accessory.",
    )
    carton_type = models.CharField(max_length=64, null=True, blank=True)

    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.ACTIVE,
        db_index=True,
    )

    purchase_price = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    sale_price = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )

    quantity = models.PositiveIntegerField(default=1)

    supplier = models.ForeignKey(
        Supplier,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="units",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(
                fields=["imei", "brand", "model_name"],
                name="inventory_i_imei_3c1e0b_idx",
            ),
            models.Index(fields=["status"], name="inventory_i_status_8d2f4a_idx"),
        ]

    def clean(self):
        if not (self.imei or "").strip():
            raise ValidationError("imei is required")
        if self.purchase_price is not None and Decimal(self.purchase_price) < 0:
            raise ValidationError("purchase_price cannot be negative")
        if self.sale_price is not None and Decimal(self.sale_price) < 0:
            raise ValidationError("sale_price cannot be negative")

    def __str__(self):
        return f"{self.brand} {self.model_name} [{self.imei}] ({self.status})"
