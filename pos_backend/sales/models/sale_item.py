# sales/models/sale_item.py

"""
SALE ITEM (SNAPSHOT LINE)

One sold unit line. Catalog attributes and prices are copied at sale time so
the line survives later catalog edits or deletion.

Notes:
- Only status, cancellation_reason and restocked_at may change after creation
  (corrections). Everything else is an immutable snapshot.
- Lines are never deleted; a correction moves status out of `active`.
"""

from __future__ import annotations

import uuid

from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from inventory.models import InventoryUnit

from .sale import Sale


class SaleItem(models.Model):
    STATUS_ACTIVE = "active"
    STATUS_CANCELLED = "cancelled"
    STATUS_RETURNED = "returned"
    STATUS_RETURNED_TO_STOCK = "returned_to_stock"

    STATUS_CHOICES = [
        (STATUS_ACTIVE, "Active"),
        (STATUS_CANCELLED, "Cancelled"),
        (STATUS_RETURNED, "Returned"),
        (STATUS_RETURNED_TO_STOCK, "Returned to stock"),
    ]

    INACTIVE_STATUSES = (
        STATUS_CANCELLED,
        STATUS_RETURNED,
        STATUS_RETURNED_TO_STOCK,
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    sale = models.ForeignKey(
        Sale,
        on_delete=models.PROTECT,
        related_name="items",
    )

    unit = models.ForeignKey(
        InventoryUnit,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="sale_items",
    )

    # Catalog snapshot
    imei = models.CharField(max_length=64, db_index=True)
    brand = models.CharField(max_length=128)
    model_name = models.CharField(max_length=128)
    storage = models.CharField(max_length=64, null=True, blank=True)
    kind = models.CharField(max_length=64, null=True, blank=True)
    carton_type = models.CharField(max_length=64, null=True, blank=True)

    unit_sale_price = models.DecimalField(max_digits=14, decimal_places=2)
    unit_purchase_price = models.DecimalField(max_digits=14, decimal_places=2)
    quantity_sold = models.PositiveIntegerField(default=1)

    status = models.CharField(
        max_length=32,
        choices=STATUS_CHOICES,
        default=STATUS_ACTIVE,
        db_index=True,
    )

    is_special_sale_item = models.BooleanField(default=False)

    cancellation_reason = models.TextField(null=True, blank=True)
    restocked_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["sale", "status"], name="sales_item_sale_status_idx"),
        ]

    _CORRECTABLE_FIELDS = ("status", "cancellation_reason", "restocked_at")

    _SNAPSHOT_FIELDS = (
        "sale_id",
        "unit_id",
        "imei",
        "brand",
        "model_name",
        "storage",
        "kind",
        "carton_type",
        "unit_sale_price",
        "unit_purchase_price",
        "quantity_sold",
        "is_special_sale_item",
        "created_at",
    )

    @property
    def line_total(self):
        return self.unit_sale_price * self.quantity_sold

    @property
    def is_active(self) -> bool:
        return self.status == self.STATUS_ACTIVE

    def _allow_correction_fields_only(self, previous: "SaleItem"):
        for field in self._SNAPSHOT_FIELDS:
            if getattr(self, field) != getattr(previous, field):
                raise ValidationError(f"SaleItem field '{field}' is immutable")

    def save(self, *args, **kwargs):
        if not self._state.adding:
            previous = SaleItem.objects.filter(pk=self.pk).first()
            if previous is None:
                raise ValidationError("SaleItem records are immutable")
            self._allow_correction_fields_only(previous)

        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise RuntimeError("SaleItem records cannot be deleted")

    def __str__(self):
        return f"{self.brand} {self.model_name} [{self.imei}] x {self.quantity_sold}"
