# sales/models/sale_return.py

"""
======================================================
PATH: sales/models/sale_return.py
======================================================
SALE RETURN (APPEND-ONLY AUDIT)

Purpose:
- Written when a sale line is returned by the client.
- Keeps the client name as typed and a snapshot of the unit.

Design guarantees:
- Append-only (no updates, no deletes)
- client is NULL when the name could not be resolved to a Client row
"""

from __future__ import annotations

import uuid

from django.db import models
from django.utils import timezone

from clients.models import Client
from inventory.models import InventoryUnit

from .sale import Sale
from .sale_item import SaleItem


class SaleReturn(models.Model):
    STATUS_RETURNED = "returned"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    sale = models.ForeignKey(
        Sale,
        on_delete=models.PROTECT,
        related_name="returns",
    )

    sale_item = models.ForeignKey(
        SaleItem,
        on_delete=models.PROTECT,
        related_name="returns",
    )

    client = models.ForeignKey(
        Client,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="returns",
    )
    client_name = models.CharField(max_length=255)

    unit = models.ForeignKey(
        InventoryUnit,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="returns",
    )

    # Unit snapshot (from the sale line)
    imei = models.CharField(max_length=64, db_index=True)
    brand = models.CharField(max_length=128)
    model_name = models.CharField(max_length=128)
    storage = models.CharField(max_length=64, null=True, blank=True)
    kind = models.CharField(max_length=64, null=True, blank=True)
    carton_type = models.CharField(max_length=64, null=True, blank=True)

    reason = models.TextField()
    status = models.CharField(max_length=32, default=STATUS_RETURNED)
    is_special_sale_item = models.BooleanField(default=False)

    returned_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-returned_at"]
        indexes = [
            models.Index(fields=["sale", "returned_at"], name="sales_return_sale_at_idx"),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise RuntimeError("SaleReturn records are immutable")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise RuntimeError("SaleReturn records cannot be deleted")

    def __str__(self):
        return f"Return | {self.imei} | {self.client_name}"
