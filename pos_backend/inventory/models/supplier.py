# inventory/models/supplier.py

import uuid

from django.db import models


class Supplier(models.Model):
    """
    Supplier master data. Catalog CRUD lives outside this service; units only
    point at it so sale read models can show where a unit came from.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255)
    phone = models.CharField(max_length=50, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name
