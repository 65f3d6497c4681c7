# clients/models/client.py

import uuid

from django.db import models


class Client(models.Model):
    """
    A buyer, identified by name.

    Notes:
    - name is the lookup key used at sale and return time, so it is unique
    - phone is optional and refreshed whenever a sale supplies a new value
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255, unique=True)
    phone = models.CharField(max_length=50, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name
