# clients/services/directory.py

"""
======================================================
PATH: clients/services/directory.py
======================================================
CLIENT DIRECTORY

Purpose:
- Resolve the buyer of a sale by name (insert-if-absent).
- Keep the stored phone number current.
- Look a client up by name for return records.

Rules:
- Names are compared after trimming surrounding whitespace.
- An empty phone never overwrites a stored one.
- Callers own the transaction; nothing here opens its own.
"""

from __future__ import annotations

import logging
from typing import Optional

from clients.models import Client
from sales.exceptions import InvalidInputError

logger = logging.getLogger("clients")


def _clean(value) -> str:
    return str(value or "").strip()


def find_client_by_name(name) -> Optional[Client]:
    cleaned = _clean(name)
    if not cleaned:
        return None
    return Client.objects.filter(name=cleaned).first()


def resolve_client(*, name, phone=None) -> Client:
    """
    Return the client called `name`, creating it when absent.

    When `phone` is non-empty and differs from the stored value, the stored
    phone is updated.
    """
    cleaned = _clean(name)
    if not cleaned:
        raise InvalidInputError(
            "client name is required", details={"field": "client_name"}
        )

    new_phone = _clean(phone) or None

    client = Client.objects.select_for_update().filter(name=cleaned).first()
    if client is None:
        client = Client.objects.create(name=cleaned, phone=new_phone)
        logger.info(
            "Client created",
            extra={"client_id": str(client.id), "client_name": cleaned},
        )
        return client

    if new_phone and new_phone != client.phone:
        client.phone = new_phone
        client.save(update_fields=["phone", "updated_at"])
        logger.info(
            "Client phone updated",
            extra={"client_id": str(client.id), "client_name": cleaned},
        )

    return client
