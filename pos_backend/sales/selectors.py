# sales/selectors.py

"""
SALES READ MODEL

Query helpers for the sales history screens: sale + client + invoice, lines
with their unit's supplier, and return records. Newest sales first.
"""

from __future__ import annotations

from django.db.models import Prefetch

from sales.models import Sale, SaleItem, SaleReturn


def sales_queryset():
    return (
        Sale.objects.select_related("client", "invoice")
        .prefetch_related(
            Prefetch(
                "items",
                queryset=SaleItem.objects.select_related("unit__supplier").order_by(
                    "created_at", "id"
                ),
            ),
            Prefetch(
                "returns",
                queryset=SaleReturn.objects.order_by("-returned_at"),
            ),
        )
        .order_by("-sold_at")
    )
