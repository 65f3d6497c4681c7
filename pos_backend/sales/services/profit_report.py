# sales/services/profit_report.py

"""
PROFIT REPORT

Contract:
- Lines counted: ACTIVE sale lines whose sale's invoice is `fully_paid`.
- unit_profit = unit_sale_price - unit_purchase_price
- line_profit = quantity_sold * unit_profit
- date is optional; when given it must be YYYY-MM-DD and restricts to sales
  made that calendar day (server timezone).
- Newest sales first.
"""

from __future__ import annotations

import re
from datetime import date as date_cls
from decimal import Decimal

from django.db.models import DecimalField, ExpressionWrapper, F

from invoices.models import Invoice
from sales.models import SaleItem
from sales.exceptions import InvalidInputError
from sales.services.validators import money

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_MONEY_FIELD = DecimalField(max_digits=14, decimal_places=2)


def _parse_day(value):
    if value is None or value == "":
        return None
    if isinstance(value, date_cls):
        return value

    raw = str(value).strip()
    if not _DATE_RE.match(raw):
        raise InvalidInputError(
            "Invalid date format. Use YYYY-MM-DD.", details={"date": raw}
        )
    try:
        return date_cls.fromisoformat(raw)
    except ValueError as exc:
        raise InvalidInputError(
            "Invalid date format. Use YYYY-MM-DD.", details={"date": raw}
        ) from exc


def profit_report(date=None) -> dict:
    day = _parse_day(date)

    unit_profit = ExpressionWrapper(
        F("unit_sale_price") - F("unit_purchase_price"), output_field=_MONEY_FIELD
    )
    qs = (
        SaleItem.objects.filter(
            status=SaleItem.STATUS_ACTIVE,
            sale__invoice__status=Invoice.Status.FULLY_PAID,
        )
        .select_related("sale")
        .annotate(unit_profit=unit_profit)
        .annotate(
            line_profit=ExpressionWrapper(
                F("quantity_sold") * F("unit_profit"), output_field=_MONEY_FIELD
            )
        )
        .order_by("-sale__sold_at", "created_at")
    )
    if day is not None:
        qs = qs.filter(sale__sold_at__date=day)

    rows = []
    total = Decimal("0.00")
    for item in qs:
        line_profit = money(item.line_profit)
        total += line_profit
        rows.append(
            {
                "sale_item_id": str(item.id),
                "sale_id": str(item.sale_id),
                "imei": item.imei,
                "brand": item.brand,
                "model_name": item.model_name,
                "storage": item.storage,
                "kind": item.kind,
                "carton_type": item.carton_type,
                "unit_purchase_price": money(item.unit_purchase_price),
                "unit_sale_price": money(item.unit_sale_price),
                "quantity_sold": item.quantity_sold,
                "unit_profit": money(item.unit_profit),
                "line_profit": line_profit,
                "sold_at": item.sale.sold_at,
            }
        )

    return {
        "date": day.isoformat() if day else None,
        "sold_items": rows,
        "total_profit": money(total),
    }
