# sales/services/validators.py

"""
INPUT NORMALIZATION

Primitive coercion shared by the sales services. Every failure raises
InvalidInputError naming the field.
"""

from __future__ import annotations

import uuid
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from sales.exceptions import InvalidInputError

TWOPLACES = Decimal("0.01")

# DecimalField(max_digits=14, decimal_places=2)
MAX_MONEY = Decimal("999999999999.99")


def money(v) -> Decimal:
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def to_money(value, *, field_name: str) -> Decimal:
    if value is None or value == "" or value == "null":
        raise InvalidInputError(
            f"{field_name} is required", details={"field": field_name}
        )
    if isinstance(value, bool):
        raise InvalidInputError(
            f"{field_name} must be a number",
            details={"field": field_name, "value": value},
        )
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise InvalidInputError(
            f"{field_name} must be a number",
            details={"field": field_name, "value": str(value)},
        ) from exc
    if not amount.is_finite():
        raise InvalidInputError(
            f"{field_name} must be a finite number",
            details={"field": field_name, "value": str(value)},
        )
    if abs(amount) > MAX_MONEY:
        raise InvalidInputError(
            f"{field_name} exceeds the largest storable amount ({MAX_MONEY})",
            details={"field": field_name, "value": str(value)},
        )
    return money(amount)


def to_positive_int(value, *, field_name: str) -> int:
    if value is None or value == "":
        raise InvalidInputError(
            f"{field_name} is required", details={"field": field_name}
        )
    if isinstance(value, bool):
        raise InvalidInputError(
            f"{field_name} must be a whole number",
            details={"field": field_name, "value": value},
        )
    if isinstance(value, int):
        result = value
    elif isinstance(value, str) and value.strip().isdigit():
        result = int(value.strip())
    else:
        raise InvalidInputError(
            f"{field_name} must be a whole number",
            details={"field": field_name, "value": str(value)},
        )
    if result < 1:
        raise InvalidInputError(
            f"{field_name} must be at least 1",
            details={"field": field_name, "value": result},
        )
    return result


def require_text(value, *, field_name: str) -> str:
    cleaned = str(value).strip() if value is not None else ""
    if not cleaned:
        raise InvalidInputError(
            f"{field_name} is required", details={"field": field_name}
        )
    return cleaned


def optional_text(value):
    cleaned = str(value).strip() if value is not None else ""
    return cleaned or None


def to_uuid(value, *, field_name: str) -> uuid.UUID:
    if value is None or value == "":
        raise InvalidInputError(
            f"{field_name} is required", details={"field": field_name}
        )
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value).strip())
    except (TypeError, ValueError, AttributeError) as exc:
        raise InvalidInputError(
            f"{field_name} must be a valid id",
            details={"field": field_name, "value": str(value)},
        ) from exc
