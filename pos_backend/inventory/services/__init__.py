from .unit_ledger import (
    find_unit_for_sale,
    mark_unit_returned,
    mark_unit_sold,
    reactivate_unit,
    restock_unit,
)

__all__ = [
    "find_unit_for_sale",
    "mark_unit_sold",
    "reactivate_unit",
    "mark_unit_returned",
    "restock_unit",
]
