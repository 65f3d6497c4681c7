from .correction_orchestrator import (
    CorrectionResult,
    cancel_item,
    mark_rendu,
    return_item,
)
from .payment_service import update_payment
from .profit_report import profit_report
from .sale_orchestrator import create_sale

__all__ = [
    "create_sale",
    "cancel_item",
    "return_item",
    "mark_rendu",
    "CorrectionResult",
    "update_payment",
    "profit_report",
]
