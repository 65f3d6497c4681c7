from .commands import (
    CancelItemInputSerializer,
    CreateSaleInputSerializer,
    MarkRenduInputSerializer,
    ReturnItemInputSerializer,
    UpdatePaymentInputSerializer,
)
from .reports import ProfitReportSerializer
from .sale import SaleSerializer
from .sale_item import SaleItemSerializer
from .sale_return import SaleReturnSerializer

__all__ = [
    "SaleSerializer",
    "SaleItemSerializer",
    "SaleReturnSerializer",
    "CreateSaleInputSerializer",
    "CancelItemInputSerializer",
    "ReturnItemInputSerializer",
    "MarkRenduInputSerializer",
    "UpdatePaymentInputSerializer",
    "ProfitReportSerializer",
]
