# sales/tests/helpers.py

from decimal import Decimal

from inventory.models import InventoryUnit, Supplier
from invoices.models import Invoice


def make_unit(
    imei,
    *,
    brand="Samsung",
    model_name="A54",
    purchase_price="50000.00",
    sale_price="80000.00",
    status=InventoryUnit.Status.ACTIVE,
    supplier=None,
    **extra,
):
    return InventoryUnit.objects.create(
        imei=imei,
        brand=brand,
        model_name=model_name,
        purchase_price=Decimal(purchase_price),
        sale_price=Decimal(sale_price),
        status=status,
        supplier=supplier,
        **extra,
    )


def make_supplier(name="Dakar Phones"):
    return Supplier.objects.create(name=name)


def line_for(unit, **overrides):
    line = {
        "imei": unit.imei,
        "brand": unit.brand,
        "model_name": unit.model_name,
        "storage": unit.storage,
        "kind": unit.kind,
        "carton_type": unit.carton_type,
        "quantity_sold": 1,
    }
    line.update(overrides)
    return line


def issue_invoice(sale, invoice_no="F-0001"):
    return Invoice.objects.create(
        sale=sale,
        invoice_no=invoice_no,
        status=sale.payment_status,
        original_amount=sale.total_amount,
        amount_paid=sale.amount_paid,
        current_amount_due=sale.total_amount - sale.amount_paid,
    )
