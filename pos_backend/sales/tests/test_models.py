# sales/tests/test_models.py

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase

from clients.models import Client
from sales.models import Sale, SaleItem, SaleReturn
from sales.services import create_sale, return_item
from sales.tests.helpers import line_for, make_unit


class SaleRecordGuardTests(TestCase):
    """
    GUARANTEES:
    - Sale identity fields never change after creation
    - Sales, lines and return records are never deleted
    - Line snapshots are frozen; only correction fields move
    - Return records are append-only
    """

    def setUp(self):
        self.unit = make_unit("356938035643809")
        self.sale = create_sale(
            client_name="Awa", items=[line_for(self.unit)], amount_paid="0"
        )
        self.item = self.sale.items.get()

    def test_sale_identity_is_frozen(self):
        sale = Sale.objects.get(pk=self.sale.pk)
        sale.client = Client.objects.create(name="Moussa")
        with self.assertRaises(ValueError):
            sale.save()

        sale = Sale.objects.get(pk=self.sale.pk)
        sale.is_special_invoice = True
        with self.assertRaises(ValueError):
            sale.save()

    def test_sale_amounts_may_move(self):
        sale = Sale.objects.get(pk=self.sale.pk)
        sale.amount_paid = Decimal("10000.00")
        sale.payment_status = Sale.STATUS_PARTIALLY_PAID
        sale.save()

        sale.refresh_from_db()
        self.assertEqual(sale.amount_due, Decimal("70000.00"))

    def test_nothing_is_deleted(self):
        with self.assertRaises(RuntimeError):
            self.sale.delete()
        with self.assertRaises(RuntimeError):
            self.item.delete()

    def test_line_snapshot_is_frozen(self):
        item = SaleItem.objects.get(pk=self.item.pk)
        item.unit_sale_price = Decimal("1.00")
        with self.assertRaises(ValidationError):
            item.save()

    def test_line_correction_fields_may_move(self):
        item = SaleItem.objects.get(pk=self.item.pk)
        item.status = SaleItem.STATUS_CANCELLED
        item.cancellation_reason = "typo"
        item.save()

        item.refresh_from_db()
        self.assertFalse(item.is_active)
        self.assertEqual(item.line_total, Decimal("80000.00"))

    def test_return_record_is_append_only(self):
        result = return_item(
            sale_id=self.sale.id,
            item_id=self.item.id,
            client_name="Awa",
            imei=self.unit.imei,
            reason="defective",
        )
        record = SaleReturn.objects.get(pk=result.sale_return.pk)

        record.reason = "edited"
        with self.assertRaises(RuntimeError):
            record.save()
        with self.assertRaises(RuntimeError):
            record.delete()
