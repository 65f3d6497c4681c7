# invoices/tests/test_mirror.py

from decimal import Decimal

from django.test import TestCase

from invoices.models import Invoice
from invoices.services import cancel_invoice_mirror, sync_invoice_mirror
from sales.services import create_sale
from sales.tests.helpers import issue_invoice, line_for, make_unit


class InvoiceMirrorTests(TestCase):
    """
    GUARANTEES:
    - The invoice of a sale receives the reconciled figures verbatim
    - A sale without an invoice is a no-op (0 rows)
    """

    def setUp(self):
        self.sale = create_sale(
            client_name="Awa",
            items=[line_for(make_unit("356938035643809"))],
            amount_paid="0",
        )

    def test_sync_updates_invoice(self):
        invoice = issue_invoice(self.sale)

        rows = sync_invoice_mirror(
            sale_id=self.sale.id,
            status=Invoice.Status.PARTIALLY_PAID,
            original_amount=Decimal("80000.00"),
            current_amount_due=Decimal("30000.00"),
            amount_paid=Decimal("50000.00"),
        )

        self.assertEqual(rows, 1)
        invoice.refresh_from_db()
        self.assertEqual(invoice.status, Invoice.Status.PARTIALLY_PAID)
        self.assertEqual(invoice.current_amount_due, Decimal("30000.00"))
        self.assertEqual(invoice.amount_paid, Decimal("50000.00"))

    def test_sync_without_invoice(self):
        rows = sync_invoice_mirror(
            sale_id=self.sale.id,
            status=Invoice.Status.FULLY_PAID,
            original_amount=Decimal("80000.00"),
            current_amount_due=Decimal("0.00"),
            amount_paid=Decimal("80000.00"),
        )
        self.assertEqual(rows, 0)
        self.assertFalse(Invoice.objects.exists())

    def test_cancel_keeps_amounts(self):
        invoice = issue_invoice(self.sale)

        self.assertEqual(cancel_invoice_mirror(sale_id=self.sale.id), 1)

        invoice.refresh_from_db()
        self.assertEqual(invoice.status, Invoice.Status.CANCELLED)
        self.assertEqual(invoice.original_amount, Decimal("80000.00"))

    def test_cancel_without_invoice(self):
        self.assertEqual(cancel_invoice_mirror(sale_id=self.sale.id), 0)
