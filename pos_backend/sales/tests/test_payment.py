# sales/tests/test_payment.py

import uuid
from decimal import Decimal

from django.test import TestCase

from invoices.models import Invoice
from sales.models import Sale
from sales.services import cancel_item, create_sale, update_payment
from sales.exceptions import (
    ConflictError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
)
from sales.tests.helpers import issue_invoice, line_for, make_unit


class UpdatePaymentTests(TestCase):
    """
    GUARANTEES:
    - Status is re-derived from the new (total, paid)
    - Invoice mirror follows
    - Rejected updates change nothing
    """

    def setUp(self):
        self.u1 = make_unit("356938035643809")
        self.sale = create_sale(
            client_name="Awa", items=[line_for(self.u1)], amount_paid="20000"
        )
        self.invoice = issue_invoice(self.sale)

    def _assert_unchanged(self):
        self.sale.refresh_from_db()
        self.assertEqual(self.sale.amount_paid, Decimal("20000.00"))
        self.assertEqual(self.sale.total_amount, Decimal("80000.00"))
        self.assertEqual(self.sale.payment_status, Sale.STATUS_PARTIALLY_PAID)

    def test_settle_balance(self):
        sale = update_payment(sale_id=self.sale.id, amount_paid="80000")

        self.assertEqual(sale.payment_status, Sale.STATUS_FULLY_PAID)
        self.invoice.refresh_from_db()
        self.assertEqual(self.invoice.status, Invoice.Status.FULLY_PAID)
        self.assertEqual(self.invoice.amount_paid, Decimal("80000.00"))
        self.assertEqual(self.invoice.current_amount_due, Decimal("0.00"))

    def test_renegotiated_total(self):
        sale = update_payment(
            sale_id=self.sale.id, amount_paid="70000", new_total_amount="70000"
        )

        sale.refresh_from_db()
        self.assertEqual(sale.total_amount, Decimal("70000.00"))
        self.assertEqual(sale.payment_status, Sale.STATUS_FULLY_PAID)
        self.invoice.refresh_from_db()
        self.assertEqual(self.invoice.original_amount, Decimal("70000.00"))

    def test_back_to_awaiting(self):
        sale = update_payment(sale_id=self.sale.id, amount_paid="0")
        self.assertEqual(sale.payment_status, Sale.STATUS_AWAITING_PAYMENT)

    def test_paid_above_total(self):
        with self.assertRaises(ConflictError):
            update_payment(sale_id=self.sale.id, amount_paid="80000.01")
        self._assert_unchanged()

    def test_new_total_below_collected_money(self):
        with self.assertRaises(ConflictError):
            update_payment(
                sale_id=self.sale.id, amount_paid="10000", new_total_amount="15000"
            )
        self._assert_unchanged()

    def test_invalid_amounts(self):
        for kwargs in (
            {"amount_paid": "-1"},
            {"amount_paid": "abc"},
            {"amount_paid": "1000000000000"},
            {"amount_paid": None},
            {"amount_paid": "0", "new_total_amount": "0"},
            {"amount_paid": "0", "new_total_amount": "-5"},
        ):
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(InvalidInputError):
                    update_payment(sale_id=self.sale.id, **kwargs)
        self._assert_unchanged()

    def test_cancelled_sale_is_terminal(self):
        cancel_item(
            sale_id=self.sale.id,
            item_id=self.sale.items.get().id,
            imei=self.u1.imei,
        )

        with self.assertRaises(InvalidStateError):
            update_payment(sale_id=self.sale.id, amount_paid="0")

    def test_unknown_sale(self):
        with self.assertRaises(NotFoundError):
            update_payment(sale_id=uuid.uuid4(), amount_paid="0")

    def test_sale_without_invoice(self):
        u2 = make_unit("490154203237518")
        sale = create_sale(client_name="Moussa", items=[line_for(u2)], amount_paid="0")

        updated = update_payment(sale_id=sale.id, amount_paid="80000")

        self.assertEqual(updated.payment_status, Sale.STATUS_FULLY_PAID)
        self.assertFalse(Invoice.objects.filter(sale=sale).exists())
