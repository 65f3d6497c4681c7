# sales/tests/test_api.py

import uuid

from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from inventory.models import InventoryUnit
from sales.models import Sale, SaleItem
from sales.tests.helpers import issue_invoice, line_for, make_supplier, make_unit

SALES_URL = "/api/sales/"


def _detail(sale_id, suffix=""):
    return f"{SALES_URL}{sale_id}/{suffix}"


class SaleApiTestBase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.supplier = make_supplier()
        self.u1 = make_unit("356938035643809", supplier=self.supplier)
        self.u2 = make_unit(
            "490154203237518", model_name="S23", sale_price="60000.00"
        )

    def _create(self, **overrides):
        body = {
            "client_name": "Awa",
            "client_phone": "+221770000000",
            "items": [line_for(self.u1), line_for(self.u2)],
            "amount_paid": "50000",
        }
        body.update(overrides)
        return self.client.post(SALES_URL, body, format="json")

    def assertError(self, response, http_status, code):
        self.assertEqual(response.status_code, http_status, response.data)
        self.assertEqual(response.data["error"]["code"], code)
        self.assertIn("message", response.data["error"])
        self.assertIn("details", response.data["error"])


class CreateSaleApiTests(SaleApiTestBase):
    """
    GUARANTEES:
    - 201 with sale id, total and status
    - Domain failures map to their HTTP statuses with the error envelope
    """

    def test_create(self):
        res = self._create()

        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["total_amount"], "140000.00")
        self.assertEqual(res.data["payment_status"], Sale.STATUS_PARTIALLY_PAID)
        self.assertTrue(Sale.objects.filter(pk=res.data["sale_id"]).exists())

    def test_malformed_body(self):
        res = self.client.post(SALES_URL, {"client_name": "Awa"}, format="json")
        self.assertError(res, 400, "INVALID_INPUT")

    def test_empty_items(self):
        self.assertError(self._create(items=[]), 400, "INVALID_INPUT")

    def test_unknown_unit(self):
        line = line_for(self.u1, imei="000000000000000")
        self.assertError(self._create(items=[line]), 404, "NOT_FOUND")

    def test_unit_already_sold(self):
        self._create()
        self.assertError(self._create(), 409, "INVALID_STATE")

    def test_price_below_purchase(self):
        line = line_for(self.u1, unit_sale_price="40000.00")
        res = self._create(items=[line])

        self.assertError(res, 422, "PRICING_VIOLATION")
        self.u1.refresh_from_db()
        self.assertEqual(self.u1.status, InventoryUnit.Status.ACTIVE)

    def test_overpayment(self):
        res = self._create(amount_paid="150000")

        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["total_amount"], "140000.00")
        self.assertEqual(res.data["payment_status"], Sale.STATUS_FULLY_PAID)


class SaleHistoryApiTests(SaleApiTestBase):
    """
    GUARANTEES:
    - List is paginated and filterable
    - Detail carries client, lines (with supplier), returns and invoice
    """

    def setUp(self):
        super().setUp()
        self.sale_id = self._create().data["sale_id"]
        self.u3 = make_unit("111222333444555")
        self.special_id = self._create(
            client_name="Moussa",
            items=[line_for(self.u3)],
            amount_paid="0",
            is_special_invoice=True,
            negotiated_total="75000",
        ).data["sale_id"]

    def _ids(self, params):
        res = self.client.get(SALES_URL, params)
        self.assertEqual(res.status_code, 200, res.data)
        return {row["id"] for row in res.data["results"]}

    def test_list_and_filters(self):
        self.assertEqual(self._ids({}), {self.sale_id, self.special_id})
        self.assertEqual(self._ids({"q": "mous"}), {self.special_id})
        self.assertEqual(self._ids({"is_special_invoice": "true"}), {self.special_id})
        self.assertEqual(
            self._ids({"payment_status": Sale.STATUS_AWAITING_PAYMENT}),
            {self.special_id},
        )
        self.assertEqual(
            self._ids({"date": timezone.localdate().isoformat()}),
            {self.sale_id, self.special_id},
        )

    def test_detail(self):
        issue_invoice(Sale.objects.get(pk=self.sale_id))

        res = self.client.get(_detail(self.sale_id))

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["client_name"], "Awa")
        self.assertEqual(res.data["client_phone"], "+221770000000")
        self.assertEqual(res.data["amount_due"], "90000.00")
        self.assertEqual(res.data["invoice"]["invoice_no"], "F-0001")
        self.assertEqual(res.data["returns"], [])
        suppliers = {row["imei"]: row["supplier_name"] for row in res.data["items"]}
        self.assertEqual(suppliers[self.u1.imei], "Dakar Phones")
        self.assertIsNone(suppliers[self.u2.imei])

    def test_detail_without_invoice(self):
        res = self.client.get(_detail(self.special_id))
        self.assertIsNone(res.data["invoice"])
        self.assertEqual(res.data["negotiated_total"], "75000.00")

    def test_unknown_sale(self):
        self.assertEqual(self.client.get(_detail(uuid.uuid4())).status_code, 404)


class CorrectionApiTests(SaleApiTestBase):
    """
    GUARANTEES:
    - cancel-item / return-item / mark-rendu return the reconciled figures
    - A line is corrected at most once (409)
    """

    def setUp(self):
        super().setUp()
        self.sale_id = self._create().data["sale_id"]
        self.item_u1 = SaleItem.objects.get(sale_id=self.sale_id, imei=self.u1.imei)
        self.item_u2 = SaleItem.objects.get(sale_id=self.sale_id, imei=self.u2.imei)

    def test_cancel_item(self):
        res = self.client.post(
            _detail(self.sale_id, "cancel-item/"),
            {"item_id": str(self.item_u2.id), "imei": self.u2.imei},
            format="json",
        )

        self.assertEqual(res.status_code, 200, res.data)
        self.assertEqual(res.data["item_status"], SaleItem.STATUS_CANCELLED)
        self.assertEqual(res.data["total_amount"], "80000.00")
        self.assertEqual(res.data["amount_due"], "30000.00")
        self.assertFalse(res.data["sale_cancelled"])
        self.assertNotIn("return_id", res.data)

        again = self.client.post(
            _detail(self.sale_id, "cancel-item/"),
            {"item_id": str(self.item_u2.id), "imei": self.u2.imei},
            format="json",
        )
        self.assertError(again, 409, "CONFLICT")

    def test_return_item(self):
        res = self.client.post(
            _detail(self.sale_id, "return-item/"),
            {
                "item_id": str(self.item_u1.id),
                "client_name": "Awa",
                "imei": self.u1.imei,
                "reason": "screen defect",
            },
            format="json",
        )

        self.assertEqual(res.status_code, 200, res.data)
        self.assertEqual(res.data["item_status"], SaleItem.STATUS_RETURNED)
        self.assertIn("return_id", res.data)

        detail = self.client.get(_detail(self.sale_id)).data
        self.assertEqual(len(detail["returns"]), 1)
        self.assertEqual(detail["returns"][0]["reason"], "screen defect")

    def test_return_item_missing_reason(self):
        res = self.client.post(
            _detail(self.sale_id, "return-item/"),
            {"item_id": str(self.item_u1.id), "client_name": "Awa", "imei": self.u1.imei},
            format="json",
        )
        self.assertError(res, 400, "INVALID_INPUT")

    def test_mark_rendu(self):
        res = self.client.post(
            _detail(self.sale_id, "mark-rendu/"),
            {
                "item_id": str(self.item_u1.id),
                "imei": self.u1.imei,
                "reason": "client changed mind",
                "unit_id": str(self.u1.id),
            },
            format="json",
        )

        self.assertEqual(res.status_code, 200, res.data)
        self.assertEqual(res.data["item_status"], SaleItem.STATUS_RETURNED_TO_STOCK)
        self.u1.refresh_from_db()
        self.assertEqual(self.u1.status, InventoryUnit.Status.ACTIVE)
        self.assertEqual(self.u1.quantity, 2)

    def test_imei_mismatch(self):
        res = self.client.post(
            _detail(self.sale_id, "cancel-item/"),
            {"item_id": str(self.item_u1.id), "imei": self.u2.imei},
            format="json",
        )
        self.assertError(res, 400, "INVALID_INPUT")

    def test_unknown_item(self):
        res = self.client.post(
            _detail(self.sale_id, "cancel-item/"),
            {"item_id": str(uuid.uuid4()), "imei": self.u1.imei},
            format="json",
        )
        self.assertError(res, 404, "NOT_FOUND")


class PaymentAndReportApiTests(SaleApiTestBase):
    """
    GUARANTEES:
    - PUT update-payment returns the refreshed sale
    - Profits only count fully paid invoices
    """

    def setUp(self):
        super().setUp()
        self.sale_id = self._create().data["sale_id"]
        issue_invoice(Sale.objects.get(pk=self.sale_id))

    def test_update_payment(self):
        res = self.client.put(
            _detail(self.sale_id, "update-payment/"),
            {"amount_paid": "140000"},
            format="json",
        )

        self.assertEqual(res.status_code, 200, res.data)
        self.assertEqual(res.data["payment_status"], Sale.STATUS_FULLY_PAID)
        self.assertEqual(res.data["invoice"]["status"], "fully_paid")

    def test_update_payment_conflict(self):
        res = self.client.put(
            _detail(self.sale_id, "update-payment/"),
            {"amount_paid": "150000"},
            format="json",
        )
        self.assertError(res, 409, "CONFLICT")

    def test_profits(self):
        url = f"{SALES_URL}reports/profits/"
        self.assertEqual(self.client.get(url).data["total_profit"], "0.00")

        self.client.put(
            _detail(self.sale_id, "update-payment/"),
            {"amount_paid": "140000"},
            format="json",
        )
        res = self.client.get(url, {"date": timezone.localdate().isoformat()})

        self.assertEqual(res.status_code, 200)
        self.assertEqual(len(res.data["sold_items"]), 2)
        self.assertEqual(res.data["total_profit"], "40000.00")

    def test_profits_bad_date(self):
        res = self.client.get(f"{SALES_URL}reports/profits/", {"date": "31/12/2024"})
        self.assertError(res, 400, "INVALID_INPUT")


class OperationalApiTests(TestCase):
    def test_health(self):
        res = APIClient().get("/api/health/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data, {"status": "ok", "db": "ok"})
