# inventory/tests/test_unit_ledger.py

from decimal import Decimal

from django.test import TestCase

from inventory.models import InventoryUnit
from inventory.services import (
    find_unit_for_sale,
    mark_unit_returned,
    mark_unit_sold,
    reactivate_unit,
    restock_unit,
)


class UnitLookupTests(TestCase):
    """
    GUARANTEES:
    - Lookup matches the full identity tuple
    - Absent optional attributes only match NULL columns
    - Among duplicates an active row wins
    """

    def setUp(self):
        self.plain = InventoryUnit.objects.create(
            imei="356938035643809",
            brand="Samsung",
            model_name="A54",
            purchase_price=Decimal("50000.00"),
            sale_price=Decimal("80000.00"),
        )
        self.with_storage = InventoryUnit.objects.create(
            imei="356938035643809",
            brand="Samsung",
            model_name="A54",
            storage="128GB",
            purchase_price=Decimal("55000.00"),
            sale_price=Decimal("85000.00"),
        )

    def test_absent_optional_matches_null_only(self):
        unit = find_unit_for_sale(
            imei="356938035643809", brand="Samsung", model_name="A54"
        )
        self.assertEqual(unit.id, self.plain.id)

    def test_blank_optional_is_treated_as_absent(self):
        unit = find_unit_for_sale(
            imei="356938035643809",
            brand="Samsung",
            model_name="A54",
            storage="  ",
            kind="",
        )
        self.assertEqual(unit.id, self.plain.id)

    def test_supplied_optional_must_match(self):
        unit = find_unit_for_sale(
            imei="356938035643809",
            brand="Samsung",
            model_name="A54",
            storage="128GB",
        )
        self.assertEqual(unit.id, self.with_storage.id)

        self.assertIsNone(
            find_unit_for_sale(
                imei="356938035643809",
                brand="Samsung",
                model_name="A54",
                storage="256GB",
            )
        )

    def test_active_duplicate_is_preferred(self):
        InventoryUnit.objects.filter(pk=self.plain.pk).update(
            status=InventoryUnit.Status.SOLD
        )
        restocked = InventoryUnit.objects.create(
            imei="356938035643809",
            brand="Samsung",
            model_name="A54",
            purchase_price=Decimal("50000.00"),
            sale_price=Decimal("80000.00"),
        )

        unit = find_unit_for_sale(
            imei="356938035643809", brand="Samsung", model_name="A54"
        )
        self.assertEqual(unit.id, restocked.id)

    def test_non_active_match_is_still_returned(self):
        InventoryUnit.objects.filter(pk=self.plain.pk).update(
            status=InventoryUnit.Status.RETURNED
        )

        unit = find_unit_for_sale(
            imei="356938035643809", brand="Samsung", model_name="A54"
        )
        self.assertEqual(unit.id, self.plain.id)
        self.assertEqual(unit.status, InventoryUnit.Status.RETURNED)

    def test_unknown_imei(self):
        self.assertIsNone(
            find_unit_for_sale(imei="000", brand="Samsung", model_name="A54")
        )


class UnitStatusWriteTests(TestCase):
    """
    GUARANTEES:
    - Status writes are keyed by id (and IMEI where required)
    - Restock adds exactly one unit on hand
    """

    def setUp(self):
        self.unit = InventoryUnit.objects.create(
            imei="111",
            brand="Tecno",
            model_name="Spark 10",
            purchase_price=Decimal("30000.00"),
            sale_price=Decimal("45000.00"),
            quantity=1,
        )

    def test_sold_then_reactivated(self):
        self.assertEqual(mark_unit_sold(self.unit.id), 1)
        self.unit.refresh_from_db()
        self.assertEqual(self.unit.status, InventoryUnit.Status.SOLD)

        self.assertEqual(reactivate_unit(unit_id=self.unit.id, imei="111"), 1)
        self.unit.refresh_from_db()
        self.assertEqual(self.unit.status, InventoryUnit.Status.ACTIVE)

    def test_imei_mismatch_updates_nothing(self):
        mark_unit_sold(self.unit.id)

        self.assertEqual(reactivate_unit(unit_id=self.unit.id, imei="999"), 0)
        self.assertEqual(mark_unit_returned(unit_id=self.unit.id, imei="999"), 0)

        self.unit.refresh_from_db()
        self.assertEqual(self.unit.status, InventoryUnit.Status.SOLD)

    def test_returned(self):
        mark_unit_returned(unit_id=self.unit.id, imei="111")
        self.unit.refresh_from_db()
        self.assertEqual(self.unit.status, InventoryUnit.Status.RETURNED)

    def test_restock_increments_quantity(self):
        mark_unit_sold(self.unit.id)

        self.assertEqual(restock_unit(unit_id=self.unit.id, imei="111"), 1)

        self.unit.refresh_from_db()
        self.assertEqual(self.unit.status, InventoryUnit.Status.ACTIVE)
        self.assertEqual(self.unit.quantity, 2)
