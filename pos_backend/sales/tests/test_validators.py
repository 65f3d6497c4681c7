# sales/tests/test_validators.py

from decimal import Decimal

from django.test import SimpleTestCase

from sales.exceptions import InvalidInputError
from sales.services.validators import MAX_MONEY, to_money


class MoneyInputTests(SimpleTestCase):
    """
    GUARANTEES:
    - Amounts are quantized to cents (half up)
    - Anything a 14-digit money column cannot hold is rejected as input
    """

    def test_quantized(self):
        self.assertEqual(to_money("10.005", field_name="amount_paid"), Decimal("10.01"))
        self.assertEqual(to_money(80000, field_name="amount_paid"), Decimal("80000.00"))

    def test_largest_storable_amount(self):
        self.assertEqual(to_money(str(MAX_MONEY), field_name="amount_paid"), MAX_MONEY)

    def test_too_many_digits(self):
        for value in ("1000000000000", "1e13", "-1000000000000", "1e30"):
            with self.subTest(value=value):
                with self.assertRaises(InvalidInputError) as ctx:
                    to_money(value, field_name="amount_paid")
                self.assertEqual(ctx.exception.details["field"], "amount_paid")

    def test_not_a_number(self):
        for value in ("abc", True, "NaN", "Infinity", None, ""):
            with self.subTest(value=value):
                with self.assertRaises(InvalidInputError):
                    to_money(value, field_name="amount_paid")
