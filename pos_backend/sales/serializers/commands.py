# sales/serializers/commands.py

"""
Command serializers for the sales engine endpoints.

These serializers do NOT touch the database. They only check request
shapes; business rules (pricing, states, amounts) are enforced by the
services and reported as domain errors.
"""

from rest_framework import serializers

MONEY = {"max_digits": 14, "decimal_places": 2}


class SaleLineInputSerializer(serializers.Serializer):
    imei = serializers.CharField()
    brand = serializers.CharField()
    model_name = serializers.CharField()
    storage = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    kind = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    carton_type = serializers.CharField(
        required=False, allow_blank=True, allow_null=True
    )
    quantity_sold = serializers.IntegerField(min_value=1)
    unit_sale_price = serializers.DecimalField(
        required=False, allow_null=True, **MONEY
    )


class CreateSaleInputSerializer(serializers.Serializer):
    client_name = serializers.CharField(allow_blank=True)
    client_phone = serializers.CharField(
        required=False, allow_blank=True, allow_null=True
    )
    items = SaleLineInputSerializer(many=True, allow_empty=True)
    amount_paid = serializers.DecimalField(**MONEY)
    is_special_invoice = serializers.BooleanField(required=False, default=False)
    negotiated_total = serializers.DecimalField(
        required=False, allow_null=True, **MONEY
    )


class CancelItemInputSerializer(serializers.Serializer):
    item_id = serializers.UUIDField()
    imei = serializers.CharField(allow_blank=True)
    reason = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    unit_id = serializers.UUIDField(required=False, allow_null=True)


class ReturnItemInputSerializer(serializers.Serializer):
    item_id = serializers.UUIDField()
    client_name = serializers.CharField(allow_blank=True)
    imei = serializers.CharField(allow_blank=True)
    reason = serializers.CharField(allow_blank=True)
    unit_id = serializers.UUIDField(required=False, allow_null=True)


class MarkRenduInputSerializer(serializers.Serializer):
    item_id = serializers.UUIDField()
    imei = serializers.CharField(allow_blank=True)
    reason = serializers.CharField(allow_blank=True)
    unit_id = serializers.UUIDField()


class UpdatePaymentInputSerializer(serializers.Serializer):
    amount_paid = serializers.DecimalField(**MONEY)
    new_total_amount = serializers.DecimalField(
        required=False, allow_null=True, **MONEY
    )
