# sales/serializers/sale_return.py

from rest_framework import serializers

from sales.models import SaleReturn


class SaleReturnSerializer(serializers.ModelSerializer):
    class Meta:
        model = SaleReturn
        fields = [
            "id",
            "sale_item",
            "client",
            "client_name",
            "unit",
            "imei",
            "brand",
            "model_name",
            "storage",
            "kind",
            "carton_type",
            "reason",
            "status",
            "is_special_sale_item",
            "returned_at",
        ]
        read_only_fields = fields
