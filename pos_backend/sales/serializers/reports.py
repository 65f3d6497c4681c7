# sales/serializers/reports.py

from rest_framework import serializers

MONEY = {"max_digits": 14, "decimal_places": 2}


class ProfitLineSerializer(serializers.Serializer):
    sale_item_id = serializers.CharField()
    sale_id = serializers.CharField()
    imei = serializers.CharField()
    brand = serializers.CharField()
    model_name = serializers.CharField()
    storage = serializers.CharField(allow_null=True)
    kind = serializers.CharField(allow_null=True)
    carton_type = serializers.CharField(allow_null=True)
    unit_purchase_price = serializers.DecimalField(**MONEY)
    unit_sale_price = serializers.DecimalField(**MONEY)
    quantity_sold = serializers.IntegerField()
    unit_profit = serializers.DecimalField(**MONEY)
    line_profit = serializers.DecimalField(**MONEY)
    sold_at = serializers.DateTimeField()


class ProfitReportSerializer(serializers.Serializer):
    date = serializers.CharField(allow_null=True)
    sold_items = ProfitLineSerializer(many=True)
    total_profit = serializers.DecimalField(max_digits=18, decimal_places=2)
