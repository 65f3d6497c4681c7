# sales/serializers/sale_item.py

from rest_framework import serializers

from sales.models import SaleItem


class SaleItemSerializer(serializers.ModelSerializer):
    """
    Sale line (read-only), with the supplier of the sold unit when the unit
    is still in the catalog.
    """

    supplier_name = serializers.SerializerMethodField()
    line_total = serializers.DecimalField(
        max_digits=14, decimal_places=2, read_only=True
    )

    class Meta:
        model = SaleItem
        fields = [
            "id",
            "unit",
            "imei",
            "brand",
            "model_name",
            "storage",
            "kind",
            "carton_type",
            "quantity_sold",
            "unit_sale_price",
            "unit_purchase_price",
            "line_total",
            "status",
            "is_special_sale_item",
            "cancellation_reason",
            "restocked_at",
            "supplier_name",
            "created_at",
        ]
        read_only_fields = fields

    def get_supplier_name(self, obj) -> str | None:
        unit = getattr(obj, "unit", None)
        supplier = getattr(unit, "supplier", None)
        return getattr(supplier, "name", None)
