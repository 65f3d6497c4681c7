# sales/serializers/sale.py

from django.core.exceptions import ObjectDoesNotExist
from rest_framework import serializers

from sales.models import Sale

from .sale_item import SaleItemSerializer
from .sale_return import SaleReturnSerializer


class SaleSerializer(serializers.ModelSerializer):
    """
    CANONICAL SALE SERIALIZER (read-only)

    Used by sales history list/detail:
    - client name/phone flattened for display
    - amount_due = total_amount - amount_paid
    - invoice is null when no invoice was issued for the sale
    """

    client_name = serializers.CharField(source="client.name", read_only=True)
    client_phone = serializers.CharField(
        source="client.phone", read_only=True, allow_null=True
    )
    amount_due = serializers.DecimalField(
        max_digits=14, decimal_places=2, read_only=True
    )
    invoice = serializers.SerializerMethodField()

    items = SaleItemSerializer(many=True, read_only=True)
    returns = SaleReturnSerializer(many=True, read_only=True)

    class Meta:
        model = Sale
        fields = [
            "id",
            "client",
            "client_name",
            "client_phone",
            "sold_at",
            "total_amount",
            "amount_paid",
            "amount_due",
            "payment_status",
            "is_special_invoice",
            "negotiated_total",
            "invoice",
            "items",
            "returns",
            "updated_at",
        ]
        read_only_fields = fields

    def get_invoice(self, obj: Sale) -> dict | None:
        try:
            invoice = obj.invoice
        except ObjectDoesNotExist:
            return None
        return {
            "id": str(invoice.id),
            "invoice_no": invoice.invoice_no,
            "status": invoice.status,
            "current_amount_due": str(invoice.current_amount_due),
        }
