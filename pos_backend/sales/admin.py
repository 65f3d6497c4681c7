# sales/admin.py

from django.contrib import admin

from sales.models import Sale, SaleItem, SaleReturn


class ReadOnlyAdminMixin:
    """Sales history is written by the sales services only."""

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# ======================================================
# SALE ADMIN
# ======================================================


class SaleItemInline(ReadOnlyAdminMixin, admin.TabularInline):
    model = SaleItem
    extra = 0
    fields = (
        "imei",
        "brand",
        "model_name",
        "quantity_sold",
        "unit_sale_price",
        "unit_purchase_price",
        "status",
        "cancellation_reason",
        "restocked_at",
    )
    readonly_fields = fields


@admin.register(Sale)
class SaleAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = (
        "id",
        "client",
        "sold_at",
        "total_amount",
        "amount_paid",
        "payment_status",
        "is_special_invoice",
    )
    list_filter = ("payment_status", "is_special_invoice", "sold_at")
    search_fields = ("client__name", "items__imei")
    inlines = [SaleItemInline]


# ======================================================
# SALE ITEM ADMIN
# ======================================================


@admin.register(SaleItem)
class SaleItemAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = (
        "imei",
        "brand",
        "model_name",
        "sale",
        "unit_sale_price",
        "status",
        "is_special_sale_item",
    )
    list_filter = ("status", "is_special_sale_item")
    search_fields = ("imei", "sale__client__name")


# ======================================================
# RETURN ADMIN
# ======================================================


@admin.register(SaleReturn)
class SaleReturnAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ("imei", "client_name", "sale", "returned_at", "reason")
    search_fields = ("imei", "client_name")
    list_filter = ("returned_at",)
