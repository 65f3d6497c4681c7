# inventory/admin.py

from django.contrib import admin

from inventory.models import InventoryUnit, Supplier


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    list_display = ("name", "phone", "created_at")
    search_fields = ("name",)


@admin.register(InventoryUnit)
class InventoryUnitAdmin(admin.ModelAdmin):
    list_display = (
        "imei",
        "brand",
        "model_name",
        "storage",
        "status",
        "quantity",
        "purchase_price",
        "sale_price",
        "supplier",
    )
    list_filter = ("status", "brand")
    search_fields = ("imei", "brand", "model_name")
    readonly_fields = ("status", "quantity", "created_at", "updated_at")
