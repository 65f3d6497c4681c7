# invoices/admin.py

from django.contrib import admin

from invoices.models import Invoice


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = (
        "invoice_no",
        "sale",
        "status",
        "original_amount",
        "amount_paid",
        "current_amount_due",
        "updated_at",
    )
    list_filter = ("status",)
    search_fields = ("invoice_no", "sale__client__name")
    readonly_fields = ("created_at", "updated_at")
