import uuid
from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("clients", "0001_initial"),
        ("inventory", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Sale",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "sold_at",
                    models.DateTimeField(
                        db_index=True, default=django.utils.timezone.now
                    ),
                ),
                (
                    "total_amount",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=14
                    ),
                ),
                (
                    "amount_paid",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=14
                    ),
                ),
                (
                    "payment_status",
                    models.CharField(
                        choices=[
                            ("awaiting_payment", "Awaiting payment"),
                            ("partially_paid", "Partially paid"),
                            ("fully_paid", "Fully paid"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="awaiting_payment",
                        max_length=32,
                    ),
                ),
                ("is_special_invoice", models.BooleanField(default=False)),
                (
                    "negotiated_total",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text=(
                            "Total agreed at creation time for negotiated sales "
                            "(record only)."
                        ),
                        max_digits=14,
                        null=True,
                    ),
                ),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "client",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="sales",
                        to="clients.client",
                    ),
                ),
            ],
            options={
                "ordering": ["-sold_at"],
                "indexes": [
                    models.Index(fields=["sold_at"], name="sales_sale_sold_at_idx"),
                    models.Index(
                        fields=["payment_status"], name="sales_sale_pay_status_idx"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="SaleItem",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("imei", models.CharField(db_index=True, max_length=64)),
                ("brand", models.CharField(max_length=128)),
                ("model_name", models.CharField(max_length=128)),
                ("storage", models.CharField(blank=True, max_length=64, null=True)),
                ("kind", models.CharField(blank=True, max_length=64, null=True)),
                (
                    "carton_type",
                    models.CharField(blank=True, max_length=64, null=True),
                ),
                (
                    "unit_sale_price",
                    models.DecimalField(decimal_places=2, max_digits=14),
                ),
                (
                    "unit_purchase_price",
                    models.DecimalField(decimal_places=2, max_digits=14),
                ),
                ("quantity_sold", models.PositiveIntegerField(default=1)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("active", "Active"),
                            ("cancelled", "Cancelled"),
                            ("returned", "Returned"),
                            ("returned_to_stock", "Returned to stock"),
                        ],
                        db_index=True,
                        default="active",
                        max_length=32,
                    ),
                ),
                ("is_special_sale_item", models.BooleanField(default=False)),
                ("cancellation_reason", models.TextField(blank=True, null=True)),
                ("restocked_at", models.DateTimeField(blank=True, null=True)),
                (
                    "created_at",
                    models.DateTimeField(
                        db_index=True, default=django.utils.timezone.now
                    ),
                ),
                (
                    "sale",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="items",
                        to="sales.sale",
                    ),
                ),
                (
                    "unit",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="sale_items",
                        to="inventory.inventoryunit",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at", "id"],
                "indexes": [
                    models.Index(
                        fields=["sale", "status"], name="sales_item_sale_status_idx"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="SaleReturn",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("client_name", models.CharField(max_length=255)),
                ("imei", models.CharField(db_index=True, max_length=64)),
                ("brand", models.CharField(max_length=128)),
                ("model_name", models.CharField(max_length=128)),
                ("storage", models.CharField(blank=True, max_length=64, null=True)),
                ("kind", models.CharField(blank=True, max_length=64, null=True)),
                (
                    "carton_type",
                    models.CharField(blank=True, max_length=64, null=True),
                ),
                ("reason", models.TextField()),
                ("status", models.CharField(default="returned", max_length=32)),
                ("is_special_sale_item", models.BooleanField(default=False)),
                (
                    "returned_at",
                    models.DateTimeField(default=django.utils.timezone.now),
                ),
                (
                    "client",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="returns",
                        to="clients.client",
                    ),
                ),
                (
                    "sale",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="returns",
                        to="sales.sale",
                    ),
                ),
                (
                    "sale_item",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="returns",
                        to="sales.saleitem",
                    ),
                ),
                (
                    "unit",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="returns",
                        to="inventory.inventoryunit",
                    ),
                ),
            ],
            options={
                "ordering": ["-returned_at"],
                "indexes": [
                    models.Index(
                        fields=["sale", "returned_at"], name="sales_return_sale_at_idx"
                    ),
                ],
            },
        ),
    ]
