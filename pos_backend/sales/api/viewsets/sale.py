# sales/api/viewsets/sale.py

"""
======================================================
PATH: sales/api/viewsets/sale.py
======================================================
SALE VIEWSET

Purpose:
- Sales history: list + retrieve (client, lines with supplier, returns).
- Sale creation against live inventory.
- Line corrections: cancel / return / rendu.
- Payment (and renegotiated total) updates.

Rules:
- Views only parse input and map domain errors to HTTP; every business rule
  lives in sales.services.
- Authentication is handled upstream (AllowAny here).
======================================================
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from sales.api.errors import engine_error_response, invalid_body_response
from sales.api.filters import SaleFilter
from sales.selectors import sales_queryset
from sales.serializers import (
    CancelItemInputSerializer,
    CreateSaleInputSerializer,
    MarkRenduInputSerializer,
    ReturnItemInputSerializer,
    SaleSerializer,
    UpdatePaymentInputSerializer,
)
from sales import services
from sales.exceptions import SaleEngineError


def _correction_payload(result) -> dict:
    rec = result.reconciliation
    payload = {
        "sale_id": str(result.sale.id),
        "item_id": str(result.item.id),
        "item_status": result.item.status,
        "total_amount": str(rec.total_amount),
        "amount_paid": str(rec.amount_paid),
        "amount_due": str(rec.amount_due),
        "payment_status": rec.payment_status,
        "sale_cancelled": rec.sale_cancelled,
    }
    if result.sale_return is not None:
        payload["return_id"] = str(result.sale_return.id)
    return payload


class SaleViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = SaleSerializer
    permission_classes = [AllowAny]
    filter_backends = [DjangoFilterBackend]
    filterset_class = SaleFilter

    def get_queryset(self):
        return sales_queryset()

    # ======================================================
    # CREATE
    # POST /api/sales/
    # ======================================================

    @extend_schema(request=CreateSaleInputSerializer, responses={201: OpenApiTypes.OBJECT})
    def create(self, request, *args, **kwargs):
        body = CreateSaleInputSerializer(data=request.data)
        if not body.is_valid():
            return invalid_body_response(body.errors)
        data = body.validated_data

        try:
            sale = services.create_sale(
                client_name=data["client_name"],
                client_phone=data.get("client_phone"),
                items=[dict(line) for line in data["items"]],
                amount_paid=data["amount_paid"],
                is_special_invoice=data.get("is_special_invoice", False),
                negotiated_total=data.get("negotiated_total"),
            )
        except SaleEngineError as exc:
            return engine_error_response(exc)

        return Response(
            {
                "sale_id": str(sale.id),
                "total_amount": str(sale.total_amount),
                "payment_status": sale.payment_status,
            },
            status=status.HTTP_201_CREATED,
        )

    # ======================================================
    # CORRECTIONS
    # ======================================================

    @extend_schema(request=CancelItemInputSerializer, responses={200: OpenApiTypes.OBJECT})
    @action(detail=True, methods=["post"], url_path="cancel-item")
    def cancel_item(self, request, pk=None):
        body = CancelItemInputSerializer(data=request.data)
        if not body.is_valid():
            return invalid_body_response(body.errors)
        data = body.validated_data

        try:
            result = services.cancel_item(
                sale_id=pk,
                item_id=data["item_id"],
                imei=data["imei"],
                reason=data.get("reason"),
                unit_id=data.get("unit_id"),
            )
        except SaleEngineError as exc:
            return engine_error_response(exc)

        return Response(_correction_payload(result))

    @extend_schema(request=ReturnItemInputSerializer, responses={200: OpenApiTypes.OBJECT})
    @action(detail=True, methods=["post"], url_path="return-item")
    def return_item(self, request, pk=None):
        body = ReturnItemInputSerializer(data=request.data)
        if not body.is_valid():
            return invalid_body_response(body.errors)
        data = body.validated_data

        try:
            result = services.return_item(
                sale_id=pk,
                item_id=data["item_id"],
                client_name=data["client_name"],
                imei=data["imei"],
                reason=data["reason"],
                unit_id=data.get("unit_id"),
            )
        except SaleEngineError as exc:
            return engine_error_response(exc)

        return Response(_correction_payload(result))

    @extend_schema(request=MarkRenduInputSerializer, responses={200: OpenApiTypes.OBJECT})
    @action(detail=True, methods=["post"], url_path="mark-rendu")
    def mark_rendu(self, request, pk=None):
        body = MarkRenduInputSerializer(data=request.data)
        if not body.is_valid():
            return invalid_body_response(body.errors)
        data = body.validated_data

        try:
            result = services.mark_rendu(
                sale_id=pk,
                item_id=data["item_id"],
                imei=data["imei"],
                reason=data["reason"],
                unit_id=data["unit_id"],
            )
        except SaleEngineError as exc:
            return engine_error_response(exc)

        return Response(_correction_payload(result))

    # ======================================================
    # PAYMENT
    # PUT /api/sales/<id>/update-payment/
    # ======================================================

    @extend_schema(request=UpdatePaymentInputSerializer, responses={200: SaleSerializer})
    @action(detail=True, methods=["put"], url_path="update-payment")
    def update_payment(self, request, pk=None):
        body = UpdatePaymentInputSerializer(data=request.data)
        if not body.is_valid():
            return invalid_body_response(body.errors)
        data = body.validated_data

        try:
            sale = services.update_payment(
                sale_id=pk,
                amount_paid=data["amount_paid"],
                new_total_amount=data.get("new_total_amount"),
            )
        except SaleEngineError as exc:
            return engine_error_response(exc)

        sale = sales_queryset().get(pk=sale.pk)
        return Response(SaleSerializer(sale).data)
