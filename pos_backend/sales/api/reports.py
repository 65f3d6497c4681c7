# sales/api/reports.py

"""
SALES REPORTS

Contract:
- GET /api/sales/reports/profits/?date=YYYY-MM-DD
- date is optional; a malformed date is a 400 INVALID_INPUT
- Only active lines of fully paid invoices count as realised profit
"""

from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from sales.api.errors import engine_error_response
from sales.serializers import ProfitReportSerializer
from sales.services import profit_report
from sales.exceptions import SaleEngineError


class ProfitReportView(APIView):
    @extend_schema(
        parameters=[
            OpenApiParameter(
                "date",
                OpenApiTypes.DATE,
                required=False,
                description="Restrict to sales made on this day (YYYY-MM-DD).",
            )
        ],
        responses={200: ProfitReportSerializer},
    )
    def get(self, request):
        try:
            report = profit_report(date=request.query_params.get("date"))
        except SaleEngineError as exc:
            return engine_error_response(exc)
        return Response(ProfitReportSerializer(report).data)
