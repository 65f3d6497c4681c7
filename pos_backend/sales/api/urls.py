# sales/api/urls.py

"""
SALES API URLS

Rules:
- Explicit non-PK routes (like "reports/...") MUST be registered BEFORE
  router URLs, otherwise the router treats them as a <pk>.

Provides:
    GET  /api/sales/                          list (filters: payment_status,
                                              is_special_invoice, q, date)
    POST /api/sales/                          create
    GET  /api/sales/<uuid>/                   detail
    POST /api/sales/<uuid>/cancel-item/
    POST /api/sales/<uuid>/return-item/
    POST /api/sales/<uuid>/mark-rendu/
    PUT  /api/sales/<uuid>/update-payment/
    GET  /api/sales/reports/profits/?date=YYYY-MM-DD
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from sales.api.reports import ProfitReportView
from sales.api.viewsets.sale import SaleViewSet

router = SimpleRouter()
router.register(r"", SaleViewSet, basename="sales")

urlpatterns = [
    path("reports/profits/", ProfitReportView.as_view(), name="sales-reports-profits"),
    path("", include(router.urls)),
]
