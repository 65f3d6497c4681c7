# backend/urls.py
"""
PROJECT URLS

Everything is served under /api/:
- /api/            index of the modules below
- /api/health/     database round-trip (503 when the DB is unreachable)
- /api/schema/     OpenAPI document, /api/docs/ Swagger UI
- /api/sales/      sales engine (see sales/api/urls.py)

The admin lives at ADMIN_PATH (env), "admin/" by default.
"""

from __future__ import annotations

from django.conf import settings
from django.contrib import admin
from django.db import DatabaseError, connections
from django.urls import include, path
from django.views.generic import RedirectView
from drf_spectacular.utils import extend_schema, inline_serializer
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework import serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

API_INDEX = {
    "sales": "/api/sales/",
    "profits": "/api/sales/reports/profits/",
    "health": "/api/health/",
    "schema": "/api/schema/",
    "docs": "/api/docs/",
}

HealthSerializer = inline_serializer(
    name="Health",
    fields={
        "status": serializers.CharField(),
        "db": serializers.CharField(),
        "error": serializers.CharField(required=False),
    },
)


@extend_schema(responses={200: inline_serializer(
    name="ApiIndex",
    fields={
        "message": serializers.CharField(),
        "routes": serializers.DictField(child=serializers.CharField()),
    },
)})
@api_view(["GET"])
@permission_classes([AllowAny])
def api_index(request):
    return Response(
        {"message": "Telecom POS Backend API is running", "routes": API_INDEX}
    )


@extend_schema(responses={200: HealthSerializer, 503: HealthSerializer})
@api_view(["GET"])
@permission_classes([AllowAny])
def health_check(request):
    try:
        with connections["default"].cursor() as cursor:
            cursor.execute("SELECT 1;")
            cursor.fetchone()
    except DatabaseError as exc:
        return Response({"status": "degraded", "db": "down", "error": str(exc)}, status=503)
    return Response({"status": "ok", "db": "ok"})


admin_path = settings.ADMIN_PATH.strip("/") + "/"

api_urlpatterns = [
    path("", api_index, name="api-index"),
    path("health/", health_check, name="health-check"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("sales/", include("sales.api.urls")),
]

urlpatterns = [
    path(admin_path, admin.site.urls),
    path("", RedirectView.as_view(url="/api/docs/", permanent=False)),
    path("api/", include(api_urlpatterns)),
]
