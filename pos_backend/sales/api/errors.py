# sales/api/errors.py

"""
API ERROR NORMALIZATION

Every failure leaves the API as:
    {"error": {"code": ..., "message": ..., "details": {...}}}
"""

from rest_framework import status
from rest_framework.response import Response

from sales.exceptions import SaleEngineError

HTTP_STATUS_BY_CODE = {
    "INVALID_INPUT": status.HTTP_400_BAD_REQUEST,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVALID_STATE": status.HTTP_409_CONFLICT,
    "PRICING_VIOLATION": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "INTERNAL": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(*, code: str, message: str, http_status: int, details=None):
    """
    Canonical API error response.
    """
    return Response(
        {"error": {"code": code, "message": message, "details": details or {}}},
        status=http_status,
    )


def engine_error_response(exc: SaleEngineError):
    return error_response(
        code=exc.code,
        message=exc.message,
        http_status=HTTP_STATUS_BY_CODE.get(
            exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR
        ),
        details=exc.details,
    )


def invalid_body_response(errors):
    return error_response(
        code="INVALID_INPUT",
        message="Invalid request body",
        http_status=status.HTTP_400_BAD_REQUEST,
        details=errors,
    )
