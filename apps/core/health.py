"""
Health check views for monitoring and deployment verification.

These endpoints are used by:
- The desktop shell to wait for the local server before opening the window
- Monitoring systems for uptime checks
"""

import logging
import os

from django.conf import settings
from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.urls import path
from django.views.decorators.cache import never_cache
from django.views.decorators.http import require_GET

logger = logging.getLogger(__name__)


@never_cache
@require_GET
def health_check(request) -> JsonResponse:
    """Liveness check polled by the desktop shell before it opens the window."""
    return JsonResponse(
        {
            "status": "ok",
            "version": getattr(settings, "VERSION", "1.0.0"),
            "environment": getattr(settings, "ENVIRONMENT", "unknown"),
        }
    )


def _check_record_store() -> dict:
    """Run a trivial query against the SQLite record store."""
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError as e:
        logger.error(f"Record store health check failed: {e}")
        return {"status": "unhealthy", "message": f"Record store unavailable: {e}"}
    return {"status": "healthy", "message": "Record store reachable"}


def _check_receipts_dir() -> dict:
    """Receipts render inline without the directory, so a missing one only warns."""
    receipts_root = settings.RECEIPTS_ROOT
    if os.path.isdir(receipts_root) and os.access(receipts_root, os.W_OK):
        return {"status": "healthy", "message": f"Receipt directory writable: {receipts_root}"}
    return {"status": "warning", "message": f"Receipt directory not writable yet: {receipts_root}"}


@never_cache
@require_GET
def health_check_detailed(request) -> JsonResponse:
    """
    Record store and receipt directory status.

    503 when the record store cannot be queried; a missing receipt directory
    is reported as a warning and keeps the status at 200.
    """
    checks = {
        "database": _check_record_store(),
        "receipts": _check_receipts_dir(),
    }
    healthy = checks["database"]["status"] == "healthy"

    return JsonResponse(
        {
            "status": "healthy" if healthy else "unhealthy",
            "version": getattr(settings, "VERSION", "1.0.0"),
            "environment": getattr(settings, "ENVIRONMENT", "unknown"),
            "checks": checks,
        },
        status=200 if healthy else 503,
    )


# URL patterns for health check endpoints
urlpatterns = [
    path("", health_check, name="health"),
    path("detailed/", health_check_detailed, name="health_detailed"),
]
