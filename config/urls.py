"""
URL configuration for the retail point-of-sale ledger.
"""

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("", include("apps.core.urls")),
    path("api/", include("apps.inventory.urls")),
    path("api/", include("apps.crm.urls")),
    path("api/", include("apps.reporting.urls")),
    path("api/", include("apps.sales.urls")),
    path("", include("django_prometheus.urls")),  # Prometheus metrics endpoint at /metrics
]

# Serve media files in development
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
