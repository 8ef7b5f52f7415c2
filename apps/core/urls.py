"""
URL configuration for core app.
"""

from django.urls import include, path

app_name = "core"

urlpatterns = [
    path("health/", include("apps.core.health")),
]
