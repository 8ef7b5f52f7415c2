"""
URL configuration for reporting app.
"""

from django.urls import path

from . import views

app_name = "reporting"

urlpatterns = [
    path("analytics/", views.analytics, name="analytics"),
    path("invoices/analytics/", views.analytics, name="invoice_analytics"),
]
