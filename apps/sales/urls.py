"""
URL configuration for sales app.
"""

from django.urls import path

from . import views

app_name = "sales"

urlpatterns = [
    path("invoices/", views.invoice_list, name="invoice_list"),
    path("invoices/<int:pk>/receipt/", views.receipt_html, name="receipt_html"),
    path("invoices/<int:pk>/receipt.pdf", views.receipt_pdf, name="receipt_pdf"),
    path("invoices/<int:pk>/print/", views.invoice_print, name="invoice_print"),
]
