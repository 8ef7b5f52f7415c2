"""
Views for sales app.

- Invoice listing and creation API
- Thermal receipt (HTML and PDF) and receipt printing
"""

import logging

from django.http import Http404, HttpResponse
from django.views.decorators.http import require_http_methods

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from apps.core.decorators import ledger_errors
from apps.core.exceptions import RecordNotFoundError

from .receipt_service import ReceiptService
from .services import InvoiceService

logger = logging.getLogger(__name__)


@api_view(["GET", "POST"])
@ledger_errors
def invoice_list(request):
    """
    List all invoices (newest first) or create a new invoice.

    POST body:
        {
            "customerId": 7,
            "total": 100,
            "items": [{"productId": 3, "quantity": 2, "rate": 50, "total": 100}]
        }

    Returns 201 with the created invoice, including its generated number.
    """
    service = InvoiceService()
    if request.method == "POST":
        data = request.data if isinstance(request.data, dict) else {}
        invoice = service.create_invoice(
            customer_id=data.get("customerId"),
            total=data.get("total"),
            items=data.get("items"),
        )
        return Response(service.serialize(invoice), status=status.HTTP_201_CREATED)
    return Response(service.serialize_many(service.list_invoices()))


@api_view(["POST"])
@ledger_errors
def invoice_print(request, pk):
    """Send the thermal receipt of an invoice to the configured printer."""
    invoice = InvoiceService().get_invoice(pk)
    return Response(ReceiptService.print_receipt(invoice))


def _get_invoice_or_404(pk):
    try:
        return InvoiceService().get_invoice(pk)
    except RecordNotFoundError:
        raise Http404("Receipt not found")


@require_http_methods(["GET"])
def receipt_html(request, pk):
    """Thermal HTML receipt for browser viewing and printing."""
    invoice = _get_invoice_or_404(pk)

    html_content = ReceiptService.generate_receipt(invoice, output_format="html").decode("utf-8")

    return HttpResponse(html_content, content_type="text/html")


@require_http_methods(["GET"])
def receipt_pdf(request, pk):
    """Thermal (80mm) PDF receipt for download."""
    invoice = _get_invoice_or_404(pk)

    pdf_bytes = ReceiptService.generate_receipt(invoice, output_format="pdf")

    response = HttpResponse(pdf_bytes, content_type="application/pdf")
    filename = ReceiptService.receipt_filename(invoice)
    response["Content-Disposition"] = f'attachment; filename="{filename}"'

    return response
