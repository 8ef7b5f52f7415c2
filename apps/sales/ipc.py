"""
Desktop IPC channels for invoices and receipt printing.
"""

from apps.core.exceptions import RecordValidationError
from apps.core.ipc import channel, require_id

from .receipt_service import ReceiptService
from .services import InvoiceService


@channel("invoice:getAll")
def get_all(payload=None):
    service = InvoiceService()
    return service.serialize_many(service.list_invoices())


@channel("invoice:create")
def create(payload):
    """Payload: {"customerId", "total", "items": [{"productId", "quantity", "rate", "total"}]}"""
    if not isinstance(payload, dict):
        raise RecordValidationError("Invoice data must be an object")
    service = InvoiceService()
    invoice = service.create_invoice(
        customer_id=payload.get("customerId"),
        total=payload.get("total"),
        items=payload.get("items"),
    )
    return {"success": True, "invoice": service.serialize(invoice)}


@channel("printInvoice")
def print_invoice(payload):
    """Payload: an invoice id, or an invoice object as returned by ``invoice:getAll``."""
    invoice_id = payload.get("id") if isinstance(payload, dict) else payload
    invoice = InvoiceService().get_invoice(require_id(invoice_id, "Invoice"))
    return ReceiptService.print_receipt(invoice)
