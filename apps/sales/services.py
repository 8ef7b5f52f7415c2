"""
Invoice transaction manager.

Creates an invoice header and its line items as one atomic unit of work and
serves the read-only invoice projection (customer snapshot plus items with
product names) used by listings and receipts.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from django.utils import timezone

from apps.core.exceptions import LedgerError
from apps.core.services import validate_payload
from apps.core.store import RecordStore
from apps.crm.models import Customer
from apps.inventory.models import Product

from .models import Invoice, InvoiceItem
from .numbering import InvoiceNumberingPolicy
from .serializers import InvoiceCreateSerializer, InvoiceSerializer

logger = logging.getLogger(__name__)


class InvoiceService:
    """
    Service for creating and reading invoices.

    Example:
        service = InvoiceService(RecordStore())
        invoice = service.create_invoice(
            customer_id=7,
            total=100,
            items=[{"productId": 3, "quantity": 2, "rate": 50, "total": 100}],
        )
        invoice.invoice_number  # "001/03/24"
    """

    def __init__(
        self,
        store: Optional[RecordStore] = None,
        numbering: Optional[InvoiceNumberingPolicy] = None,
    ):
        self.store = store or RecordStore()
        self.numbering = numbering or InvoiceNumberingPolicy(self.store)

    def create_invoice(self, customer_id, total, items) -> Invoice:
        """
        Create an invoice with its line items.

        The invoice number is derived and the header and every item are
        inserted inside one atomic unit; if any step fails nothing is
        written. Items are stored in the order given, exactly as supplied.

        Args:
            customer_id: id of the customer being billed
            total: invoice total, stored as given
            items: list of {productId, quantity, rate, total}

        Returns:
            The persisted invoice, projected like ``get_invoice``

        Raises:
            RecordValidationError: a required field is missing or invalid
            DuplicateRecordError: the derived invoice number is already taken
            StorageError: the record store failed
        """
        data = validate_payload(
            InvoiceCreateSerializer,
            {"customerId": customer_id, "total": total, "items": items},
        )
        line_items = [dict(item) for item in data["items"]]

        line_sum = sum((item["total"] for item in line_items), Decimal("0.00"))
        if line_sum != data["total"]:
            logger.debug(
                f"Invoice total {data['total']} differs from sum of item totals {line_sum}; "
                f"keeping the submitted total"
            )

        def unit_of_work(store: RecordStore) -> int:
            now = timezone.now()
            invoice_number = self.numbering.next_number(now)
            invoice_id = store.insert(
                Invoice,
                invoice_number=invoice_number,
                date=now,
                total=data["total"],
                customer_id=data["customer_id"],
            )
            for item in line_items:
                store.insert(InvoiceItem, invoice_id=invoice_id, **item)
            return invoice_id

        try:
            invoice_id = self.store.run_atomic(unit_of_work)
        except LedgerError as e:
            logger.error(f"Invoice creation rolled back: {e.error_type}: {e.message}")
            raise

        invoice = self.get_invoice(invoice_id)
        logger.info(
            f"Created invoice {invoice.invoice_number} for customer {invoice.customer_id} "
            f"with {len(line_items)} item(s), total {invoice.total}"
        )
        return invoice

    def list_invoices(self) -> List[Invoice]:
        """Return every invoice, newest first, with customer details and items."""
        with self.store.translate_errors():
            invoices = list(self.store.query(Invoice, order=["-date", "-id"]))
            return self._project(invoices)

    def get_invoice(self, invoice_id) -> Invoice:
        """
        Return one invoice with customer details and items.

        Raises:
            RecordNotFoundError: no invoice has this id
        """
        invoice = self.store.get(Invoice, invoice_id)
        with self.store.translate_errors():
            return self._project([invoice])[0]

    def serialize(self, invoice: Invoice) -> Dict[str, Any]:
        return InvoiceSerializer(invoice).data

    def serialize_many(self, invoices: Iterable[Invoice]) -> List[Dict[str, Any]]:
        return InvoiceSerializer(invoices, many=True).data

    def _project(self, invoices: List[Invoice]) -> List[Invoice]:
        """
        Attach ``customer_details`` and ``line_items`` to each invoice.

        Customers and products are joined at read time; a reference to a row
        that no longer exists yields empty details rather than dropping the
        invoice.
        """
        invoice_ids = [invoice.pk for invoice in invoices]
        items = list(
            self.store.query(InvoiceItem, filters={"invoice_id__in": invoice_ids}, order="id")
        )
        customers = self.store.query(
            Customer, filters={"id__in": {invoice.customer_id for invoice in invoices}}
        ).in_bulk()
        products = self.store.query(
            Product, filters={"id__in": {item.product_id for item in items}}
        ).in_bulk()

        items_by_invoice: Dict[int, List[InvoiceItem]] = {}
        for item in items:
            product = products.get(item.product_id)
            item.product_name = product.name if product else None
            items_by_invoice.setdefault(item.invoice_id, []).append(item)

        for invoice in invoices:
            customer = customers.get(invoice.customer_id)
            invoice.customer_details = {
                "name": customer.name if customer else None,
                "mobile": customer.mobile if customer else None,
                "address": customer.address if customer else None,
            }
            invoice.line_items = items_by_invoice.get(invoice.pk, [])

        return invoices
