"""
Pytest configuration and fixtures for the point-of-sale ledger.
"""

from decimal import Decimal

from django.utils import timezone

import pytest

from apps.core.store import RecordStore
from apps.crm.models import Customer
from apps.inventory.models import Product
from apps.sales.models import Invoice, InvoiceItem


@pytest.fixture
def api_client():
    """
    Fixture for Django REST framework API client.
    """
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def store():
    """Record store bound to the test database."""
    return RecordStore()


@pytest.fixture
def product(db):
    """A product priced at 50.00."""
    return Product.objects.create(name="Engine Oil 1L", rate=Decimal("50.00"))


@pytest.fixture
def customer(db):
    """A registered customer."""
    return Customer.objects.create(
        name="Asha Verma", mobile="9876543210", address="12 Market Road"
    )


@pytest.fixture
def make_invoice(db):
    """
    Factory writing an invoice row directly, for tests that need a specific
    number or issue date.
    """
    counter = {"value": 0}

    def _make_invoice(total, date=None, customer=None, invoice_number=None, items=()):
        counter["value"] += 1
        invoice = Invoice.objects.create(
            invoice_number=invoice_number or f"T{counter['value']:03d}/00/00",
            date=date or timezone.now(),
            total=Decimal(str(total)),
            customer_id=customer.pk if customer else 1,
        )
        for product, quantity, rate in items:
            InvoiceItem.objects.create(
                invoice=invoice,
                product=product,
                quantity=quantity,
                rate=Decimal(str(rate)),
                total=Decimal(str(rate)) * quantity,
            )
        return invoice

    return _make_invoice


@pytest.fixture
def receipts_dir(settings, tmp_path):
    """Point receipt storage at a temporary directory with no printer."""
    settings.RECEIPTS_ROOT = tmp_path / "receipts"
    settings.RECEIPT_PRINT_COMMAND = []
    return settings.RECEIPTS_ROOT
