"""
Invoice models for the point-of-sale ledger.

An Invoice is written exactly once, together with its line items, by
``apps.sales.services.InvoiceService``. Neither model is updated or deleted
through the application.
"""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from apps.crm.models import Customer
from apps.inventory.models import Product


class Invoice(models.Model):
    """
    Invoice header.

    ``invoice_number`` has the form ``SSS/MM/YY``: a sequence that restarts
    every calendar month, followed by the month and two-digit year it was
    issued in. The total is supplied by the caller and stored as given.
    """

    invoice_number = models.CharField(
        max_length=32,
        unique=True,
        help_text="Period-scoped sequential number, e.g. 001/03/24",
    )

    date = models.DateTimeField(
        default=timezone.now,
        editable=False,
        db_index=True,
        help_text="When the invoice was issued",
    )

    total = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Invoice total as entered at the counter (not recomputed from items)",
    )

    # The customer is expected to exist but is not enforced by the database
    customer = models.ForeignKey(
        Customer,
        on_delete=models.PROTECT,
        db_constraint=False,
        related_name="invoices",
        help_text="Customer the invoice is billed to",
    )

    # Timestamps
    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="When the invoice row was written",
    )

    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the invoice row was last written",
    )

    class Meta:
        db_table = "invoices"
        ordering = ["-date", "-id"]
        verbose_name = "Invoice"
        verbose_name_plural = "Invoices"

    def __str__(self):
        return f"{self.invoice_number} - {self.total}"

    @property
    def line_total(self) -> Decimal:
        """Sum of the line item totals, for comparison with ``total``."""
        return sum((item.total for item in self.items.all()), Decimal("0.00"))


class InvoiceItem(models.Model):
    """
    One line of an invoice.

    ``rate`` is a snapshot of the price charged and may differ from the
    product's current rate. ``total`` is stored as supplied.
    """

    invoice = models.ForeignKey(
        Invoice,
        on_delete=models.CASCADE,
        related_name="items",
        help_text="Invoice that this line belongs to",
    )

    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        db_constraint=False,
        related_name="invoice_items",
        help_text="Product that was sold",
    )

    quantity = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text="Quantity sold",
    )

    rate = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Unit price at time of sale (may differ from current product rate)",
    )

    total = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Line total as entered (expected to be quantity * rate)",
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="When the line was written",
    )

    class Meta:
        db_table = "invoice_items"
        ordering = ["id"]
        verbose_name = "Invoice Item"
        verbose_name_plural = "Invoice Items"

    def __str__(self):
        return f"{self.product_id} x {self.quantity} = {self.total}"
