"""
Product catalogue models.
"""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class Product(models.Model):
    """
    A product that can be put on an invoice.

    The rate here is the current list price; invoice line items keep their
    own rate snapshot and are not affected when it changes.
    """

    name = models.CharField(
        max_length=255,
        unique=True,
        help_text="Product name shown on the counter and on receipts",
    )

    rate = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Current selling price per unit",
    )

    # Timestamps
    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="When the product was added",
    )

    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the product was last updated",
    )

    class Meta:
        db_table = "products"
        ordering = ["name"]
        verbose_name = "Product"
        verbose_name_plural = "Products"

    def __str__(self):
        return f"{self.name} ({self.rate})"
