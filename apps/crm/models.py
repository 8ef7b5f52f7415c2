"""
Customer models.
"""

from django.db import models


class Customer(models.Model):
    """
    A customer that invoices are billed to.

    The mobile number is the contact key and must be unique.
    """

    name = models.CharField(
        max_length=255,
        help_text="Customer name printed in the Bill To block",
    )

    mobile = models.CharField(
        max_length=20,
        unique=True,
        help_text="Mobile number, used to look the customer up at the counter",
    )

    address = models.TextField(
        blank=True,
        default="",
        help_text="Postal address printed on receipts",
    )

    # Timestamps
    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="When the customer was registered; drives new-customer analytics",
    )

    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the customer was last updated",
    )

    class Meta:
        db_table = "customers"
        ordering = ["name"]
        verbose_name = "Customer"
        verbose_name_plural = "Customers"
        indexes = [
            models.Index(fields=["created_at"], name="cust_created_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.mobile})"
