"""
Serializers for sales app.

- Invoice creation input (camelCase, as sent by the desktop and web clients)
- Invoice listing projection with customer snapshot and line items
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from rest_framework import serializers

from .models import Invoice, InvoiceItem


class AmountField(serializers.DecimalField):
    """
    Money amount stored with two decimal places.

    Clients compute totals in floating point (``3 * 0.1`` arrives as
    ``0.30000000000000004``), so extra places are rounded half-up to the
    column's precision rather than rejected.
    """

    def __init__(self, **kwargs):
        kwargs.setdefault("max_digits", 12)
        kwargs.setdefault("decimal_places", 2)
        kwargs.setdefault("min_value", Decimal("0.00"))
        kwargs.setdefault("rounding", ROUND_HALF_UP)
        super().__init__(**kwargs)

    def validate_precision(self, value):
        try:
            value = value.quantize(Decimal(1).scaleb(-self.decimal_places), rounding=self.rounding)
        except InvalidOperation:
            # Too many digits to quantize; let max_digits report it
            pass
        return super().validate_precision(value)


class InvoiceItemCreateSerializer(serializers.Serializer):
    """
    Serializer for one line of a new invoice.

    The product may be given as ``productId``; the counter UI sends the
    product row itself, so its ``id`` is accepted as well.
    """

    productId = serializers.IntegerField(source="product_id", min_value=1)
    quantity = serializers.IntegerField(min_value=1)
    rate = AmountField()
    total = AmountField()

    def to_internal_value(self, data):
        if isinstance(data, dict) and "productId" not in data:
            product_id = data.get("product_id", data.get("id"))
            if product_id is not None:
                data = {**data, "productId": product_id}
        return super().to_internal_value(data)


class InvoiceCreateSerializer(serializers.Serializer):
    """
    Serializer for creating a new invoice.

    The total is trusted as entered and is not checked against the items.
    ``items`` must be present but may be empty; the header is then written
    without lines.
    """

    customerId = serializers.IntegerField(source="customer_id", min_value=1)
    total = AmountField()
    items = InvoiceItemCreateSerializer(many=True, allow_empty=True)


class InvoiceItemSerializer(serializers.ModelSerializer):
    """Serializer for a persisted invoice line with the product name joined in."""

    productId = serializers.IntegerField(source="product_id", read_only=True)
    name = serializers.CharField(source="product_name", read_only=True, default=None)

    class Meta:
        model = InvoiceItem
        fields = ["id", "productId", "name", "quantity", "rate", "total"]


class InvoiceSerializer(serializers.ModelSerializer):
    """
    Serializer for the invoice listing projection.

    Expects instances prepared by ``InvoiceService`` (``customer_details``
    and ``line_items`` attached).
    """

    invoiceNumber = serializers.CharField(source="invoice_number", read_only=True)
    customerId = serializers.IntegerField(source="customer_id", read_only=True)
    customerDetails = serializers.DictField(source="customer_details", read_only=True)
    items = InvoiceItemSerializer(source="line_items", many=True, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Invoice
        fields = [
            "id",
            "invoiceNumber",
            "date",
            "total",
            "customerId",
            "customerDetails",
            "items",
            "createdAt",
        ]
