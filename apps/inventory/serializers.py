"""
Serializers for the product catalogue.
"""

from rest_framework import serializers

from .models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Serializer for Product model."""

    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Product
        fields = ["id", "name", "rate", "createdAt", "updatedAt"]
        extra_kwargs = {
            # Duplicate names are reported by the record store as a conflict
            "name": {"validators": []},
        }

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Product name cannot be empty.")
        return value
