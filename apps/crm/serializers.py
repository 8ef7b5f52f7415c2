"""
Serializers for customers.
"""

from rest_framework import serializers

from .models import Customer


class CustomerSerializer(serializers.ModelSerializer):
    """Serializer for Customer model."""

    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Customer
        fields = ["id", "name", "mobile", "address", "createdAt", "updatedAt"]
        extra_kwargs = {
            # Duplicate mobiles are reported by the record store as a conflict
            "mobile": {"validators": []},
            "address": {"required": False, "allow_blank": True},
        }
