"""Customer DRF serializers for API output.

The serializer operates at the Interface layer (API Views): it renders
list pages and documents the response schema.  Input validation and
business logic live in the DTOs and the Service Layer.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.customers.models import Customer


class CustomerSerializer(serializers.ModelSerializer):
    """Read-only serializer for the Customer resource."""

    class Meta:
        model = Customer
        fields = [
            "id",
            "customer_type",
            "document_type",
            "document_number",
            "names",
            "last_name",
            "mother_last_name",
            "business_name",
            "birthdate",
            "phone_number",
            "email",
            "address",
            "has_credit_card",
            "active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
