"""Customer model with document identity and soft delete.

Business rules backed by the schema:
- Document number is unique in the system, active or not.
- Soft delete via ``active`` (inherited from SoftDeleteModel).
- Document numbers are masked in ``__str__`` and logs.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import SoftDeleteModel
from modules.customers.constants import CustomerType, DocumentType


class Customer(SoftDeleteModel):
    """Customer aggregate root.

    ``unique=True`` on ``document_number`` enforces global uniqueness
    regardless of the soft-delete state and is the final backstop for
    concurrent creates that both pass the service-level check.
    """

    customer_type = models.CharField(max_length=16, choices=CustomerType.choices)
    document_type = models.CharField(max_length=16, choices=DocumentType.choices())
    document_number = models.CharField(max_length=15, unique=True)
    names = models.CharField(max_length=255)
    last_name = models.CharField(max_length=255)
    mother_last_name = models.CharField(max_length=255, blank=True, default="")
    business_name = models.CharField(max_length=255, blank=True, default="")
    birthdate = models.DateField(null=True, blank=True, default=None)
    phone_number = models.CharField(max_length=20)
    email = models.EmailField(max_length=254, blank=True, default="")
    address = models.TextField(blank=True, default="")
    has_credit_card = models.BooleanField(default=False)

    class Meta:
        db_table = "customers"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="customers_created_idx"),
            models.Index(fields=["customer_type"], name="customers_type_idx"),
        ]

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    @property
    def can_open_premium_accounts(self) -> bool:
        return self.has_credit_card is True

    @property
    def is_premium(self) -> bool:
        return CustomerType(self.customer_type).requires_credit_card

    # ------------------------------------------------------------------
    # Display (mask sensitive data)
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        suffix = self.document_number[-4:] if self.document_number else "????"
        return f"{self.names} {self.last_name} ({self.document_type}: ***{suffix})"
