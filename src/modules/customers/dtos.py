"""Customer DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (Views) and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``CustomerRequestDTO``: input for creation and full update.
- ``UpgradeCustomerDTO``: input for a customer-type upgrade.
- ``CustomerOutputDTO``: the customer view returned by the service.

Document type and number are deliberately *not* validated here: the
validation pipeline owns them so each failure keeps its own error.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from modules.customers.constants import CustomerType

if TYPE_CHECKING:
    from modules.customers.models import Customer


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CustomerRequestDTO(BaseModel):
    """Immutable DTO for customer create/update requests.

    ``has_credit_card`` is optional: creation defaults it to ``False`` and
    an update keeps the stored value when it is omitted.
    """

    model_config = ConfigDict(frozen=True)

    customer_type: CustomerType
    document_type: str
    document_number: str
    names: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    mother_last_name: str = Field(min_length=1)
    business_name: str = ""
    birthdate: Optional[date] = None
    phone_number: str
    email: Optional[EmailStr] = None
    address: str = ""
    has_credit_card: Optional[bool] = None

    @field_validator("names", "last_name", "mother_last_name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class UpgradeCustomerDTO(BaseModel):
    """Immutable DTO for customer-type upgrade requests."""

    model_config = ConfigDict(frozen=True)

    customer_type: CustomerType


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class CustomerOutputDTO(BaseModel):
    """Immutable view of a persisted customer."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    customer_type: str
    document_type: str
    document_number: str
    names: str
    last_name: str
    mother_last_name: str
    business_name: str
    birthdate: Optional[date]
    phone_number: str
    email: str
    address: str
    has_credit_card: bool
    active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, customer: Customer) -> CustomerOutputDTO:
        """Build an output DTO from a Customer model instance."""
        return cls(
            id=customer.id,
            customer_type=str(customer.customer_type),
            document_type=customer.document_type,
            document_number=customer.document_number,
            names=customer.names,
            last_name=customer.last_name,
            mother_last_name=customer.mother_last_name,
            business_name=customer.business_name,
            birthdate=customer.birthdate,
            phone_number=customer.phone_number,
            email=customer.email,
            address=customer.address,
            has_credit_card=customer.has_credit_card,
            active=customer.active,
            created_at=customer.created_at,
            updated_at=customer.updated_at,
        )

    def snapshot(self) -> Dict[str, Any]:
        """JSON-safe dict, used as the payload of lifecycle events."""
        return self.model_dump(mode="json")
