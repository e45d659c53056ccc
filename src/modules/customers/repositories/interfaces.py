"""Customer repository interface.

Extends ``IRepository[Customer]`` with the look-ups required by the
document-uniqueness rule and the read-by-document use case.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.customers.models import Customer


class ICustomerRepository(IRepository["Customer"]):
    """Repository contract for the Customer aggregate."""

    @abstractmethod
    def exists_by_document(self, document_number: str) -> bool:
        """Whether any customer, active or not, holds this document number."""

    @abstractmethod
    def get_by_document(self, document_number: str) -> Optional[Customer]:
        """Retrieve a customer by document number."""

    @abstractmethod
    def list_by_customer_type(self, customer_type: str) -> List[Customer]:
        """List customers of a given classification."""

    @abstractmethod
    def hard_delete(self, id: str) -> bool:
        """Physically remove a customer.  ``False`` when nothing matched."""
