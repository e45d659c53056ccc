"""Django ORM implementation of the Customer repository.

Satisfies ``ICustomerRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
instead of raising HTTP-level exceptions; the Service Layer decides
how to translate a missing entity into an API response.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from modules.customers.exceptions import CustomerAlreadyExists
from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Customer]:
        """Retrieve a customer by primary key.

        Returns ``None`` for non-existent or invalid IDs (e.g. malformed UUID).
        """
        try:
            return Customer.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Customer]:
        """List customers with optional Django ORM look-ups.

        Examples of valid filters::

            {"active": True}
            {"customer_type": "VIP", "has_credit_card": True}
        """
        queryset = Customer.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def list_by_customer_type(self, customer_type: str) -> List[Customer]:
        return list(Customer.objects.filter(customer_type=customer_type))

    @transaction.atomic
    def save(self, entity: Customer) -> Customer:
        """Persist (create or update) a customer.

        The unique index on ``document_number`` settles the race between two
        concurrent creates that both passed the service-level check.
        """
        is_new = entity._state.adding
        try:
            entity.save()
        except IntegrityError as exc:
            logger.warning("customer.unique_violation", is_new=is_new)
            raise CustomerAlreadyExists(entity.document_number) from exc
        logger.info("customer.saved", customer_id=str(entity.id), is_new=is_new)
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Soft-delete a customer by ID.

        Returns ``True`` if the customer was found and deactivated,
        ``False`` if no customer exists with the given ID.
        """
        customer = self.get_by_id(id)
        if not customer:
            return False
        customer.soft_delete()
        customer.save(update_fields=["active"])
        logger.info("customer.soft_deleted", customer_id=str(id))
        return True

    @transaction.atomic
    def hard_delete(self, id: str) -> bool:
        customer = self.get_by_id(id)
        if not customer:
            return False
        customer.hard_delete()
        logger.info("customer.hard_deleted", customer_id=str(id))
        return True

    def exists_by_document(self, document_number: str) -> bool:
        return Customer.objects.filter(document_number=document_number).exists()

    def get_by_document(self, document_number: str) -> Optional[Customer]:
        return Customer.objects.filter(document_number=document_number).first()
