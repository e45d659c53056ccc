"""Customer validation pipeline.

Decides accept/reject before any mutation happens.  Stages run in a
fixed order and the first failure wins (errors are never aggregated):

1. document type is known;
2. document number has the exact length for its type;
3. document number has the right character set for its type;
4. document number is not already taken (one store read; skipped when an
   update keeps the number it already has);
5. premium customer types carry an active credit card.

No stage mutates state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import structlog

from modules.customers.constants import CustomerType, DocumentType
from modules.customers.exceptions import (
    CustomerAlreadyExists,
    InvalidDocumentFormat,
    InvalidDocumentLength,
    PremiumRequiresCreditCard,
)

if TYPE_CHECKING:
    from modules.customers.dtos import CustomerRequestDTO
    from modules.customers.models import Customer
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerValidator:
    """Stateless validator; the repository is only used by stage 4."""

    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Composites
    # ------------------------------------------------------------------

    def validate_request(
        self,
        dto: CustomerRequestDTO,
        existing: Optional[Customer] = None,
    ) -> DocumentType:
        """Run stages 1-4 against a request and return the resolved type.

        Pass ``existing`` on update so an unchanged number is not checked
        against itself.
        """
        doc_type = self.validate_document_type(dto.document_type)
        self.validate_document_length(doc_type, dto.document_number)
        self.validate_document_format(doc_type, dto.document_number)
        self.validate_unique_document(dto.document_number, existing)
        return doc_type

    def validate_customer(self, customer: Customer) -> None:
        """Stage 5 against a constructed or merged record."""
        if customer.is_premium and not customer.can_open_premium_accounts:
            self._reject_without_card(customer.customer_type)

    def validate_upgrade(self, customer: Customer, target_type: str) -> None:
        """Stage 5 against the *target* type, with the stored card flag."""
        if CustomerType(target_type).requires_credit_card and not customer.can_open_premium_accounts:
            self._reject_without_card(target_type)

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def validate_document_type(self, code: Optional[str]) -> DocumentType:
        if not DocumentType.is_valid(code):
            logger.warning("customer.validation.document_type", document_type=code)
        return DocumentType.from_code(code)

    def validate_document_length(self, doc_type: DocumentType, number: Optional[str]) -> None:
        if doc_type.is_valid_length(number):
            return
        received = len(number) if number is not None else 0
        logger.warning(
            "customer.validation.document_length",
            document_type=doc_type.code,
            expected=doc_type.required_length,
            received=received,
        )
        raise InvalidDocumentLength(doc_type.code, doc_type.required_length, received)

    def validate_document_format(self, doc_type: DocumentType, number: Optional[str]) -> None:
        if doc_type.is_valid_format(number):
            return
        logger.warning("customer.validation.document_format", document_type=doc_type.code)
        raise InvalidDocumentFormat(doc_type.code, doc_type.numeric_only)

    def validate_unique_document(
        self,
        document_number: str,
        existing: Optional[Customer] = None,
    ) -> None:
        if existing is not None and existing.document_number == document_number:
            return
        if self._repo.exists_by_document(document_number):
            logger.warning("customer.validation.duplicate_document", document_number=document_number)
            raise CustomerAlreadyExists(document_number)

    def _reject_without_card(self, customer_type: str) -> None:
        target = CustomerType(customer_type)
        logger.warning("customer.validation.credit_card_required", customer_type=target.value)
        raise PremiumRequiresCreditCard(target.value)
