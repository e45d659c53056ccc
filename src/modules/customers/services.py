"""Customer service layer (Use Cases).

Orchestrates the customer lifecycle, delegating checks to the injected
``CustomerValidator``, persistence to the ``ICustomerRepository`` and
notifications to the ``IEventPublisher``.

Per record: absent -> active -> inactive (soft-deleted).  Update and
upgrade are active -> active; nothing leaves inactive.

Every mutating use case validates fully before the single store write.
Create, update and delete then publish exactly one lifecycle event; a
publish failure is logged and never changes the result returned to the
caller.  Upgrade publishes nothing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog

from modules.customers.dtos import CustomerOutputDTO
from modules.customers.exceptions import CustomerNotFound
from modules.customers.models import Customer
from shared.domain.bus import PublishFailure
from shared.domain.events import LifecycleEvent, LifecycleEventType

if TYPE_CHECKING:
    from modules.customers.dtos import CustomerRequestDTO, UpgradeCustomerDTO
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.customers.validators import CustomerValidator
    from shared.domain.bus import IEventPublisher

logger = structlog.get_logger(__name__)

ENTITY_TYPE = "Customer"

# Fields a request may overwrite; id, created_at and active are kept.
MUTABLE_FIELDS = (
    "customer_type",
    "document_number",
    "names",
    "last_name",
    "mother_last_name",
    "business_name",
    "birthdate",
    "phone_number",
    "address",
)


class CustomerService:
    """Application service for Customer use-cases.

    Receives its collaborators via constructor injection and keeps no
    mutable state of its own, so one instance may serve concurrent calls.
    """

    def __init__(
        self,
        repository: ICustomerRepository,
        validator: CustomerValidator,
        publisher: IEventPublisher,
    ) -> None:
        self._repo = repository
        self._validator = validator
        self._publisher = publisher

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_customer(self, dto: CustomerRequestDTO) -> CustomerOutputDTO:
        """Validate, persist and announce a new customer.

        Raises:
            InvalidDocumentType, InvalidDocumentLength, InvalidDocumentFormat:
                malformed document.
            CustomerAlreadyExists: the document number is taken.
            PremiumRequiresCreditCard: premium type without a credit card.
        """
        log = logger.bind(customer_type=str(dto.customer_type), document_type=dto.document_type)
        log.debug("customer.creation_started")

        doc_type = self._validator.validate_request(dto)

        customer = Customer(
            customer_type=dto.customer_type,
            document_type=doc_type.code,
            document_number=dto.document_number,
            names=dto.names,
            last_name=dto.last_name,
            mother_last_name=dto.mother_last_name,
            business_name=dto.business_name,
            birthdate=dto.birthdate,
            phone_number=dto.phone_number,
            email=dto.email or "",
            address=dto.address,
            has_credit_card=bool(dto.has_credit_card),
            active=True,
        )
        self._validator.validate_customer(customer)

        customer = self._repo.save(customer)
        output = CustomerOutputDTO.from_entity(customer)
        log.info("customer.created", customer_id=str(customer.id))

        self._publish(LifecycleEventType.CUSTOMER_CREATED, output)
        return output

    def update_customer(self, id: str, dto: CustomerRequestDTO) -> CustomerOutputDTO:
        """Replace the mutable fields of an existing customer.

        Raises:
            CustomerNotFound: if the customer does not exist.
            CustomerAlreadyExists: if the new document number is taken.
            InvalidDocumentType, InvalidDocumentLength, InvalidDocumentFormat,
            PremiumRequiresCreditCard: as for creation.
        """
        customer = self._get_entity(id)
        log = logger.bind(customer_id=str(id))

        doc_type = self._validator.validate_request(dto, existing=customer)

        for field in MUTABLE_FIELDS:
            setattr(customer, field, getattr(dto, field))
        customer.document_type = doc_type.code
        customer.email = dto.email or ""
        if dto.has_credit_card is not None:
            customer.has_credit_card = dto.has_credit_card

        self._validator.validate_customer(customer)

        customer = self._repo.save(customer)
        output = CustomerOutputDTO.from_entity(customer)
        log.info("customer.updated")

        self._publish(LifecycleEventType.CUSTOMER_UPDATED, output)
        return output

    def delete_customer(self, id: str) -> None:
        """Soft-delete a customer; its document number stays reserved.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        customer = self._get_entity(id)
        customer.soft_delete()
        customer = self._repo.save(customer)
        logger.info("customer.soft_deleted", customer_id=str(id))

        self._publish(LifecycleEventType.CUSTOMER_DELETED, CustomerOutputDTO.from_entity(customer))

    def upgrade_customer(self, id: str, dto: UpgradeCustomerDTO) -> CustomerOutputDTO:
        """Change the customer type after checking the target's card rule.

        Document fields are not re-validated and no event is published.

        Raises:
            CustomerNotFound: if the customer does not exist.
            PremiumRequiresCreditCard: target type needs a card the
                customer does not have.
        """
        customer = self._get_entity(id)
        log = logger.bind(
            customer_id=str(id),
            current_type=str(customer.customer_type),
            target_type=str(dto.customer_type),
        )

        self._validator.validate_upgrade(customer, dto.customer_type)

        customer.customer_type = dto.customer_type
        customer = self._repo.save(customer)
        log.info("customer.upgraded")
        return CustomerOutputDTO.from_entity(customer)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_customers(self, filters: Optional[Dict[str, Any]] = None) -> List[CustomerOutputDTO]:
        """Return every customer (active or not), optionally filtered."""
        return [CustomerOutputDTO.from_entity(c) for c in self._repo.list(filters)]

    def get_customer(self, id: str) -> CustomerOutputDTO:
        """Retrieve a single customer by ID.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        customer = self._get_entity(id)
        logger.debug("customer.retrieved", customer_id=str(id))
        return CustomerOutputDTO.from_entity(customer)

    def get_customer_by_document(self, document_number: str) -> CustomerOutputDTO:
        """Retrieve a single customer by document number.

        Raises:
            CustomerNotFound: with ``field="document_number"``.
        """
        customer = self._repo.get_by_document(document_number)
        if not customer:
            raise CustomerNotFound(document_number, field="document_number")
        return CustomerOutputDTO.from_entity(customer)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _get_entity(self, id: str) -> Customer:
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(str(id))
        return customer

    def _publish(self, event_type: LifecycleEventType, customer: CustomerOutputDTO) -> None:
        event = LifecycleEvent(
            event_type=event_type,
            entity_type=ENTITY_TYPE,
            payload=customer.snapshot(),
        )
        log = logger.bind(
            customer_id=str(customer.id),
            event_type=str(event_type),
            event_id=str(event.event_id),
        )
        try:
            self._publisher.publish(str(customer.id), event)
        except PublishFailure as exc:
            log.error("customer.event.publish_failed", error=str(exc))
            return
        log.info("customer.event.published")
