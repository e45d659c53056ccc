"""Customer API views.

Exposes the ``CustomerService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into DRF API exceptions
(rendered by ``drf_standardized_errors``); the view never swallows
generic exceptions.

The caller identity arrives as ``request.user`` (an ``IdentityContext``
built by ``HeaderIdentityAuthentication``).
"""

from __future__ import annotations

from typing import Any, Dict

import structlog
from django_filters.rest_framework import DjangoFilterBackend
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import BusinessRuleViolation, Conflict
from modules.core.pagination import StandardResultsSetPagination
from modules.core.permissions import IsAdmin
from modules.customers.dtos import CustomerRequestDTO, UpgradeCustomerDTO
from modules.customers.exceptions import (
    CustomerAlreadyExists,
    CustomerNotFound,
    CustomerValidationError,
)
from modules.customers.filters import CustomerFilter
from modules.customers.models import Customer
from modules.customers.publishers import get_event_publisher
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.serializers import CustomerSerializer
from modules.customers.services import CustomerService
from modules.customers.validators import CustomerValidator

logger = structlog.get_logger(__name__)


class CustomerViewSet(ListModelMixin, GenericViewSet):
    """ViewSet for Customer operations.

    Uses ``CustomerService`` with ``CustomerDjangoRepository`` (DIP).
    Does **not** extend ``ModelViewSet``: every write goes through
    the service layer.
    """

    filterset_class = CustomerFilter
    search_fields = ["names", "last_name", "business_name", "document_number"]
    ordering_fields = ["created_at", "id", "names", "customer_type"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    pagination_class = StandardResultsSetPagination
    queryset = Customer.objects.all()
    serializer_class = CustomerSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        repository = CustomerDjangoRepository()
        self._service = CustomerService(
            repository=repository,
            validator=CustomerValidator(repository),
            publisher=get_event_publisher(),
        )

    def get_permissions(self):
        if self.action == "list":
            return [IsAdmin()]
        return super().get_permissions()

    def initial(self, request: Request, *args, **kwargs) -> None:
        super().initial(request, *args, **kwargs)
        logger.info(
            "customer.api.access",
            operation=self.action,
            method=request.method,
            path=request.path,
            user_id=getattr(request.user, "user_id", None),
        )

    # ------------------------------------------------------------------
    # Retrieve
    # ------------------------------------------------------------------

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/customers/{pk}/"""
        try:
            customer = self._service.get_customer(pk)
        except CustomerNotFound as exc:
            raise NotFound(str(exc)) from exc
        return Response(customer.snapshot())

    @action(
        detail=False,
        methods=["get"],
        url_path=r"document/(?P<document_number>[^/]+)",
    )
    def by_document(self, request: Request, document_number: str) -> Response:
        """GET /api/v1/customers/document/{document_number}/"""
        try:
            customer = self._service.get_customer_by_document(document_number)
        except CustomerNotFound as exc:
            raise NotFound(str(exc)) from exc
        return Response(customer.snapshot())

    # ------------------------------------------------------------------
    # Create / Update / Upgrade / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/customers/"""
        dto = _parse(CustomerRequestDTO, request)
        try:
            customer = self._service.create_customer(dto)
        except CustomerAlreadyExists as exc:
            raise Conflict(str(exc)) from exc
        except CustomerValidationError as exc:
            raise BusinessRuleViolation(str(exc)) from exc
        return Response(customer.snapshot(), status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/customers/{pk}/"""
        dto = _parse(CustomerRequestDTO, request)
        try:
            customer = self._service.update_customer(pk, dto)
        except CustomerNotFound as exc:
            raise NotFound(str(exc)) from exc
        except CustomerAlreadyExists as exc:
            raise Conflict(str(exc)) from exc
        except CustomerValidationError as exc:
            raise BusinessRuleViolation(str(exc)) from exc
        return Response(customer.snapshot())

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/customers/{pk}/"""
        return self.update(request, pk)

    @action(detail=False, methods=["put"], url_path=r"upgrade/(?P<customer_id>[^/.]+)")
    def upgrade(self, request: Request, customer_id: str) -> Response:
        """PUT /api/v1/customers/upgrade/{customer_id}/"""
        dto = _parse(UpgradeCustomerDTO, request)
        try:
            customer = self._service.upgrade_customer(customer_id, dto)
        except CustomerNotFound as exc:
            raise NotFound(str(exc)) from exc
        except CustomerValidationError as exc:
            raise BusinessRuleViolation(str(exc)) from exc
        return Response(customer.snapshot())

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/customers/{pk}/"""
        try:
            self._service.delete_customer(pk)
        except CustomerNotFound as exc:
            raise NotFound(str(exc)) from exc
        return Response(status=status.HTTP_204_NO_CONTENT)


def _parse(dto_class: type[BaseModel], request: Request) -> Any:
    """Build a DTO from the request body or raise a DRF ``ValidationError``."""
    data = request.data
    if hasattr(data, "dict"):
        payload: Dict[str, Any] = data.dict()
    elif isinstance(data, dict):
        payload = data
    else:
        raise ValidationError({"non_field_errors": ["Expected a JSON object."]})
    try:
        return dto_class.model_validate(payload)
    except PydanticValidationError as exc:
        errors: Dict[str, list[str]] = {}
        for error in exc.errors():
            attr = ".".join(str(part) for part in error["loc"]) or "non_field_errors"
            errors.setdefault(attr, []).append(error["msg"])
        raise ValidationError(errors) from exc
