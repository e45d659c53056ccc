"""Integration tests for filtering, search, ordering and pagination of
the admin customer listing."""

from __future__ import annotations

import pytest

from modules.customers.constants import CustomerType, DocumentType
from modules.customers.models import Customer

pytestmark = pytest.mark.integration

BASE_URL = "/api/v1/customers/"


@pytest.fixture()
def customer_batch(make_customer):
    personal = make_customer(names="Alice", last_name="Torres")
    business = make_customer(
        customer_type=CustomerType.BUSINESS,
        document_type=DocumentType.RUC.code,
        document_number="20512345678",
        names="Bruno",
        last_name="Salas",
        business_name="Salas Import SAC",
    )
    vip = make_customer(
        customer_type=CustomerType.VIP,
        document_type=DocumentType.PASSPORT.code,
        document_number="PA1234567890123",
        names="Carla",
        last_name="Diaz",
        has_credit_card=True,
        active=False,
    )
    return personal, business, vip


@pytest.fixture()
def large_batch():
    Customer.objects.bulk_create(
        [
            Customer(
                customer_type=CustomerType.PERSONAL,
                document_type=DocumentType.DNI.code,
                document_number=f"{idx:08d}",
                names=f"Client {idx:03d}",
                last_name="Batch",
                mother_last_name="Load",
                phone_number="+51900000000",
            )
            for idx in range(1, 121)
        ]
    )


class TestFiltering:
    def test_filter_by_customer_type(self, admin_client, event_publisher, customer_batch):
        response = admin_client.get(BASE_URL, {"customer_type": "BUSINESS"})
        assert response.status_code == 200
        assert [c["names"] for c in response.data["results"]] == ["Bruno"]

    def test_filter_by_document_type(self, admin_client, event_publisher, customer_batch):
        response = admin_client.get(BASE_URL, {"document_type": "PASSPORT"})
        assert [c["names"] for c in response.data["results"]] == ["Carla"]

    def test_filter_by_credit_card(self, admin_client, event_publisher, customer_batch):
        response = admin_client.get(BASE_URL, {"has_credit_card": "true"})
        assert [c["names"] for c in response.data["results"]] == ["Carla"]

    def test_search_business_name(self, admin_client, event_publisher, customer_batch):
        response = admin_client.get(BASE_URL, {"search": "Import"})
        assert [c["names"] for c in response.data["results"]] == ["Bruno"]

    def test_ordering_by_names(self, admin_client, event_publisher, customer_batch):
        response = admin_client.get(BASE_URL, {"ordering": "names"})
        assert [c["names"] for c in response.data["results"]] == ["Alice", "Bruno", "Carla"]


class TestPagination:
    def test_default_page_size(self, admin_client, event_publisher, large_batch):
        response = admin_client.get(BASE_URL)
        assert response.status_code == 200
        assert response.data["count"] == 120
        assert len(response.data["results"]) == 20
        assert response.data["next"] is not None

    def test_custom_page_size_is_capped(self, admin_client, event_publisher, large_batch):
        response = admin_client.get(BASE_URL, {"page_size": 500})
        assert len(response.data["results"]) == 100
