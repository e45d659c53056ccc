import pytest

from rest_framework.test import APIClient

from modules.customers.constants import CustomerType, DocumentType
from modules.customers.models import Customer
from shared.infrastructure.bus import InMemoryEventPublisher


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints (no identity headers)."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def user_client():
    """APIClient carrying the gateway headers of a regular user."""
    client = APIClient()
    client.defaults["HTTP_X_USER_ID"] = "user-42"
    client.defaults["HTTP_X_USER_ROLES"] = "ROLE_USER"
    return client


@pytest.fixture()
def admin_client():
    """APIClient carrying the gateway headers of an administrator."""
    client = APIClient()
    client.defaults["HTTP_X_USER_ID"] = "admin-1"
    client.defaults["HTTP_X_USER_ROLES"] = "ROLE_USER,ROLE_ADMIN"
    return client


@pytest.fixture()
def event_publisher(monkeypatch):
    """In-memory publisher shared by every view instance of the test."""
    publisher = InMemoryEventPublisher()
    monkeypatch.setattr("modules.customers.views.get_event_publisher", lambda: publisher)
    return publisher


@pytest.fixture()
def make_customer():
    """Factory persisting a Customer with sane defaults."""

    def _make(**overrides) -> Customer:
        defaults = {
            "customer_type": CustomerType.PERSONAL,
            "document_type": DocumentType.DNI.code,
            "document_number": "45879632",
            "names": "Ana Lucia",
            "last_name": "Quispe",
            "mother_last_name": "Mamani",
            "phone_number": "+51987654321",
            "email": "ana.quispe@example.com",
            "address": "Av. Arequipa 123, Lima",
        }
        defaults.update(overrides)
        customer = Customer(**defaults)
        customer.save()
        return customer

    return _make
