"""Integration tests for Customer API endpoints.

Covers:
- Identity enforcement (401 without X-User-Id, 403 list for non-admins).
- Create / retrieve / look-up by document / update / upgrade / delete
  via /api/v1/customers/.
- Domain exception mapping (400, 404, 409).
- Lifecycle events emitted per mutation.
"""

from __future__ import annotations

import pytest

from modules.customers.constants import CustomerType, DocumentType
from modules.customers.models import Customer
from shared.domain.events import LifecycleEventType

pytestmark = pytest.mark.integration

BASE_URL = "/api/v1/customers/"
MISSING_ID = "00000000-0000-0000-0000-000000000000"


def _payload(**overrides) -> dict:
    data = {
        "customer_type": "PERSONAL",
        "document_type": "DNI",
        "document_number": "70112233",
        "names": "Rosa",
        "last_name": "Flores",
        "mother_last_name": "Paredes",
        "birthdate": "1992-07-04",
        "phone_number": "+51912345678",
        "email": "rosa.flores@example.com",
        "address": "Jr. de la Union 500, Lima",
    }
    data.update(overrides)
    return data


# ===========================================================================
# Identity
# ===========================================================================


class TestCustomerAPIIdentity:
    def test_missing_identity_returns_401(self, api_client, event_publisher):
        response = api_client.post(BASE_URL, _payload(), format="json")
        assert response.status_code == 401
        assert not Customer.objects.exists()

    def test_list_requires_admin(self, user_client, event_publisher):
        response = user_client.get(BASE_URL)
        assert response.status_code == 403

    def test_list_without_identity_returns_401(self, api_client, event_publisher):
        response = api_client.get(BASE_URL)
        assert response.status_code == 401


# ===========================================================================
# LIST
# ===========================================================================


class TestCustomerList:
    def test_list_empty(self, admin_client, event_publisher):
        response = admin_client.get(BASE_URL)
        assert response.status_code == 200
        assert response.data["results"] == []

    def test_list_includes_inactive(self, admin_client, event_publisher, make_customer):
        make_customer()
        make_customer(document_number="87654321", active=False)
        response = admin_client.get(BASE_URL)
        assert response.status_code == 200
        assert response.data["count"] == 2

    def test_filter_by_active(self, admin_client, event_publisher, make_customer):
        make_customer()
        make_customer(document_number="87654321", active=False)
        response = admin_client.get(BASE_URL, {"active": "false"})
        assert [c["document_number"] for c in response.data["results"]] == ["87654321"]


# ===========================================================================
# CREATE
# ===========================================================================


class TestCustomerCreate:
    def test_create_success(self, user_client, event_publisher):
        response = user_client.post(BASE_URL, _payload(), format="json")

        assert response.status_code == 201
        data = response.json()
        assert data["document_number"] == "70112233"
        assert data["active"] is True
        assert data["has_credit_card"] is False
        assert Customer.objects.filter(id=data["id"]).exists()

        [event] = event_publisher.events
        assert event.event_type == LifecycleEventType.CUSTOMER_CREATED
        assert event.payload == data

    def test_create_premium_with_card(self, user_client, event_publisher):
        response = user_client.post(
            BASE_URL,
            _payload(
                customer_type="VIP",
                document_type="PASSPORT",
                document_number="PA1234567890123",
                has_credit_card=True,
            ),
            format="json",
        )
        assert response.status_code == 201
        assert response.json()["customer_type"] == "VIP"

    def test_create_premium_without_card_returns_400(self, user_client, event_publisher):
        response = user_client.post(BASE_URL, _payload(customer_type="VIP"), format="json")

        assert response.status_code == 400
        assert response.json()["errors"][0]["detail"] == (
            "Customer type VIP requires an active credit card"
        )
        assert not Customer.objects.exists()
        assert event_publisher.published == []

    def test_create_invalid_document_type_returns_400(self, user_client, event_publisher):
        response = user_client.post(BASE_URL, _payload(document_type="CPF"), format="json")
        assert response.status_code == 400
        assert response.json()["errors"][0]["detail"].startswith("Invalid document type: CPF.")

    def test_create_bad_length_returns_400(self, user_client, event_publisher):
        response = user_client.post(BASE_URL, _payload(document_number="7011223"), format="json")
        assert response.status_code == 400
        assert response.json()["errors"][0]["detail"] == (
            "The DNI must have exactly 8 characters. Received: 7"
        )

    def test_create_duplicate_document_returns_409(self, user_client, event_publisher, make_customer):
        make_customer(document_number="70112233", active=False)
        response = user_client.post(BASE_URL, _payload(), format="json")

        assert response.status_code == 409
        assert Customer.objects.count() == 1
        assert event_publisher.published == []

    def test_create_missing_field_returns_400(self, user_client, event_publisher):
        payload = _payload()
        del payload["names"]
        response = user_client.post(BASE_URL, payload, format="json")
        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "names"


# ===========================================================================
# RETRIEVE
# ===========================================================================


class TestCustomerRetrieve:
    def test_retrieve_success(self, user_client, event_publisher, make_customer):
        customer = make_customer()
        response = user_client.get(f"{BASE_URL}{customer.id}/")
        assert response.status_code == 200
        assert response.json()["id"] == str(customer.id)

    def test_retrieve_inactive(self, user_client, event_publisher, make_customer):
        customer = make_customer(active=False)
        response = user_client.get(f"{BASE_URL}{customer.id}/")
        assert response.status_code == 200
        assert response.json()["active"] is False

    def test_retrieve_not_found(self, user_client, event_publisher):
        response = user_client.get(f"{BASE_URL}{MISSING_ID}/")
        assert response.status_code == 404

    def test_by_document(self, user_client, event_publisher, make_customer):
        customer = make_customer()
        response = user_client.get(f"{BASE_URL}document/{customer.document_number}/")
        assert response.status_code == 200
        assert response.json()["id"] == str(customer.id)

    def test_by_document_not_found(self, user_client, event_publisher):
        response = user_client.get(f"{BASE_URL}document/99999999/")
        assert response.status_code == 404
        assert response.json()["errors"][0]["detail"] == (
            "Customer with document_number 99999999 not found."
        )


# ===========================================================================
# UPDATE
# ===========================================================================


class TestCustomerUpdate:
    def test_update_success(self, user_client, event_publisher, make_customer):
        customer = make_customer(document_number="70112233")
        response = user_client.put(
            f"{BASE_URL}{customer.id}/", _payload(names="Rosa Maria"), format="json"
        )

        assert response.status_code == 200
        assert response.json()["names"] == "Rosa Maria"
        customer.refresh_from_db()
        assert customer.names == "Rosa Maria"
        [event] = event_publisher.events
        assert event.event_type == LifecycleEventType.CUSTOMER_UPDATED

    def test_update_to_taken_document_returns_409(
        self, user_client, event_publisher, make_customer
    ):
        make_customer(document_number="45879632")
        customer = make_customer(document_number="70112233")
        response = user_client.put(
            f"{BASE_URL}{customer.id}/", _payload(document_number="45879632"), format="json"
        )
        assert response.status_code == 409
        customer.refresh_from_db()
        assert customer.document_number == "70112233"

    def test_update_not_found(self, user_client, event_publisher):
        response = user_client.put(f"{BASE_URL}{MISSING_ID}/", _payload(), format="json")
        assert response.status_code == 404


# ===========================================================================
# UPGRADE
# ===========================================================================


class TestCustomerUpgrade:
    def test_upgrade_with_card(self, user_client, event_publisher, make_customer):
        customer = make_customer(has_credit_card=True)
        response = user_client.put(
            f"{BASE_URL}upgrade/{customer.id}/", {"customer_type": "VIP"}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["customer_type"] == "VIP"
        customer.refresh_from_db()
        assert customer.customer_type == CustomerType.VIP
        assert event_publisher.published == []

    def test_upgrade_without_card_returns_400(self, user_client, event_publisher, make_customer):
        customer = make_customer()
        response = user_client.put(
            f"{BASE_URL}upgrade/{customer.id}/", {"customer_type": "PYME"}, format="json"
        )
        assert response.status_code == 400
        customer.refresh_from_db()
        assert customer.customer_type == CustomerType.PERSONAL

    def test_upgrade_unknown_type_returns_400(self, user_client, event_publisher, make_customer):
        customer = make_customer()
        response = user_client.put(
            f"{BASE_URL}upgrade/{customer.id}/", {"customer_type": "GOLD"}, format="json"
        )
        assert response.status_code == 400

    def test_upgrade_not_found(self, user_client, event_publisher):
        response = user_client.put(
            f"{BASE_URL}upgrade/{MISSING_ID}/", {"customer_type": "VIP"}, format="json"
        )
        assert response.status_code == 404


# ===========================================================================
# DELETE
# ===========================================================================


class TestCustomerDelete:
    def test_soft_delete(self, user_client, event_publisher, make_customer):
        customer = make_customer()
        response = user_client.delete(f"{BASE_URL}{customer.id}/")

        assert response.status_code == 204
        customer.refresh_from_db()
        assert customer.active is False
        [event] = event_publisher.events
        assert event.event_type == LifecycleEventType.CUSTOMER_DELETED
        assert event.payload["active"] is False

    def test_document_stays_reserved_after_delete(
        self, user_client, event_publisher, make_customer
    ):
        customer = make_customer(
            document_type=DocumentType.DNI.code, document_number="70112233"
        )
        user_client.delete(f"{BASE_URL}{customer.id}/")

        response = user_client.post(BASE_URL, _payload(), format="json")
        assert response.status_code == 409

    def test_delete_not_found(self, user_client, event_publisher):
        response = user_client.delete(f"{BASE_URL}{MISSING_ID}/")
        assert response.status_code == 404
