# backend/tests/modules/loyalty/test_loyalty_routes.py

"""
Tests for loyalty API routes.
"""

from decimal import Decimal

from modules.orders.enums.order_enums import OrderStatus
from tests.factories import LoyaltyAccountFactory, OrderFactory

PHONE = "22123456"


class TestCustomerEndpoints:
    def test_get_account(self, client):
        LoyaltyAccountFactory(phone_number=PHONE, customer_name="Amira", total_points=Decimal("4.5"))

        response = client.get(f"/api/loyalty/{PHONE}")

        assert response.status_code == 200
        data = response.json()
        assert data["customer_name"] == "Amira"
        assert Decimal(str(data["total_points"])) == Decimal("4.5")

    def test_unknown_account_is_404(self, client):
        response = client.get(f"/api/loyalty/{PHONE}")

        assert response.status_code == 404
        assert "not found" in response.json()["detail"]["message"]

    def test_malformed_phone_is_400(self, client):
        response = client.get("/api/loyalty/12ab")

        assert response.status_code == 400

    def test_activity_includes_localized_orders(self, client):
        OrderFactory(phone_number=PHONE, status=OrderStatus.DELIVERED.value)

        response = client.get(f"/api/loyalty/{PHONE}/activity", params={"lang": "fr"})

        assert response.status_code == 200
        data = response.json()
        assert data["orders"][0]["status_label"] == "Livrée"
        assert Decimal(str(data["spent_cash"])) == Decimal("10")


class TestAdminEndpoints:
    def test_requires_authentication(self, client):
        response = client.post(
            "/api/loyalty/adjust",
            json={"phone_number": PHONE, "customer_name": "Amira", "amount": 5},
        )

        assert response.status_code == 401

    def test_adjust_creates_account_and_logs(self, admin_client):
        response = admin_client.post(
            "/api/loyalty/adjust",
            json={"phone_number": PHONE, "customer_name": "Amira", "amount": 5},
        )

        assert response.status_code == 200
        data = response.json()
        assert Decimal(str(data["account"]["total_points"])) == Decimal("5")
        assert data["transaction"]["type"] == "adjustment_add"
        assert data["transaction"]["reason"] == "Admin manual add"

        history = admin_client.get(f"/api/loyalty/{PHONE}/transactions")
        assert history.status_code == 200
        assert len(history.json()) == 1

    def test_adjust_rejects_bad_phone(self, admin_client):
        response = admin_client.post(
            "/api/loyalty/adjust",
            json={"phone_number": "1234", "customer_name": "Amira", "amount": 5},
        )

        assert response.status_code == 422

    def test_adjust_rejects_non_positive_amount(self, admin_client):
        response = admin_client.post(
            "/api/loyalty/adjust",
            json={"phone_number": PHONE, "customer_name": "Amira", "amount": 0},
        )

        assert response.status_code == 422

    def test_deduct_more_than_balance_is_409(self, admin_client):
        admin_client.post(
            "/api/loyalty/adjust",
            json={"phone_number": PHONE, "customer_name": "Amira", "amount": 2},
        )

        response = admin_client.post(
            "/api/loyalty/deduct", json={"phone_number": PHONE, "amount": 3}
        )

        assert response.status_code == 409
        assert response.json()["detail"]["message"] == "Not enough points available"

    def test_list_accounts_with_search(self, admin_client):
        LoyaltyAccountFactory(phone_number="22000001")
        LoyaltyAccountFactory(phone_number="55000001")

        response = admin_client.get("/api/loyalty", params={"search": "55"})

        assert response.status_code == 200
        assert [a["phone_number"] for a in response.json()] == ["55000001"]

    def test_consistency_report(self, admin_client):
        admin_client.post(
            "/api/loyalty/adjust",
            json={"phone_number": PHONE, "customer_name": "Amira", "amount": 2},
        )

        response = admin_client.get(f"/api/loyalty/{PHONE}/consistency")

        assert response.status_code == 200
        assert response.json()["consistent"] is True
