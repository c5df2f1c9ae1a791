import uuid
from unittest.mock import MagicMock, patch

import pytest
import stripe

from app.core.payments_client import StripePaymentsProvider
from app.models.purchase import Purchase


def add_purchase(session, user_id=None, customer_id="cus_123", **fields) -> Purchase:
    purchase = Purchase(
        user_id=user_id,
        customer_id=customer_id,
        product_id=fields.pop("product_id", "price_pro_monthly"),
        type=fields.pop("type", "SUBSCRIPTION"),
        **fields,
    )
    session.add(purchase)
    session.commit()
    session.refresh(purchase)
    return purchase


class TestPlans:
    def test_plans_are_public(self, client):
        response = client.get("/api/v1/payments/plans")

        assert response.status_code == 200
        plans = {plan["id"]: plan for plan in response.json()["plans"]}
        assert set(plans) == {"free", "pro", "lifetime", "enterprise"}
        assert plans["free"]["is_free"] is True
        monthly = plans["pro"]["prices"][0]
        assert monthly["product_id"] == "price_pro_monthly"
        assert monthly["trial_period_days"] == 14


class TestCheckoutLink:
    def test_requires_login(self, client, login):
        login(None)

        response = client.post(
            "/api/v1/payments/create-checkout-link",
            json={"type": "subscription", "product_id": "price_pro_monthly"},
        )

        assert response.status_code == 401

    @patch("stripe.checkout.Session.create")
    def test_subscription_with_trial_for_new_customer(self, mock_create, client, user):
        mock_create.return_value = MagicMock(url="https://checkout.stripe.com/c/pay/cs_1")

        response = client.post(
            "/api/v1/payments/create-checkout-link",
            json={
                "type": "subscription",
                "product_id": "price_pro_monthly",
                "redirect_url": "https://app.example.com/done",
            },
        )

        assert response.status_code == 200
        assert response.json() == {"checkout_link": "https://checkout.stripe.com/c/pay/cs_1"}

        kwargs = mock_create.call_args.kwargs
        assert kwargs["api_key"] == "sk_test_dummy"
        assert kwargs["mode"] == "subscription"
        assert kwargs["success_url"] == "https://app.example.com/done"
        assert kwargs["line_items"] == [{"quantity": 1, "price": "price_pro_monthly"}]
        assert kwargs["customer_email"] == "alice@example.com"
        assert "customer" not in kwargs
        assert kwargs["metadata"] == {"user_id": str(user.id)}
        assert kwargs["subscription_data"] == {
            "metadata": {"user_id": str(user.id)},
            "trial_period_days": 14,
        }

    @patch("stripe.checkout.Session.create")
    def test_one_time_for_returning_customer(self, mock_create, client, make_user, login):
        buyer = make_user(email="bob@example.com", payments_customer_id="cus_bob")
        login(buyer)
        mock_create.return_value = MagicMock(url="https://checkout.stripe.com/c/pay/cs_2")

        response = client.post(
            "/api/v1/payments/create-checkout-link",
            json={"type": "one-time", "product_id": "price_lifetime"},
        )

        assert response.status_code == 200
        kwargs = mock_create.call_args.kwargs
        assert kwargs["mode"] == "payment"
        assert kwargs["customer"] == "cus_bob"
        assert "customer_email" not in kwargs
        assert kwargs["customer_creation"] == "always"
        assert kwargs["payment_intent_data"] == {"metadata": {"user_id": str(buyer.id)}}
        assert kwargs["success_url"].endswith("/app")

    @patch("stripe.checkout.Session.create")
    def test_price_without_trial(self, mock_create, client, user):
        mock_create.return_value = MagicMock(url="https://checkout.stripe.com/c/pay/cs_3")

        client.post(
            "/api/v1/payments/create-checkout-link",
            json={"type": "subscription", "product_id": "price_pro_yearly"},
        )

        assert "trial_period_days" not in mock_create.call_args.kwargs["subscription_data"]

    @patch("stripe.checkout.Session.create", side_effect=stripe.StripeError("boom"))
    def test_stripe_failure(self, mock_create, client, user):
        response = client.post(
            "/api/v1/payments/create-checkout-link",
            json={"type": "subscription", "product_id": "price_pro_monthly"},
        )

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to create checkout link"

    def test_unknown_type_rejected(self, client, user):
        response = client.post(
            "/api/v1/payments/create-checkout-link",
            json={"type": "lifetime", "product_id": "price_lifetime"},
        )

        assert response.status_code == 422

    def test_payments_not_configured(self, client, user):
        client.app.state.payments = None

        response = client.post(
            "/api/v1/payments/create-checkout-link",
            json={"type": "subscription", "product_id": "price_pro_monthly"},
        )

        assert response.status_code == 503


class TestCustomerPortalLink:
    @patch("stripe.billing_portal.Session.create")
    def test_owner_gets_portal_link(self, mock_create, client, session, user):
        purchase = add_purchase(session, user_id=user.id, customer_id="cus_alice")
        mock_create.return_value = MagicMock(url="https://billing.stripe.com/p/session/1")

        response = client.post(
            "/api/v1/payments/create-customer-portal-link",
            json={"purchase_id": str(purchase.id)},
        )

        assert response.status_code == 200
        assert response.json() == {"customer_portal_link": "https://billing.stripe.com/p/session/1"}
        kwargs = mock_create.call_args.kwargs
        assert kwargs["customer"] == "cus_alice"
        assert kwargs["return_url"].endswith("/app/settings/billing")

    def test_unknown_purchase(self, client, user):
        response = client.post(
            "/api/v1/payments/create-customer-portal-link",
            json={"purchase_id": str(uuid.uuid4())},
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Purchase not found"

    def test_someone_elses_purchase(self, client, session, make_user, user):
        other = make_user(email="bob@example.com")
        purchase = add_purchase(session, user_id=other.id)

        response = client.post(
            "/api/v1/payments/create-customer-portal-link",
            json={"purchase_id": str(purchase.id)},
        )

        assert response.status_code == 403

    @patch("stripe.billing_portal.Session.create", side_effect=stripe.StripeError("boom"))
    def test_stripe_failure(self, mock_create, client, session, user):
        purchase = add_purchase(session, user_id=user.id)

        response = client.post(
            "/api/v1/payments/create-customer-portal-link",
            json={"purchase_id": str(purchase.id)},
        )

        assert response.status_code == 500


class TestPurchases:
    def test_lists_only_own_purchases(self, client, session, make_user, user):
        other = make_user(email="bob@example.com")
        mine = add_purchase(session, user_id=user.id, subscription_id="sub_mine", status="active")
        add_purchase(session, user_id=other.id, subscription_id="sub_other")

        response = client.get("/api/v1/payments/purchases")

        assert response.status_code == 200
        purchases = response.json()["purchases"]
        assert [p["id"] for p in purchases] == [str(mine.id)]
        assert purchases[0]["status"] == "active"
        assert purchases[0]["type"] == "SUBSCRIPTION"

    def test_requires_login(self, client, login):
        login(None)

        assert client.get("/api/v1/payments/purchases").status_code == 401


class TestStripePaymentsProvider:
    @patch("stripe.checkout.Session.list_line_items")
    def test_checkout_product_id(self, mock_list, payments):
        mock_list.return_value = MagicMock(data=[MagicMock(price=MagicMock(id="price_lifetime"))])

        assert payments.get_checkout_product_id("cs_1") == "price_lifetime"
        mock_list.assert_called_once_with("cs_1", limit=1, api_key="sk_test_dummy")

    @patch("stripe.checkout.Session.list_line_items")
    def test_checkout_without_line_items(self, mock_list, payments):
        mock_list.return_value = MagicMock(data=[])

        assert payments.get_checkout_product_id("cs_1") is None

    def test_verify_without_secret(self):
        provider = StripePaymentsProvider("sk_test_dummy")

        with pytest.raises(RuntimeError, match="STRIPE_WEBHOOK_SECRET"):
            provider.verify_webhook(b"{}", "t=1,v1=abc")
