# app/core/payments_client.py
"""
Stripe integration.

One StripePaymentsProvider is built at startup (see app.main.lifespan)
and shared by every request through app.state. The secret key is passed
per call instead of being set on the global `stripe.api_key`.
"""

import json
import logging
from typing import Any, Literal

import stripe

logger = logging.getLogger(__name__)

# Seconds a signed webhook timestamp stays valid
WEBHOOK_TOLERANCE = 300


class StripePaymentsProvider:
    """Thin wrapper over the Stripe SDK calls the app needs."""

    def __init__(self, secret_key: str, webhook_secret: str | None = None):
        self.secret_key = secret_key
        self.webhook_secret = webhook_secret

    # ----- Hosted pages -----

    def create_checkout_link(
        self,
        *,
        type: Literal["one-time", "subscription"],
        product_id: str,
        redirect_url: str,
        user_id: str,
        email: str | None = None,
        customer_id: str | None = None,
        trial_period_days: int | None = None,
        seats: int | None = None,
    ) -> str | None:
        """
        Create a Checkout Session and return its hosted URL.

        metadata.user_id is copied onto the session and onto the payment
        intent / subscription, so every later webhook can be attributed
        back to the local user.
        """
        metadata = {"user_id": user_id}

        params: dict[str, Any] = {
            "mode": "subscription" if type == "subscription" else "payment",
            "success_url": redirect_url,
            "line_items": [{"quantity": seats or 1, "price": product_id}],
            "metadata": metadata,
        }

        if customer_id:
            params["customer"] = customer_id
        else:
            params["customer_email"] = email

        if type == "one-time":
            params["payment_intent_data"] = {"metadata": metadata}
            params["customer_creation"] = "always"
        else:
            subscription_data: dict[str, Any] = {"metadata": metadata}
            if trial_period_days:
                subscription_data["trial_period_days"] = trial_period_days
            params["subscription_data"] = subscription_data

        session = stripe.checkout.Session.create(api_key=self.secret_key, **params)
        return session.url

    def create_customer_portal_link(
        self,
        *,
        customer_id: str,
        redirect_url: str,
    ) -> str | None:
        """Create a Billing Portal session for an existing customer."""
        session = stripe.billing_portal.Session.create(
            api_key=self.secret_key,
            customer=customer_id,
            return_url=redirect_url,
        )
        return session.url

    def get_checkout_product_id(self, checkout_session_id: str) -> str | None:
        """Price id of the first line item of a completed checkout, if any."""
        line_items = stripe.checkout.Session.list_line_items(
            checkout_session_id,
            limit=1,
            api_key=self.secret_key,
        )
        if not line_items.data:
            return None
        price = line_items.data[0].price
        return price.id if price else None

    # ----- Webhooks -----

    def verify_webhook(self, payload: bytes, signature: str) -> dict[str, Any]:
        """
        Verify the Stripe-Signature header and decode the event body.

        Raises:
            RuntimeError: if no webhook secret is configured.
            stripe.SignatureVerificationError: if the signature does not match.
            ValueError: if the body is not valid UTF-8 JSON.
        """
        if not self.webhook_secret:
            raise RuntimeError("Missing STRIPE_WEBHOOK_SECRET")

        body = payload.decode("utf-8")
        stripe.WebhookSignature.verify_header(
            body,
            signature,
            self.webhook_secret,
            WEBHOOK_TOLERANCE,
        )
        return json.loads(body)
