# app/services/payment_webhook_service.py
import logging
import uuid
from typing import Callable

import stripe
from fastapi import Response, status
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError
from sqlmodel import Session

from app.core.payments_client import StripePaymentsProvider
from app.models.purchase import Purchase
from app.models.user import User
from app.repositories.purchase_repo import PurchaseRepository
from app.repositories.user_repo import UserRepository
from app.schemas.payment_events import (
    CheckoutSessionCompleted,
    PaymentEvent,
    SubscriptionCreated,
    SubscriptionDeleted,
    SubscriptionUpdated,
    parse_payment_event,
)

logger = logging.getLogger(__name__)

PaymentEventHandler = Callable[[Session, StripePaymentsProvider, PaymentEvent], None]


class MissingProductIdError(Exception):
    """The event (or its checkout session) carries no price id."""


class PaymentWebhookService:
    """
    Reconciles local Purchase rows with Stripe webhook events.

    Responsibilities:
      - verify the Stripe signature before touching any state
      - dispatch on the event kind
      - create / update / delete purchases and back-fill the
        user's payments customer id

    Response contract:
      - 204: event applied (or an idempotent no-op)
      - 200: event kind we do not handle
      - 400: bad signature / payload, missing product id, processing error
    """

    def __init__(self, purchase_repo: PurchaseRepository, user_repo: UserRepository):
        self.purchase_repo = purchase_repo
        self.user_repo = user_repo
        self._handlers: dict[type, PaymentEventHandler] = {
            CheckoutSessionCompleted: self._on_checkout_completed,
            SubscriptionCreated: self._on_subscription_created,
            SubscriptionUpdated: self._on_subscription_updated,
            SubscriptionDeleted: self._on_subscription_deleted,
        }

    def handle_webhook(
        self,
        session: Session,
        provider: StripePaymentsProvider,
        payload: bytes,
        signature: str | None,
    ) -> Response:
        if not payload or not signature:
            return PlainTextResponse("Invalid request.", status_code=400)

        try:
            raw_event = provider.verify_webhook(payload, signature)
            event = parse_payment_event(raw_event)
        except RuntimeError:
            logger.exception("Stripe webhook secret is not configured")
            return PlainTextResponse("Webhook not configured.", status_code=500)
        except (stripe.SignatureVerificationError, ValueError, ValidationError) as e:
            logger.warning("Stripe webhook rejected: %s", e)
            return PlainTextResponse("Invalid request.", status_code=400)

        handler = self._handlers.get(type(event))
        if handler is None:
            logger.info("Ignoring unhandled Stripe event type %s", event.type)
            return PlainTextResponse("Unhandled event type.", status_code=200)

        try:
            handler(session, provider, event)
        except MissingProductIdError:
            session.rollback()
            logger.error("Stripe event %s (%s) has no product id", event.id, event.type)
            return PlainTextResponse("Missing product ID.", status_code=400)
        except Exception as e:
            session.rollback()
            logger.exception("Stripe webhook processing error for %s", event.type)
            return PlainTextResponse(f"Webhook error: {e}", status_code=400)

        return Response(status_code=status.HTTP_204_NO_CONTENT)

    # -------- Event handlers --------

    def _on_checkout_completed(
        self,
        session: Session,
        provider: StripePaymentsProvider,
        event: CheckoutSessionCompleted,
    ) -> None:
        """
        One-time purchase finished.

        Subscription checkouts are skipped; their purchase is created by
        customer.subscription.created instead.
        """
        checkout = event.data.object
        if checkout.mode == "subscription":
            return

        if self.purchase_repo.get_by_checkout_session_id(session, checkout.id):
            logger.info("Checkout %s already recorded", checkout.id)
            return

        product_id = provider.get_checkout_product_id(checkout.id)
        if not product_id:
            raise MissingProductIdError(checkout.id)

        customer_id = self._require_customer(checkout.customer, checkout.id)
        user = self._resolve_user(session, checkout.user_id)

        self.purchase_repo.create(
            session,
            Purchase(
                user_id=user.id if user else None,
                customer_id=customer_id,
                checkout_session_id=checkout.id,
                type="ONE_TIME",
                product_id=product_id,
                last_event_created=event.created,
            ),
        )
        self._link_customer(session, user, customer_id)
        logger.info("Recorded one-time purchase of %s for customer %s", product_id, customer_id)

    def _on_subscription_created(
        self,
        session: Session,
        provider: StripePaymentsProvider,
        event: SubscriptionCreated,
    ) -> None:
        subscription = event.data.object

        product_id = subscription.product_id
        if not product_id:
            raise MissingProductIdError(subscription.id)

        # Redelivery must not duplicate the row or roll back a newer status
        if self.purchase_repo.get_by_subscription_id(session, subscription.id):
            logger.info("Subscription %s already recorded", subscription.id)
            return

        customer_id = self._require_customer(subscription.customer, subscription.id)
        user = self._resolve_user(session, subscription.user_id)

        self.purchase_repo.create(
            session,
            Purchase(
                user_id=user.id if user else None,
                customer_id=customer_id,
                subscription_id=subscription.id,
                type="SUBSCRIPTION",
                product_id=product_id,
                status=subscription.status,
                last_event_created=event.created,
            ),
        )
        self._link_customer(session, user, customer_id)
        logger.info("Recorded subscription %s (%s)", subscription.id, subscription.status)

    def _on_subscription_updated(
        self,
        session: Session,
        provider: StripePaymentsProvider,
        event: SubscriptionUpdated,
    ) -> None:
        """
        Mirror status / price changes.

        Unknown subscriptions are a no-op. Events older than the last one
        applied to the row are dropped, so out-of-order delivery cannot
        regress the status.
        """
        subscription = event.data.object
        purchase = self.purchase_repo.get_by_subscription_id(session, subscription.id)
        if purchase is None:
            logger.info("No purchase for subscription %s; update ignored", subscription.id)
            return

        if (
            event.created is not None
            and purchase.last_event_created is not None
            and event.created < purchase.last_event_created
        ):
            logger.info("Stale update for subscription %s ignored", subscription.id)
            return

        purchase.status = subscription.status
        if subscription.product_id:
            purchase.product_id = subscription.product_id
        if event.created is not None:
            purchase.last_event_created = event.created

        self.purchase_repo.update(session, purchase)

    def _on_subscription_deleted(
        self,
        session: Session,
        provider: StripePaymentsProvider,
        event: SubscriptionDeleted,
    ) -> None:
        subscription_id = event.data.object.id
        if self.purchase_repo.delete_by_subscription_id(session, subscription_id):
            logger.info("Deleted purchase for subscription %s", subscription_id)

    # -------- Helpers --------

    def _require_customer(self, customer_id: str | None, source_id: str) -> str:
        if not customer_id:
            raise ValueError(f"No customer on {source_id}")
        return customer_id

    def _resolve_user(self, session: Session, raw_user_id: str | None) -> User | None:
        """
        Map metadata.user_id to an existing user.

        Unknown or malformed ids leave the purchase unattributed; the
        customer id still lets later events find it.
        """
        if not raw_user_id:
            return None
        try:
            user_id = uuid.UUID(raw_user_id)
        except ValueError:
            logger.warning("Ignoring malformed user_id %r in Stripe metadata", raw_user_id)
            return None

        user = self.user_repo.get_by_id(session, user_id)
        if user is None:
            logger.warning("User %s from Stripe metadata does not exist", user_id)
        return user

    def _link_customer(self, session: Session, user: User | None, customer_id: str) -> None:
        if user is None or user.payments_customer_id == customer_id:
            return
        user.payments_customer_id = customer_id
        self.user_repo.update(session, user)


