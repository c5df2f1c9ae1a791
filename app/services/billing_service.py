# app/services/billing_service.py
import logging
from dataclasses import asdict

import stripe
from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.config import get_base_url
from app.core.payments_client import StripePaymentsProvider
from app.core.plans import PLANS, trial_period_days_for
from app.models.user import User
from app.repositories.purchase_repo import PurchaseRepository
from app.schemas.payments import CheckoutLinkCreate, CustomerPortalLinkCreate

logger = logging.getLogger(__name__)


class BillingService:
    """
    Hosted checkout / billing-portal links and purchase listing.

    Nothing here writes to the database; purchases are only ever
    created by the Stripe webhook.
    """

    def __init__(self, purchase_repo: PurchaseRepository):
        self.purchase_repo = purchase_repo

    def create_checkout_link(
        self,
        provider: StripePaymentsProvider,
        current_user: User,
        payload: CheckoutLinkCreate,
    ) -> dict:
        """
        Ask Stripe for a Checkout URL.

        Returning customers are passed by customer id, new ones by email.
        Trial days come from the local plan catalogue.

        Raises:
            HTTPException(500): if Stripe fails or returns no URL.
        """
        trial_period_days = trial_period_days_for(payload.product_id)

        try:
            checkout_link = provider.create_checkout_link(
                type=payload.type,
                product_id=payload.product_id,
                redirect_url=payload.redirect_url or f"{get_base_url()}/app",
                user_id=str(current_user.id),
                email=current_user.email,
                customer_id=current_user.payments_customer_id,
                trial_period_days=trial_period_days,
            )
        except stripe.StripeError:
            logger.exception("Failed to create checkout link for %s", current_user.id)
            checkout_link = None

        if not checkout_link:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to create checkout link",
            )
        return {"checkout_link": checkout_link}

    def create_customer_portal_link(
        self,
        session: Session,
        provider: StripePaymentsProvider,
        current_user: User,
        payload: CustomerPortalLinkCreate,
    ) -> dict:
        """
        Billing portal for the customer behind one of the caller's purchases.

        Raises:
            HTTPException(404): purchase not found.
            HTTPException(403): purchase belongs to someone else.
            HTTPException(500): Stripe failure.
        """
        purchase = self.purchase_repo.get_by_id(session, payload.purchase_id)
        if not purchase:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Purchase not found",
            )
        if purchase.user_id != current_user.id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not allowed to manage this purchase",
            )

        try:
            portal_link = provider.create_customer_portal_link(
                customer_id=purchase.customer_id,
                redirect_url=payload.redirect_url or f"{get_base_url()}/app/settings/billing",
            )
        except stripe.StripeError:
            logger.exception("Failed to create customer portal link for %s", purchase.id)
            portal_link = None

        if not portal_link:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to create customer portal link",
            )
        return {"customer_portal_link": portal_link}

    def list_purchases(self, session: Session, current_user: User) -> dict:
        return {"purchases": self.purchase_repo.list_for_user(session, current_user.id)}

    def list_plans(self) -> list[dict]:
        return [asdict(plan) for plan in PLANS.values()]
