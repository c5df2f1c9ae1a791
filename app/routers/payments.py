# app/routers/payments.py
from fastapi import APIRouter, Depends, Header, Request
from sqlmodel import Session

from app.core.auth import require_auth
from app.core.payments_client import StripePaymentsProvider
from app.core.providers import get_payments_provider
from app.database import get_session
from app.models.user import User
from app.repositories.purchase_repo import PurchaseRepository
from app.repositories.user_repo import UserRepository
from app.schemas.payments import (
    CheckoutLinkCreate,
    CheckoutLinkRead,
    CustomerPortalLinkCreate,
    CustomerPortalLinkRead,
    PurchaseList,
)
from app.services.billing_service import BillingService
from app.services.payment_webhook_service import PaymentWebhookService

router = APIRouter(prefix="/payments", tags=["Payments"])
webhook_router = APIRouter(prefix="/webhooks", tags=["Webhooks"])

purchase_repo = PurchaseRepository()
user_repo = UserRepository()
service = BillingService(purchase_repo)
webhook_service = PaymentWebhookService(purchase_repo, user_repo)


async def raw_body(request: Request) -> bytes:
    """Exact request bytes; the signature is computed over them."""
    return await request.body()


@router.get("/plans")
def list_plans():
    """Public plan catalogue."""
    return {"plans": service.list_plans()}


@router.get("/purchases", response_model=PurchaseList)
def list_purchases(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """All purchases of the current user."""
    return service.list_purchases(session, current_user)


@router.post("/create-checkout-link", response_model=CheckoutLinkRead)
def create_checkout_link(
    payload: CheckoutLinkCreate,
    current_user: User = Depends(require_auth),
    provider: StripePaymentsProvider = Depends(get_payments_provider),
):
    """Checkout link for a one-time or subscription product."""
    return service.create_checkout_link(provider, current_user, payload)


@router.post("/create-customer-portal-link", response_model=CustomerPortalLinkRead)
def create_customer_portal_link(
    payload: CustomerPortalLinkCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
    provider: StripePaymentsProvider = Depends(get_payments_provider),
):
    """Billing portal link for one of the caller's purchases."""
    return service.create_customer_portal_link(session, provider, current_user, payload)


@webhook_router.post("/payments", include_in_schema=False)
def payments_webhook(
    payload: bytes = Depends(raw_body),
    stripe_signature: str | None = Header(default=None, alias="Stripe-Signature"),
    session: Session = Depends(get_session),
    provider: StripePaymentsProvider = Depends(get_payments_provider),
):
    """
    Stripe webhook endpoint.

    No user auth here; the signature check in the service gates every
    purchase mutation.
    """
    return webhook_service.handle_webhook(session, provider, payload, stripe_signature)
