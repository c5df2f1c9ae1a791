# app/schemas/payments.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict
from sqlmodel import SQLModel, Field

CheckoutType = Literal["one-time", "subscription"]
PurchaseType = Literal["ONE_TIME", "SUBSCRIPTION"]


class CheckoutLinkCreate(SQLModel):
    """
    Payload for creating a hosted checkout link.

    product_id is the Stripe price id (price_...), matched against the
    local plan catalogue to resolve trial days.
    """

    model_config = ConfigDict(extra="forbid")

    type: CheckoutType
    product_id: str = Field(min_length=1)
    redirect_url: str | None = None


class CheckoutLinkRead(SQLModel):
    checkout_link: str


class CustomerPortalLinkCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    purchase_id: uuid.UUID
    redirect_url: str | None = None


class CustomerPortalLinkRead(SQLModel):
    customer_portal_link: str


class PurchaseRead(SQLModel):
    id: uuid.UUID
    user_id: uuid.UUID | None = None
    customer_id: str
    subscription_id: str | None = None
    product_id: str
    type: PurchaseType
    status: str | None = None
    created_at: datetime
    updated_at: datetime


class PurchaseList(SQLModel):
    purchases: list[PurchaseRead]
