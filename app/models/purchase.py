# app/models/purchase.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Purchase(SQLModel, table=True):
    """
    One-time sale or subscription, mirrored from the payment processor.

    Rows are created, updated and deleted only by the payment webhook.

    user_id is nullable: the checkout metadata may not carry a user, and a
    deleted account leaves its purchases behind. The webhook back-fills
    User.payments_customer_id so later events can be attributed.
    """

    __tablename__ = "purchases"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID | None = Field(
        default=None,
        foreign_key="users.id",
        index=True,
    )

    customer_id: str = Field(
        index=True,
        description="Stripe customer id",
    )

    # At most one purchase per subscription
    subscription_id: str | None = Field(
        default=None,
        unique=True,
        index=True,
    )

    # Dedupes redelivered checkout.session.completed events
    checkout_session_id: str | None = Field(
        default=None,
        unique=True,
        index=True,
    )

    product_id: str = Field(
        description="Stripe price id the purchase was made for",
    )

    # ONE_TIME | SUBSCRIPTION
    type: str = Field(index=True)

    # Subscription lifecycle as reported by Stripe (active, trialing, ...)
    status: str | None = Field(default=None)

    # Unix timestamp of the newest processor event applied to this row
    last_event_created: int | None = Field(default=None)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
