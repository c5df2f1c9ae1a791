# app/schemas/payment_events.py
"""
Typed view of the Stripe webhook events the reconciler understands.

Only the fields we read are declared; everything else in the payload is
ignored. Event kinds map one-to-one onto models via PAYMENT_EVENT_TYPES,
and any other kind parses into UnhandledEvent.
"""

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict


class _StripeModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class Price(_StripeModel):
    id: str | None = None


class SubscriptionItem(_StripeModel):
    price: Price | None = None


class SubscriptionItemList(_StripeModel):
    data: list[SubscriptionItem] = []


class CheckoutSession(_StripeModel):
    id: str
    mode: str | None = None
    customer: str | None = None
    metadata: dict[str, str | None] | None = None

    @property
    def user_id(self) -> str | None:
        return (self.metadata or {}).get("user_id") or None


class Subscription(_StripeModel):
    id: str
    customer: str | None = None
    status: str | None = None
    metadata: dict[str, str | None] | None = None
    items: SubscriptionItemList | None = None

    @property
    def user_id(self) -> str | None:
        return (self.metadata or {}).get("user_id") or None

    @property
    def product_id(self) -> str | None:
        """Price id of the first subscription item, if any."""
        if not self.items or not self.items.data:
            return None
        price = self.items.data[0].price
        return price.id if price else None


class CheckoutSessionData(_StripeModel):
    object: CheckoutSession


class SubscriptionData(_StripeModel):
    object: Subscription


class _Event(_StripeModel):
    id: str | None = None
    # Unix timestamp set by Stripe when the event was generated
    created: int | None = None


class CheckoutSessionCompleted(_Event):
    type: Literal["checkout.session.completed"]
    data: CheckoutSessionData


class SubscriptionCreated(_Event):
    type: Literal["customer.subscription.created"]
    data: SubscriptionData


class SubscriptionUpdated(_Event):
    type: Literal["customer.subscription.updated"]
    data: SubscriptionData


class SubscriptionDeleted(_Event):
    type: Literal["customer.subscription.deleted"]
    data: SubscriptionData


class UnhandledEvent(_Event):
    type: str


PaymentEvent = Union[
    CheckoutSessionCompleted,
    SubscriptionCreated,
    SubscriptionUpdated,
    SubscriptionDeleted,
    UnhandledEvent,
]

PAYMENT_EVENT_TYPES: dict[str, type[_Event]] = {
    "checkout.session.completed": CheckoutSessionCompleted,
    "customer.subscription.created": SubscriptionCreated,
    "customer.subscription.updated": SubscriptionUpdated,
    "customer.subscription.deleted": SubscriptionDeleted,
}


def parse_payment_event(payload: Any) -> PaymentEvent:
    """
    Validate a decoded webhook body into its event model.

    Raises:
        ValueError: if the body is not a JSON object.
        pydantic.ValidationError: if a known event kind is malformed.
    """
    if not isinstance(payload, dict):
        raise ValueError(f"Expected a JSON object, got {type(payload).__name__}")
    event_type = payload.get("type")
    model = UnhandledEvent
    if isinstance(event_type, str):
        model = PAYMENT_EVENT_TYPES.get(event_type, UnhandledEvent)
    return model.model_validate(payload)  # type: ignore[return-value]
