# app/core/plans.py
from dataclasses import dataclass, field
from typing import Literal


@dataclass(frozen=True)
class PlanPrice:
    product_id: str  # Stripe price id
    amount: int  # minor units (cents)
    currency: str
    type: Literal["recurring", "one-time"]
    interval: Literal["month", "year"] | None = None
    trial_period_days: int | None = None


@dataclass(frozen=True)
class Plan:
    id: str
    prices: list[PlanPrice] = field(default_factory=list)
    is_free: bool = False
    is_enterprise: bool = False
    recommended: bool = False


PLANS: dict[str, Plan] = {
    "free": Plan(id="free", is_free=True),
    "pro": Plan(
        id="pro",
        recommended=True,
        prices=[
            PlanPrice(
                product_id="price_pro_monthly",
                amount=2900,
                currency="USD",
                type="recurring",
                interval="month",
                trial_period_days=14,
            ),
            PlanPrice(
                product_id="price_pro_yearly",
                amount=29000,
                currency="USD",
                type="recurring",
                interval="year",
            ),
        ],
    ),
    "lifetime": Plan(
        id="lifetime",
        prices=[
            PlanPrice(
                product_id="price_lifetime",
                amount=99900,
                currency="USD",
                type="one-time",
            ),
        ],
    ),
    "enterprise": Plan(id="enterprise", is_enterprise=True),
}


def find_price(product_id: str) -> tuple[Plan, PlanPrice] | None:
    """Locate the plan and price a Stripe price id belongs to."""
    for plan in PLANS.values():
        for price in plan.prices:
            if price.product_id == product_id:
                return plan, price
    return None


def trial_period_days_for(product_id: str) -> int | None:
    match = find_price(product_id)
    if match is None:
        return None
    return match[1].trial_period_days
