# app/models/user.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Persistent user profile.

    Identity:
      - id: MUST match Supabase auth.users.id (UUID from JWT "sub")

    Role:
      - "user" | "admin"
      - "guest" is represented by the absence of a row / missing token.

    Passwords and sessions live in Supabase Auth. This table mirrors
    identity, profile, moderation state and the payment-processor
    customer reference.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        primary_key=True,
        index=True,
        description="Matches Supabase auth.users.id",
    )

    email: str = Field(
        unique=True,
        index=True,
        description="Email from Supabase auth.users",
    )

    name: str = Field(
        max_length=50,
        description="Display name; first part of email by default",
    )

    # Application role (not Supabase RLS role)
    role: str = Field(
        default="user",
        index=True,
        description="Application role: user | admin",
    )

    locale: str = Field(
        default="en",
        max_length=10,
        description="Preferred UI / mail locale",
    )

    # Moderation
    banned: bool = Field(default=False)
    ban_reason: str | None = Field(default=None)
    ban_expires: datetime | None = Field(
        default=None,
        description="Ban lifts automatically after this instant; None = permanent",
    )

    # Set by the payment webhook once the processor knows the customer
    payments_customer_id: str | None = Field(
        default=None,
        index=True,
        description="Stripe customer id (cus_...)",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
