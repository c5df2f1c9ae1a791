# app/models/organization.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Organization(SQLModel, table=True):
    __tablename__ = "organizations"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(max_length=100)

    slug: str = Field(
        max_length=255,
        unique=True,
        index=True,
        description="URL-friendly identifier (unique)",
    )

    logo: str | None = Field(default=None)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class Invitation(SQLModel, table=True):
    """Pending invitation of an email address into an organization."""

    __tablename__ = "invitations"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    organization_id: uuid.UUID = Field(
        foreign_key="organizations.id",
        index=True,
    )

    email: str = Field(index=True)

    # member | admin | owner
    role: str = Field(default="member")

    # pending | accepted | rejected | canceled
    status: str = Field(default="pending")

    expires_at: datetime | None = Field(default=None)
