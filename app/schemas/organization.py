# app/schemas/organization.py
import uuid
from datetime import datetime

from sqlmodel import SQLModel


class OrganizationRead(SQLModel):
    id: uuid.UUID
    name: str
    slug: str
    logo: str | None = None
    created_at: datetime


class InvitationRead(SQLModel):
    id: uuid.UUID
    email: str
    role: str
    status: str
    expires_at: datetime | None = None
    organization: OrganizationRead
