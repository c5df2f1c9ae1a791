# app/repositories/organization_repo.py
import uuid

from sqlmodel import Session, select

from app.models.organization import Invitation, Organization


class OrganizationRepository:
    """Read-only queries for organizations and their invitations."""

    def get_by_slug(self, session: Session, slug: str) -> Organization | None:
        stmt = select(Organization).where(Organization.slug == slug)
        return session.exec(stmt).first()

    def get_invitation_by_id(
        self,
        session: Session,
        invitation_id: uuid.UUID,
    ) -> tuple[Invitation, Organization] | None:
        """Return the invitation together with its organization."""
        stmt = (
            select(Invitation, Organization)
            .join(Organization, Organization.id == Invitation.organization_id)
            .where(Invitation.id == invitation_id)
        )
        row = session.exec(stmt).first()
        if row is None:
            return None
        invitation, organization = row
        return invitation, organization
