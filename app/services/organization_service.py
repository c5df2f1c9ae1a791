# app/services/organization_service.py
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from app.models.organization import Organization
from app.repositories.organization_repo import OrganizationRepository


class OrganizationService:
    def __init__(self, repo: OrganizationRepository):
        self.repo = repo

    def get_by_slug(self, session: Session, slug: str) -> Organization:
        organization = self.repo.get_by_slug(session, slug)
        if not organization:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Organization not found",
            )
        return organization

    def get_invitation(self, session: Session, invitation_id: uuid.UUID) -> dict:
        row = self.repo.get_invitation_by_id(session, invitation_id)
        if row is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Invitation not found",
            )
        invitation, organization = row
        return {**invitation.model_dump(), "organization": organization}
