# app/routers/organizations.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import require_auth
from app.database import get_session
from app.repositories.organization_repo import OrganizationRepository
from app.schemas.organization import InvitationRead, OrganizationRead
from app.services.organization_service import OrganizationService

router = APIRouter(
    prefix="/organizations",
    tags=["Organizations"],
    dependencies=[Depends(require_auth)],
)

repo = OrganizationRepository()
service = OrganizationService(repo)


@router.get("/invitations/{invitation_id}", response_model=InvitationRead)
def get_invitation(
    invitation_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """Invitation with the organization it points to."""
    return service.get_invitation(session, invitation_id)


@router.get("/{slug}", response_model=OrganizationRead)
def get_organization(
    slug: str,
    session: Session = Depends(get_session),
):
    return service.get_by_slug(session, slug)
