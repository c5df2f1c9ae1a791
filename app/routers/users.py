# app/routers/users.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import require_auth
from app.core.config import get_settings
from app.core.providers import get_storage_provider
from app.core.storage_client import StorageProvider
from app.database import get_session
from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.storage import SignedUploadUrlRead
from app.schemas.user import SuccessResponse, UserRead, UserUpdate
from app.services.storage_service import StorageService
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])

repo = UserRepository()
service = UserService(repo)
storage_service = StorageService(get_settings().AVATARS_BUCKET_NAME)


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(require_auth)):
    """
    Return the authenticated user's profile.

    The profile row is auto-created on the first authenticated request,
    with a name derived from the email and role="user".
    """
    return service.get_me(current_user)


@router.patch("/me", response_model=UserRead)
def update_me(
    payload: UserUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Update the authenticated user's profile (partial update).

    Editable: name, locale.
    """
    return service.update_me(session, current_user, payload)


@router.delete("/me", response_model=SuccessResponse)
def delete_me(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Delete the authenticated user's account and chats.

    Purchases are kept, detached from the account.
    """
    service.delete_me(session, current_user)
    return {"success": True}


@router.post("/avatar-upload-url", response_model=SignedUploadUrlRead)
def create_avatar_upload_url(
    current_user: User = Depends(require_auth),
    storage: StorageProvider = Depends(get_storage_provider),
):
    """Signed URL for uploading the caller's avatar image."""
    return storage_service.create_avatar_upload_url(storage, current_user)
