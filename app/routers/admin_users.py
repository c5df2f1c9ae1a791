# app/routers/admin_users.py
import uuid

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.core.auth import require_admin
from app.database import get_session
from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user import (
    SuccessResponse,
    UserBan,
    UserEnvelope,
    UserList,
    UserRead,
    UserRoleUpdate,
)
from app.services.user_service import UserService

# Every route requires role='admin'; checked before the handler runs.
router = APIRouter(
    prefix="/admin/users",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)

repo = UserRepository()
service = UserService(repo)


@router.get("", response_model=UserList)
def list_users(
    session: Session = Depends(get_session),
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    query: str | None = Query(None, max_length=200),
):
    """
    List users, newest first.

    query matches name or email, case-insensitive substring.
    """
    return service.list_users(session, query, offset, limit)


@router.get("/{user_id}", response_model=UserRead)
def get_user(
    user_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    return service.get_user(session, user_id)


@router.post("/{user_id}/role", response_model=UserEnvelope)
def set_role(
    user_id: uuid.UUID,
    payload: UserRoleUpdate,
    session: Session = Depends(get_session),
):
    """Set a user's role to admin or user."""
    return {"user": service.update_role(session, user_id, payload)}


@router.post("/{user_id}/ban", response_model=UserEnvelope)
def ban_user(
    user_id: uuid.UUID,
    payload: UserBan,
    session: Session = Depends(get_session),
):
    """Ban a user with a reason and optional expiration."""
    return {"user": service.ban_user(session, user_id, payload)}


@router.post("/{user_id}/unban", response_model=UserEnvelope)
def unban_user(
    user_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    return {"user": service.unban_user(session, user_id)}


@router.delete("/{user_id}", response_model=SuccessResponse)
def delete_user(
    user_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_admin: User = Depends(require_admin),
):
    """
    Permanently delete a user and their chats.

    Admins cannot delete their own account here.
    """
    service.delete_user(session, current_admin, user_id)
    return {"success": True}
