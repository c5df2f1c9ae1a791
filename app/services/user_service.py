# app/services/user_service.py
import logging
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user import UserBan, UserRoleUpdate, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    """
    Account operations: the caller's own profile, plus the admin
    moderation tools (role, ban, unban, delete).
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    # ----- Self profile -----

    def get_me(self, current_user: User) -> User:
        return current_user

    def update_me(
        self,
        session: Session,
        current_user: User,
        payload: UserUpdate,
    ) -> User:
        """Partial update; only name and locale are editable."""
        if payload.name is not None:
            current_user.name = payload.name
        if payload.locale is not None:
            current_user.locale = payload.locale

        return self.repo.update(session, current_user)

    def delete_me(self, session: Session, current_user: User) -> None:
        """Self-service account deletion."""
        logger.info("User %s deleted their account", current_user.id)
        self.repo.delete(session, current_user)

    # ----- Admin operations -----

    def list_users(
        self,
        session: Session,
        query: str | None,
        skip: int,
        limit: int,
    ) -> dict:
        """Search users by name/email (admin only). No match is not an error."""
        users, total = self.repo.search(session, query=query, skip=skip, limit=limit)
        return {"users": users, "total": total}

    def get_user(self, session: Session, user_id: uuid.UUID) -> User:
        """Load a user or raise 404."""
        user = self.repo.get_by_id(session, user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )
        return user

    def update_role(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: UserRoleUpdate,
    ) -> User:
        user = self.get_user(session, user_id)
        user.role = payload.role
        return self.repo.update(session, user)

    def ban_user(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: UserBan,
    ) -> User:
        user = self.get_user(session, user_id)
        user.banned = True
        user.ban_reason = payload.reason
        user.ban_expires = payload.expires_at
        logger.info("User %s banned: %s", user.id, payload.reason)
        return self.repo.update(session, user)

    def unban_user(self, session: Session, user_id: uuid.UUID) -> User:
        user = self.get_user(session, user_id)
        user.banned = False
        user.ban_reason = None
        user.ban_expires = None
        return self.repo.update(session, user)

    def delete_user(
        self,
        session: Session,
        current_admin: User,
        user_id: uuid.UUID,
    ) -> None:
        """
        Delete a user (admin only).

        Raises:
            HTTPException(400): when the admin targets their own account.
            HTTPException(404): if not found.
        """
        if user_id == current_admin.id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot delete your own account",
            )

        user = self.get_user(session, user_id)
        logger.info("Admin %s deleted user %s", current_admin.id, user.id)
        self.repo.delete(session, user)
