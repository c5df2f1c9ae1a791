# app/core/auth.py
import uuid
from datetime import datetime, timezone
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import Session

from app.core.config import get_settings
from app.database import get_session
from app.models.user import User
from app.repositories.user_repo import UserRepository

# No Authorization header is not an error: the request continues as a guest.
bearer_scheme = HTTPBearer(auto_error=False)

user_repo = UserRepository()


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify a Supabase-issued access token and return its claims.

    Signature and exp are checked; aud is not, Supabase projects
    set it differently.

    Raises:
        HTTPException(401): bad signature, malformed or expired token.
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.SUPABASE_JWT_ALG],
            options={"verify_aud": False},
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def _default_name_from_email(email: str) -> str:
    """Local part of the email, clipped to the 50-char name column."""
    local_part = email.split("@", 1)[0]
    return local_part[:50]


def is_ban_active(user: User, now: datetime | None = None) -> bool:
    """A ban without expiry is permanent; an expired ban no longer applies."""
    if not user.banned:
        return False
    if user.ban_expires is None:
        return True
    now = now or datetime.now(timezone.utc)
    expires = user.ban_expires
    # SQLite hands back naive datetimes; everything is stored as UTC.
    if expires.tzinfo is None:
        expires = expires.replace(tzinfo=timezone.utc)
    return expires > now


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> User | None:
    """
    Map the bearer token to a local User, or None for guests.

    The token's sub is the Supabase auth id and doubles as User.id.
    A valid token for an unknown id creates the profile on the spot
    (role "user"; promotion to admin is a manual step).

    Raises:
        HTTPException(401): invalid token, or sub/email claims missing
        or malformed.
    """
    if credentials is None:
        return None

    claims = decode_access_token(credentials.credentials)
    sub = claims.get("sub")
    email = claims.get("email")

    if not sub or not email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing sub/email",
        )

    try:
        user_id = uuid.UUID(sub)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid sub in token",
        )

    user = user_repo.get_by_id(session, user_id)
    if user is None:
        user = user_repo.create(
            session,
            User(
                id=user_id,
                email=email,
                name=_default_name_from_email(email),
                role="user",
            ),
        )
    return user


def require_auth(user: User | None = Depends(get_current_user)) -> User:
    """
    Route guard for signed-in users.

    401 for guests, 403 while a ban is in force.
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    if is_ban_active(user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is banned",
        )
    return user


def require_admin(user: User = Depends(require_auth)) -> User:
    """Route guard for role="admin"; anyone else gets 403."""
    if user.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user
