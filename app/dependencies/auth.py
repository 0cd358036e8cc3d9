from __future__ import annotations

from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.db import get_db
from app.repositories.auth import UserRepository
from app.schemas.auth import CurrentUser
from app.utils.security import verify_token


# Reads: Authorization: Bearer <token>
security = HTTPBearer(auto_error=False)


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """UserRepository 의존성 주입"""
    return UserRepository(db)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    user_repo: UserRepository = Depends(get_user_repository),
) -> CurrentUser:
    """
    Resolve the bearer access token into the session passed to services.

    The token is only trusted for the user id; role and profile fields are
    read from the database so a demoted admin loses access immediately.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized()

    try:
        payload = verify_token(credentials.credentials, expected_type="access")
        sub = payload.get("sub")
        if not isinstance(sub, str):
            raise ValueError("missing sub")
        user_id = UUID(sub)
    except ValueError:
        raise _unauthorized()

    user = user_repo.get_by_id(user_id)
    if not user or not user.is_active:
        raise _unauthorized()

    return CurrentUser.model_validate(user)


def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    user_repo: UserRepository = Depends(get_user_repository),
) -> CurrentUser | None:
    """Same as get_current_user, but anonymous requests yield None."""
    if credentials is None:
        return None
    return get_current_user(credentials, user_repo)


def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
    return user
