"""
Dependencies module - 라우터에서 쓰는 의존성 재export
"""
from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app.repositories.auth import RefreshTokenRepository, UserRepository
from app.services.auth import AuthService

from app.dependencies.auth import get_current_user, get_optional_user, get_user_repository, require_admin
from app.dependencies.services import (
    get_admin_service,
    get_chat_service,
    get_connection_service,
    get_event_admin_service,
    get_event_service,
    get_membership_service,
    get_mentorship_service,
    get_notification_service,
    get_recording_service,
    get_registration_service,
    get_resource_service,
    get_startup_service,
    get_storage_service,
    get_success_story_service,
)


def get_refresh_token_repository(db: Session = Depends(get_db)) -> RefreshTokenRepository:
    return RefreshTokenRepository(db)


def get_auth_service(
    db: Session = Depends(get_db),
    user_repo: UserRepository = Depends(get_user_repository),
    token_repo: RefreshTokenRepository = Depends(get_refresh_token_repository),
) -> AuthService:
    return AuthService(db=db, user_repo=user_repo, token_repo=token_repo)


__all__ = [
    "get_current_user",
    "get_optional_user",
    "require_admin",
    "get_user_repository",
    "get_refresh_token_repository",
    "get_auth_service",
    "get_storage_service",
    "get_event_service",
    "get_registration_service",
    "get_event_admin_service",
    "get_chat_service",
    "get_membership_service",
    "get_notification_service",
    "get_connection_service",
    "get_startup_service",
    "get_success_story_service",
    "get_mentorship_service",
    "get_resource_service",
    "get_recording_service",
    "get_admin_service",
]
