# app/services/auth.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.models import User
from app.repositories.auth import (
    RefreshTokenRepository,
    UserRepository,
    UniqueViolation,
)
from app.schemas.auth import CurrentUser
from app.utils.security import (
    create_access_token,
    create_refresh_token,
    hash_password,
    hash_refresh_token,
    utcnow,
    verify_password,
    verify_token,
)
from app.utils.transaction import transaction

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Service-level errors (router maps these to HTTP responses)
# ---------------------------------------------------------------------

class AuthServiceError(Exception):
    """Base class for auth service errors."""


class EmailAlreadyExists(AuthServiceError):
    pass


class InvalidCredentials(AuthServiceError):
    pass


class InactiveUser(AuthServiceError):
    pass


class InvalidRefreshToken(AuthServiceError):
    pass


class UserNotFound(AuthServiceError):
    pass


@dataclass(slots=True)
class AuthResult:
    access_token: str
    refresh_token: str
    user: CurrentUser


def _exp_to_datetime_utc(exp: int) -> datetime:
    """JWT exp (epoch seconds) -> timezone-aware UTC datetime for refresh_tokens.expires_at."""
    return datetime.fromtimestamp(exp, tz=timezone.utc)


class AuthService:
    def __init__(
        self,
        db: Session,
        user_repo: UserRepository,
        token_repo: RefreshTokenRepository,
    ):
        self.db = db
        self.user_repo = user_repo
        self.token_repo = token_repo

    # -------------------------
    # Core helpers
    # -------------------------

    def _issue_tokens_for_user(self, user: User) -> tuple[str, str]:
        """
        Create access + refresh tokens and persist the refresh token hash.
        Must run inside the caller's transaction.
        """
        access = create_access_token(
            subject=str(user.id), email=user.email, role=user.role.value
        )
        refresh = create_refresh_token(subject=str(user.id))

        exp = verify_token(refresh, expected_type="refresh").get("exp")
        if not isinstance(exp, int):
            raise RuntimeError("Refresh token missing 'exp' claim")

        self.token_repo.create(
            user_id=user.id,
            token_hash=hash_refresh_token(refresh),
            expires_at=_exp_to_datetime_utc(exp),
        )
        return access, refresh

    # -------------------------
    # Public service methods
    # -------------------------

    def signup(
        self,
        *,
        email: str,
        password: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> AuthResult:
        """
        - Unique user per email (DB constraint is the final guard)
        - Create user (+ profile fields) and first refresh token in one transaction
        """
        pw_hash = hash_password(password)

        with transaction(self.db):
            if self.user_repo.get_by_email(email):
                raise EmailAlreadyExists()

            try:
                user = self.user_repo.create(
                    email=email,
                    password_hash=pw_hash,
                    first_name=first_name,
                    last_name=last_name,
                )
            except UniqueViolation as e:
                # 동시 가입 경쟁
                if e.field == "email":
                    raise EmailAlreadyExists() from e
                raise

            access, refresh = self._issue_tokens_for_user(user)
            session_user = CurrentUser.model_validate(user)

        logger.info(f"New user signed up: {user.id}")
        return AuthResult(access_token=access, refresh_token=refresh, user=session_user)

    def login(self, *, email: str, password: str) -> AuthResult:
        with transaction(self.db):
            user = self.user_repo.get_by_email(email)
            if not user or not verify_password(password, user.password_hash):
                raise InvalidCredentials()

            if not user.is_active:
                raise InactiveUser()

            access, refresh = self._issue_tokens_for_user(user)
            session_user = CurrentUser.model_validate(user)

        return AuthResult(access_token=access, refresh_token=refresh, user=session_user)

    def refresh(self, *, refresh_token: str) -> AuthResult:
        """
        Refresh token rotation:
        - Verify JWT (signature/exp/type)
        - Confirm the hash exists in DB and is still active
        - Revoke old token, issue a new pair
        """
        try:
            payload = verify_token(refresh_token, expected_type="refresh")
            user_id = UUID(payload["sub"])
        except ValueError as e:
            raise InvalidRefreshToken() from e

        token_hash = hash_refresh_token(refresh_token)
        now = utcnow()

        with transaction(self.db):
            existing = self.token_repo.get_active_by_hash(token_hash=token_hash, now=now)
            if not existing:
                raise InvalidRefreshToken()

            self.token_repo.revoke_by_hash(token_hash=token_hash, revoked_at=now)

            user = self.user_repo.get_by_id(user_id)
            if not user or not user.is_active:
                raise InvalidRefreshToken()

            access, refresh = self._issue_tokens_for_user(user)
            session_user = CurrentUser.model_validate(user)

        return AuthResult(access_token=access, refresh_token=refresh, user=session_user)

    def logout(self, *, refresh_token: str) -> None:
        """Revoke the refresh token if present. Never reveals whether it existed."""
        token_hash = hash_refresh_token(refresh_token)
        with transaction(self.db):
            self.token_repo.revoke_by_hash(token_hash=token_hash, revoked_at=utcnow())

    def update_profile(self, *, user_id: UUID, changes: dict[str, Any]) -> User:
        with transaction(self.db):
            user = self.user_repo.get_by_id(user_id)
            if not user:
                raise UserNotFound()
            self.user_repo.update_profile(user, changes)
        self.db.refresh(user)
        return user

    def change_password(self, *, user_id: UUID, current_password: str, new_password: str) -> None:
        """Change password and revoke every outstanding refresh token."""
        with transaction(self.db):
            user = self.user_repo.get_by_id(user_id)
            if not user:
                raise UserNotFound()
            if not verify_password(current_password, user.password_hash):
                raise InvalidCredentials()

            self.user_repo.set_password_hash(
                user_id=user.id, password_hash=hash_password(new_password)
            )
            self.token_repo.revoke_all_for_user(user_id=user.id, revoked_at=utcnow())
