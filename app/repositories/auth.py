# app/repositories/auth.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import User, RefreshToken, UserRoleType


# ---------------------------------------------------------------------
# Repository exceptions (DB-layer concerns, not HTTP concerns)
# ---------------------------------------------------------------------

class RepositoryError(Exception):
    """Base class for repository-layer errors."""


@dataclass(slots=True)
class UniqueViolation(RepositoryError):
    """
    Raised when an insert violates a unique constraint.
    field is a best-effort hint for the service layer.
    """
    field: str
    message: str = "Unique constraint violated"


def _raise_unique_violation(err: IntegrityError, *, default_field: str) -> None:
    msg = str(err.orig).lower() if getattr(err, "orig", None) else str(err).lower()

    if "users" in msg and "email" in msg:
        raise UniqueViolation(field="email") from err
    if "uq_refresh_user_token_hash" in msg or "token_hash" in msg:
        raise UniqueViolation(field="token_hash") from err

    raise UniqueViolation(field=default_field) from err


# 프로필에서 사용자가 직접 수정 가능한 필드
PROFILE_FIELDS = (
    "first_name", "last_name", "photo_url", "bio", "company",
    "profession", "location", "industry",
)


# ---------------------------------------------------------------------
# UserRepository
# ---------------------------------------------------------------------

class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: UUID) -> Optional[User]:
        stmt = select(User).where(User.id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email)
        return self.db.execute(stmt).scalar_one_or_none()

    def list_all(self) -> List[User]:
        stmt = select(User).order_by(User.created_at.desc())
        return list(self.db.execute(stmt).scalars().all())

    def list_excluding(self, excluded_ids: set[UUID], limit: int) -> List[User]:
        """excluded_ids에 없는 활성 사용자 (연결 추천용)"""
        stmt = select(User).where(User.is_active.is_(True))
        if excluded_ids:
            stmt = stmt.where(User.id.not_in(excluded_ids))
        stmt = stmt.order_by(User.created_at.desc()).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def create(
        self,
        *,
        email: str,
        password_hash: str | None,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> User:
        """Create a user row. Caller is responsible for transaction scope."""
        user = User(
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
        )
        self.db.add(user)
        try:
            self.db.flush()
        except IntegrityError as e:
            _raise_unique_violation(e, default_field="user")
        return user

    def update_profile(self, user: User, changes: dict[str, Any]) -> User:
        for field, value in changes.items():
            if field in PROFILE_FIELDS:
                setattr(user, field, value)
        self.db.flush()
        return user

    def set_password_hash(self, *, user_id: UUID, password_hash: str) -> int:
        stmt = update(User).where(User.id == user_id).values(password_hash=password_hash)
        result = self.db.execute(stmt)
        return result.rowcount or 0

    # 관리자 대시보드 집계

    def count_all(self) -> int:
        return self.db.execute(select(func.count(User.id))).scalar_one()

    def count_created_since(self, since: datetime) -> int:
        stmt = select(func.count(User.id)).where(User.created_at >= since)
        return self.db.execute(stmt).scalar_one()

    def count_by_role(self, role: UserRoleType) -> int:
        stmt = select(func.count(User.id)).where(User.role == role)
        return self.db.execute(stmt).scalar_one()


# ---------------------------------------------------------------------
# RefreshTokenRepository
# ---------------------------------------------------------------------

class RefreshTokenRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, *, user_id: UUID, token_hash: str, expires_at: datetime) -> RefreshToken:
        rt = RefreshToken(
            user_id=user_id,
            token_hash=token_hash,
            expires_at=expires_at,
            revoked_at=None,
        )
        self.db.add(rt)
        try:
            self.db.flush()
        except IntegrityError as e:
            _raise_unique_violation(e, default_field="refresh_token")
        return rt

    def get_active_by_hash(self, *, token_hash: str, now: datetime) -> Optional[RefreshToken]:
        """Active = (revoked_at IS NULL) AND (expires_at > now)"""
        stmt = select(RefreshToken).where(
            RefreshToken.token_hash == token_hash,
            RefreshToken.revoked_at.is_(None),
            RefreshToken.expires_at > now,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def revoke_by_hash(self, *, token_hash: str, revoked_at: datetime) -> int:
        stmt = (
            update(RefreshToken)
            .where(
                RefreshToken.token_hash == token_hash,
                RefreshToken.revoked_at.is_(None),
            )
            .values(revoked_at=revoked_at)
        )
        result = self.db.execute(stmt)
        return result.rowcount or 0

    def revoke_all_for_user(self, *, user_id: UUID, revoked_at: datetime) -> int:
        stmt = (
            update(RefreshToken)
            .where(
                RefreshToken.user_id == user_id,
                RefreshToken.revoked_at.is_(None),
            )
            .values(revoked_at=revoked_at)
        )
        result = self.db.execute(stmt)
        return result.rowcount or 0
