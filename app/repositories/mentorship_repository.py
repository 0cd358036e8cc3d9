from typing import Any, List
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session, joinedload

from app.models.mentorship import MentorProfile, MentorSession


class MentorProfileRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_approval(self, is_approved: bool) -> List[MentorProfile]:
        """승인 여부로 멘토 프로필 조회 (사용자 프로필 포함)"""
        stmt = (
            select(MentorProfile)
            .options(joinedload(MentorProfile.user))
            .where(MentorProfile.is_approved.is_(is_approved))
            .order_by(MentorProfile.created_at.desc())
        )
        return list(self.db.execute(stmt).unique().scalars().all())

    def get_by_id(self, profile_id: UUID) -> MentorProfile | None:
        stmt = (
            select(MentorProfile)
            .options(joinedload(MentorProfile.user))
            .where(MentorProfile.id == profile_id)
        )
        return self.db.execute(stmt).unique().scalar_one_or_none()

    def get_by_user_id(self, user_id: UUID) -> MentorProfile | None:
        stmt = select(MentorProfile).where(MentorProfile.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def create_profile(self, profile: MentorProfile) -> MentorProfile:
        self.db.add(profile)
        self.db.flush()
        self.db.refresh(profile)
        return profile

    def approve_if_pending(self, profile_id: UUID) -> bool:
        """미승인 프로필만 승인 (WHERE is_approved = false)"""
        stmt = (
            update(MentorProfile)
            .where(MentorProfile.id == profile_id, MentorProfile.is_approved.is_(False))
            .values(is_approved=True)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        return (result.rowcount or 0) == 1

    def count_approved(self) -> int:
        stmt = select(func.count(MentorProfile.id)).where(MentorProfile.is_approved.is_(True))
        return self.db.execute(stmt).scalar_one()


class MentorSessionRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_mentee(self, mentee_id: UUID) -> List[MentorSession]:
        stmt = (
            select(MentorSession)
            .where(MentorSession.mentee_id == mentee_id)
            .order_by(MentorSession.scheduled_at.asc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_by_id(self, session_id: UUID) -> MentorSession | None:
        stmt = select(MentorSession).where(MentorSession.id == session_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def create_session(self, session: MentorSession) -> MentorSession:
        self.db.add(session)
        self.db.flush()
        self.db.refresh(session)
        return session

    def update_session(self, session: MentorSession, changes: dict[str, Any]) -> MentorSession:
        for field, value in changes.items():
            setattr(session, field, value)
        self.db.flush()
        self.db.refresh(session)
        return session
