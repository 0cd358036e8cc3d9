from typing import Any, List
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session, joinedload

from app.models.membership import Member, MembershipApplication, ApplicationStatusType


class MemberRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[Member]:
        """회원 목록 (사용자 프로필 포함)"""
        stmt = (
            select(Member)
            .options(joinedload(Member.user))
            .order_by(Member.created_at.desc())
        )
        return list(self.db.execute(stmt).unique().scalars().all())

    def get_by_industry(self, industry: str) -> List[Member]:
        stmt = (
            select(Member)
            .options(joinedload(Member.user))
            .where(Member.industry == industry)
            .order_by(Member.created_at.desc())
        )
        return list(self.db.execute(stmt).unique().scalars().all())

    def get_by_id(self, member_id: UUID) -> Member | None:
        stmt = select(Member).where(Member.id == member_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_user_id(self, user_id: UUID) -> Member | None:
        stmt = (
            select(Member)
            .options(joinedload(Member.user))
            .where(Member.user_id == user_id)
        )
        return self.db.execute(stmt).unique().scalar_one_or_none()

    def create_member(self, member: Member) -> Member:
        """회원 생성 (user_id 유니크)"""
        self.db.add(member)
        self.db.flush()
        self.db.refresh(member)
        return member

    def update_member(self, member: Member, changes: dict[str, Any]) -> Member:
        for field, value in changes.items():
            setattr(member, field, value)
        self.db.flush()
        self.db.refresh(member)
        return member

    def delete_member(self, member: Member) -> None:
        self.db.delete(member)
        self.db.flush()


class MembershipApplicationRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all(self, status: ApplicationStatusType | None = None) -> List[MembershipApplication]:
        """가입 신청 목록 (신청자 정보 포함, 최신순)"""
        stmt = select(MembershipApplication).options(joinedload(MembershipApplication.user))
        if status is not None:
            stmt = stmt.where(MembershipApplication.status == status)
        stmt = stmt.order_by(MembershipApplication.created_at.desc())
        return list(self.db.execute(stmt).unique().scalars().all())

    def get_by_id(self, application_id: UUID) -> MembershipApplication | None:
        stmt = select(MembershipApplication).where(MembershipApplication.id == application_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_latest_by_user_id(self, user_id: UUID) -> MembershipApplication | None:
        stmt = (
            select(MembershipApplication)
            .where(MembershipApplication.user_id == user_id)
            .order_by(MembershipApplication.created_at.desc())
            .limit(1)
        )
        return self.db.execute(stmt).scalars().first()

    def count_by_user_id(self, user_id: UUID) -> int:
        stmt = select(func.count(MembershipApplication.id)).where(
            MembershipApplication.user_id == user_id
        )
        return self.db.execute(stmt).scalar_one()

    def create_application(self, application: MembershipApplication) -> MembershipApplication:
        self.db.add(application)
        self.db.flush()
        self.db.refresh(application)
        return application

    def set_status_if_pending(
        self, application_id: UUID, status: ApplicationStatusType
    ) -> bool:
        """
        PENDING 상태인 신청서만 조건부로 상태 변경
        - WHERE id = :id AND status = 'pending'
        - 이미 처리된 경우 False (중복 승인/거절 방지)
        """
        stmt = (
            update(MembershipApplication)
            .where(
                MembershipApplication.id == application_id,
                MembershipApplication.status == ApplicationStatusType.PENDING,
            )
            .values(status=status)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        self.db.flush()
        return (result.rowcount or 0) == 1

