from typing import List
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session, joinedload

from app.models.event import EventRegistration, RegistrationStatusType


class RegistrationRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, registration_id: UUID) -> EventRegistration | None:
        stmt = select(EventRegistration).where(EventRegistration.id == registration_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_event_and_user(self, event_id: UUID, user_id: UUID) -> EventRegistration | None:
        """이벤트+사용자로 등록 조회 (유니크 키)"""
        stmt = select(EventRegistration).where(
            EventRegistration.event_id == event_id,
            EventRegistration.user_id == user_id,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_event_id(
        self, event_id: UUID, status: RegistrationStatusType | None = None
    ) -> List[EventRegistration]:
        """이벤트 등록 목록 (사용자 정보 포함), status가 주어지면 필터"""
        stmt = (
            select(EventRegistration)
            .options(joinedload(EventRegistration.user))
            .where(EventRegistration.event_id == event_id)
        )
        if status is not None:
            stmt = stmt.where(EventRegistration.status == status)
        stmt = stmt.order_by(EventRegistration.registered_at.desc())
        return list(self.db.execute(stmt).unique().scalars().all())

    def get_event_ids_for_user(self, user_id: UUID, event_ids: List[UUID]) -> set[UUID]:
        """event_ids 중 사용자가 등록한 이벤트 ID 집합"""
        if not event_ids:
            return set()
        stmt = select(EventRegistration.event_id).where(
            EventRegistration.user_id == user_id,
            EventRegistration.event_id.in_(event_ids),
        )
        return set(self.db.execute(stmt).scalars().all())

    def create_registration(self, registration: EventRegistration) -> EventRegistration:
        """등록 생성 (유니크 위반 시 IntegrityError가 그대로 올라감)"""
        self.db.add(registration)
        self.db.flush()
        return registration

    def delete_by_event_and_user(self, event_id: UUID, user_id: UUID) -> int:
        """등록 삭제, 삭제된 행 수 반환"""
        stmt = delete(EventRegistration).where(
            EventRegistration.event_id == event_id,
            EventRegistration.user_id == user_id,
        )
        result = self.db.execute(stmt)
        return result.rowcount or 0

    def update_status(self, registration_id: UUID, status: RegistrationStatusType) -> int:
        stmt = (
            update(EventRegistration)
            .where(EventRegistration.id == registration_id)
            .values(status=status)
        )
        result = self.db.execute(stmt)
        return result.rowcount or 0

    # ------------------------------------------------------------------
    # 통계
    # ------------------------------------------------------------------

    def count_for_event(self, event_id: UUID) -> int:
        stmt = select(func.count(EventRegistration.id)).where(
            EventRegistration.event_id == event_id
        )
        return self.db.execute(stmt).scalar_one()

    def count_distinct_companies(self, event_id: UUID) -> int:
        """비어 있지 않은 user_company의 고유 개수"""
        stmt = select(func.count(func.distinct(EventRegistration.user_company))).where(
            EventRegistration.event_id == event_id,
            EventRegistration.user_company.is_not(None),
            EventRegistration.user_company != "",
        )
        return self.db.execute(stmt).scalar_one()

    def get_registered_at_for_event(self, event_id: UUID) -> list:
        stmt = select(EventRegistration.registered_at).where(
            EventRegistration.event_id == event_id
        )
        return list(self.db.execute(stmt).scalars().all())
