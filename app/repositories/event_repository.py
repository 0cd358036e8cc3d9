from datetime import datetime
from typing import Any, List
from uuid import UUID

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session

from app.models.event import Event, EventRegistration


class EventRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, event_id: UUID) -> Event | None:
        """이벤트 ID로 조회"""
        stmt = select(Event).where(Event.id == event_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_ids(self, event_ids: List[UUID]) -> List[Event]:
        stmt = select(Event).where(Event.id.in_(event_ids))
        return list(self.db.execute(stmt).scalars().all())

    def get_all(self) -> List[Event]:
        """전체 이벤트 (시작 시간 오름차순)"""
        stmt = select(Event).order_by(Event.start_datetime.asc())
        return list(self.db.execute(stmt).scalars().all())

    def get_upcoming(self, now: datetime) -> List[Event]:
        stmt = (
            select(Event)
            .where(Event.start_datetime >= now)
            .order_by(Event.start_datetime.asc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_past(self, now: datetime) -> List[Event]:
        stmt = (
            select(Event)
            .where(Event.start_datetime < now)
            .order_by(Event.start_datetime.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_in_range(self, start: datetime, end: datetime) -> List[Event]:
        """start <= start_datetime <= end 범위의 이벤트 (캘린더용)"""
        stmt = (
            select(Event)
            .where(Event.start_datetime >= start, Event.start_datetime <= end)
            .order_by(Event.start_datetime.asc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def search(self, search: str | None, event_type: str | None) -> List[Event]:
        """
        제목/설명 부분 일치 (대소문자 무시) + 카테고리 필터
        - event_type이 None이면 카테고리 조건 없음
        """
        stmt = select(Event)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(Event.title.ilike(pattern), Event.description.ilike(pattern))
            )
        if event_type:
            stmt = stmt.where(Event.event_type == event_type)
        stmt = stmt.order_by(Event.start_datetime.asc())
        return list(self.db.execute(stmt).scalars().all())

    def get_most_popular(self, limit: int) -> List[Event]:
        stmt = (
            select(Event)
            .order_by(Event.attendees_count.desc(), Event.start_datetime.asc())
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_recent(self, limit: int) -> List[Event]:
        """최근 생성된 이벤트 (활동 피드용)"""
        stmt = select(Event).order_by(Event.created_at.desc()).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def create_event(self, event: Event) -> Event:
        """이벤트 생성"""
        self.db.add(event)
        self.db.flush()  # commit은 Service에서
        self.db.refresh(event)
        return event

    def update_event(self, event: Event, changes: dict[str, Any]) -> Event:
        """변경 필드 적용"""
        for field, value in changes.items():
            setattr(event, field, value)
        self.db.flush()
        self.db.refresh(event)
        return event

    def delete_event(self, event: Event) -> None:
        """이벤트와 등록 정보 삭제"""
        self.db.execute(
            delete(EventRegistration).where(EventRegistration.event_id == event.id)
        )
        self.db.delete(event)
        self.db.flush()

    # ------------------------------------------------------------------
    # 집계
    # ------------------------------------------------------------------

    def count_all(self) -> int:
        return self.db.execute(select(func.count(Event.id))).scalar_one()

    def count_starting_from(self, now: datetime) -> int:
        stmt = select(func.count(Event.id)).where(Event.start_datetime >= now)
        return self.db.execute(stmt).scalar_one()

    def count_started_before(self, now: datetime) -> int:
        stmt = select(func.count(Event.id)).where(Event.start_datetime < now)
        return self.db.execute(stmt).scalar_one()

    def count_ended_before(self, now: datetime) -> int:
        stmt = select(func.count(Event.id)).where(Event.end_datetime < now)
        return self.db.execute(stmt).scalar_one()

    def sum_attendees(self) -> int:
        stmt = select(func.coalesce(func.sum(Event.attendees_count), 0))
        return int(self.db.execute(stmt).scalar_one())
