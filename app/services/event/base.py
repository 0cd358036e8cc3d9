from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.event import Event
from app.dependencies.aggregate_repositories import EventAggregateRepositories
from app.exceptions import ValidationError
from app.services.base import BaseService


class EventBaseService(BaseService):
    """Event 관련 공통 서비스 로직"""

    def __init__(self, db: Session, repos: EventAggregateRepositories):
        super().__init__(db)
        self.repos = repos

    def get_event_or_404(self, event_id: UUID) -> Event:
        """이벤트 조회, 없으면 NotFoundError"""
        return self._require(self.repos.event.get_by_id(event_id), "Event", event_id)

    @staticmethod
    def ends_before_start(event: Event, changes: dict[str, Any]) -> bool:
        """변경 사항을 반영했을 때 종료 시간이 시작 시간보다 앞서는지"""
        if "start_datetime" not in changes and "end_datetime" not in changes:
            return False
        start = changes.get("start_datetime", event.start_datetime)
        end = changes.get("end_datetime", event.end_datetime)
        return naive_utc(end) < naive_utc(start)

    def validate_date_range(self, event: Event, changes: dict[str, Any]) -> None:
        if self.ends_before_start(event, changes):
            raise ValidationError(
                message="Invalid date range",
                detail="end_datetime must not be before start_datetime"
            )


def naive_utc(value: datetime) -> datetime:
    # SQLite에서 읽은 값은 naive, 요청 값은 aware일 수 있어 비교 전 통일
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
