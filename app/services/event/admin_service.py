import logging
from collections import Counter
from typing import List
from uuid import UUID

from app.models.event import Event
from app.schemas.auth import CurrentUser
from app.schemas.event import (
    BulkOperationResponse,
    EventResponse,
    EventStatisticsResponse,
    EventsOverviewStatsResponse,
    EventUpdateRequest,
)
from app.services.event.base import EventBaseService
from app.exceptions import ValidationError
from app.utils.csv_export import export_events_to_csv
from app.utils.security import utcnow
from app.utils.transaction import transaction

logger = logging.getLogger(__name__)

# 복제 시 새로 생성되어야 하는 컬럼
_DUPLICATE_EXCLUDED_COLUMNS = {"id", "created_at", "updated_at"}


class EventAdminService(EventBaseService):
    """관리자용 이벤트 도구 (복제, 통계, 일괄 처리, CSV)"""

    def duplicate_event(self, event_id: UUID, current_user: CurrentUser) -> Event:
        """
        이벤트 복제
        - id/created_at/updated_at 제외한 모든 필드 복사
        - 제목 앞에 "Copy of ", attendees_count는 0
        """
        self.verify_admin(current_user, "duplicate events")
        source = self.get_event_or_404(event_id)

        values = {
            column.key: getattr(source, column.key)
            for column in Event.__table__.columns
            if column.key not in _DUPLICATE_EXCLUDED_COLUMNS
        }
        values["title"] = f"Copy of {source.title}"
        values["attendees_count"] = 0
        if values.get("highlights") is not None:
            values["highlights"] = list(values["highlights"])

        copy = Event(**values)
        with transaction(self.db):
            self.repos.event.create_event(copy)

        logger.info(f"Event {event_id} duplicated as {copy.id}")
        return copy

    def get_event_statistics(self, event_id: UUID, current_user: CurrentUser) -> EventStatisticsResponse:
        """
        단일 이벤트 통계
        - 총 등록 수, 고유 회사 수, 날짜별(YYYY-MM-DD) 등록 수
        """
        self.verify_admin(current_user, "view event statistics")
        event = self.get_event_or_404(event_id)

        by_date = Counter(
            registered_at.date().isoformat()
            for registered_at in self.repos.registration.get_registered_at_for_event(event_id)
            if registered_at is not None
        )

        return EventStatisticsResponse(
            event=EventResponse.model_validate(event),
            total_registered=self.repos.registration.count_for_event(event_id),
            unique_companies=self.repos.registration.count_distinct_companies(event_id),
            registrations_by_date=dict(sorted(by_date.items())),
        )

    def get_events_overview_stats(self) -> EventsOverviewStatsResponse:
        """전체/예정/지난 이벤트 수 + 총 참석자 수"""
        now = utcnow()
        return EventsOverviewStatsResponse(
            total_events=self.repos.event.count_all(),
            upcoming_events=self.repos.event.count_starting_from(now),
            past_events=self.repos.event.count_started_before(now),
            total_attendees=self.repos.event.sum_attendees(),
        )

    def bulk_update_events(
        self, event_ids: List[UUID], updates: EventUpdateRequest, current_user: CurrentUser
    ) -> BulkOperationResponse:
        """
        여러 이벤트에 같은 변경을 한 트랜잭션으로 적용
        - 변경 후 종료 시간이 시작 시간보다 앞서는 이벤트가 하나라도 있으면 전체 거부
        """
        self.verify_admin(current_user, "bulk update events")
        changes = self._changes(updates)

        events = {e.id: e for e in self.repos.event.get_by_ids(event_ids)}
        not_found = [event_id for event_id in event_ids if event_id not in events]

        invalid = [str(e.id) for e in events.values() if self.ends_before_start(e, changes)]
        if invalid:
            raise ValidationError(
                message="Invalid date range",
                detail=f"end_datetime must not be before start_datetime for events: {', '.join(invalid)}"
            )

        with transaction(self.db):
            for event in events.values():
                self.repos.event.update_event(event, changes)

        return BulkOperationResponse(
            message=f"{len(events)} events updated",
            updated_count=len(events),
            not_found_ids=not_found,
        )

    def bulk_delete_events(self, event_ids: List[UUID], current_user: CurrentUser) -> BulkOperationResponse:
        self.verify_admin(current_user, "bulk delete events")

        events = {e.id: e for e in self.repos.event.get_by_ids(event_ids)}
        not_found = [event_id for event_id in event_ids if event_id not in events]

        with transaction(self.db):
            for event in events.values():
                self.repos.event.delete_event(event)

        logger.info(f"Bulk deleted {len(events)} events")
        return BulkOperationResponse(
            message=f"{len(events)} events deleted",
            deleted_count=len(events),
            not_found_ids=not_found,
        )

    def export_events_csv(self, current_user: CurrentUser) -> str:
        """전체 이벤트 CSV"""
        self.verify_admin(current_user, "export events")
        return export_events_to_csv(self.repos.event.get_all())
