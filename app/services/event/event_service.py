import logging
import uuid
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.event import Event
from app.dependencies.aggregate_repositories import EventAggregateRepositories
from app.schemas.auth import CurrentUser
from app.schemas.event import (
    CalendarEventResponse,
    EventCategoriesResponse,
    EventCreateRequest,
    EventTypeInfo,
    EventUpdateRequest,
)
from app.services.event.base import EventBaseService, naive_utc
from app.services.storage_service import StorageService
from app.exceptions import ValidationError
from app.utils.event_categories import EVENT_TYPES, LOCATION_TYPES
from app.utils.security import utcnow
from app.utils.transaction import transaction
from app.utils.validators import is_valid_uuid

logger = logging.getLogger(__name__)

EVENT_IMAGE_BUCKET = "events"


class EventService(EventBaseService):
    """이벤트 조회/생성/수정/삭제 + 이미지"""

    def __init__(
        self,
        db: Session,
        repos: EventAggregateRepositories,
        storage_service: StorageService,
    ):
        super().__init__(db, repos)
        self.storage_service = storage_service

    # ------------------------------------------------------------------
    # 조회
    # ------------------------------------------------------------------

    def get_events(self) -> List[Event]:
        """전체 이벤트 (시작 시간순)"""
        return self.repos.event.get_all()

    def get_event(self, event_id: UUID) -> Event:
        return self.get_event_or_404(event_id)

    def get_upcoming_events(self) -> List[Event]:
        return self.repos.event.get_upcoming(utcnow())

    def get_past_events(self) -> List[Event]:
        """지난 이벤트 (최근 것부터)"""
        return self.repos.event.get_past(utcnow())

    def get_filtered_events(self, search: str = "", event_type: str = "all") -> List[Event]:
        """
        검색어/카테고리 필터
        - search: 제목/설명 대소문자 무시 부분 일치
        - event_type: "all" 또는 빈 값이면 필터 없음
        """
        type_filter = None if not event_type or event_type == "all" else event_type
        return self.repos.event.search(search.strip() or None, type_filter)

    def get_most_popular_events(self, limit: int = 5) -> List[Event]:
        return self.repos.event.get_most_popular(limit)

    def get_user_calendar_events(
        self, user_id: Optional[UUID], start: datetime, end: datetime
    ) -> List[CalendarEventResponse]:
        """
        캘린더 범위 이벤트
        - user_id가 있으면 각 이벤트에 is_registered 표시
        """
        if naive_utc(end) < naive_utc(start):
            raise ValidationError(
                message="Invalid date range",
                detail="end must not be before start"
            )

        events = self.repos.event.get_in_range(start, end)
        registered_ids: set[UUID] = set()
        if user_id is not None:
            registered_ids = self.repos.registration.get_event_ids_for_user(
                user_id, [e.id for e in events]
            )

        result = []
        for event in events:
            item = CalendarEventResponse.model_validate(event)
            item.is_registered = event.id in registered_ids
            result.append(item)
        return result

    def get_categories(self) -> EventCategoriesResponse:
        return EventCategoriesResponse(
            event_types=[EventTypeInfo(**t) for t in EVENT_TYPES],
            location_types=[EventTypeInfo(**t) for t in LOCATION_TYPES],
        )

    # ------------------------------------------------------------------
    # 생성/수정/삭제 (관리자)
    # ------------------------------------------------------------------

    def create_event(self, request: EventCreateRequest, current_user: CurrentUser) -> Event:
        """이벤트 생성, 등록 수는 0에서 시작"""
        self.verify_admin(current_user, "create events")

        event = Event(
            **request.model_dump(),
            attendees_count=0,
            created_by=current_user.id,
        )
        with transaction(self.db):
            self.repos.event.create_event(event)

        logger.info(f"Event {event.id} created by {current_user.id}")
        return event

    def update_event(
        self, event_id: UUID, request: EventUpdateRequest, current_user: CurrentUser
    ) -> Event:
        self.verify_admin(current_user, "update events")
        event = self.get_event_or_404(event_id)

        changes = self._changes(request)
        self.validate_date_range(event, changes)

        with transaction(self.db):
            self.repos.event.update_event(event, changes)
        return event

    def delete_event(self, event_id: UUID, current_user: CurrentUser) -> None:
        """이벤트와 등록 정보 함께 삭제"""
        self.verify_admin(current_user, "delete events")
        event = self.get_event_or_404(event_id)
        with transaction(self.db):
            self.repos.event.delete_event(event)

    # ------------------------------------------------------------------
    # 이미지
    # ------------------------------------------------------------------

    def upload_event_image(
        self,
        event_id: Optional[str],
        filename: Optional[str],
        content: bytes,
        content_type: Optional[str],
    ) -> tuple[str, str]:
        """
        이벤트 이미지 업로드
        - event_id가 유효한 v4 UUID가 아니면 새 uuid4를 저장 키로 사용
        - 키: <id>-<밀리초>.<확장자>, 버킷: events
        - 반환: (path, public_url)
        """
        storage_id = event_id if is_valid_uuid(event_id) else str(uuid.uuid4())
        return self.storage_service.upload_image(
            EVENT_IMAGE_BUCKET, storage_id, filename, content, content_type
        )

    def update_event_image(self, event_id: str, image_url: str, current_user: CurrentUser) -> Event:
        """이벤트 image_url 갱신 (유효한 UUID만)"""
        self.verify_admin(current_user, "update event images")
        if not is_valid_uuid(event_id):
            raise ValidationError(
                message="Invalid event id",
                detail=f"'{event_id}' is not a valid UUID"
            )

        event = self.get_event_or_404(UUID(event_id))
        with transaction(self.db):
            self.repos.event.update_event(event, {"image_url": image_url})
        return event
