import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from app.models.event import Event, EventRegistration, RegistrationStatusType
from app.schemas.auth import CurrentUser
from app.schemas.event import (
    RegistrationListItemResponse,
    RegistrationResultResponse,
)
from app.services.event.base import EventBaseService
from app.exceptions import NotFoundError
from app.utils.transaction import transaction

logger = logging.getLogger(__name__)


class RegistrationService(EventBaseService):
    """이벤트 등록/취소 및 등록 관리"""

    def register_for_event(
        self,
        event_id: UUID,
        current_user: CurrentUser,
        user_company: Optional[str] = None,
    ) -> RegistrationResultResponse:
        """
        이벤트 등록 (사용자당 한 번)
        - 이미 등록되어 있으면 기존 등록 ID 반환, 카운트 변화 없음
        - 없으면 등록 생성 + attendees_count 증가를 한 트랜잭션으로
        - 동시 요청으로 유니크 제약 위반 시 먼저 생성된 등록을 반환
        """
        self.get_event_or_404(event_id)

        try:
            with transaction(self.db):
                existing = self.repos.registration.get_by_event_and_user(event_id, current_user.id)
                if existing:
                    logger.info(
                        f"User {current_user.id} already registered for event {event_id}, "
                        f"returning registration {existing.id}"
                    )
                    registration_id, created = existing.id, False
                else:
                    if user_company is None:
                        user = self.repos.user.get_by_id(current_user.id)
                        user_company = user.company if user else None
                    registration = self.repos.registration.create_registration(
                        EventRegistration(
                            event_id=event_id,
                            user_id=current_user.id,
                            status=RegistrationStatusType.REGISTERED,
                            user_company=user_company,
                        )
                    )
                    self.repos.counter.increment(Event, Event.attendees_count, event_id)
                    registration_id, created = registration.id, True
        except IntegrityError:
            winner = self.repos.registration.get_by_event_and_user(event_id, current_user.id)
            if winner is None:
                raise
            logger.warning(
                f"Concurrent registration for event {event_id} by {current_user.id}, "
                f"using registration {winner.id}"
            )
            registration_id, created = winner.id, False

        event = self.get_event_or_404(event_id)
        return RegistrationResultResponse(
            registration_id=registration_id,
            event_id=event_id,
            created=created,
            attendees_count=event.attendees_count,
        )

    def cancel_event_registration(self, event_id: UUID, user_id: UUID) -> int:
        """
        등록 취소
        - 등록 삭제 + attendees_count 감소(0 미만 불가)를 한 트랜잭션으로
        - 등록이 없으면 NotFoundError
        - 반환: 취소 후 attendees_count
        """
        self.get_event_or_404(event_id)

        with transaction(self.db):
            deleted = self.repos.registration.delete_by_event_and_user(event_id, user_id)
            if deleted == 0:
                raise NotFoundError(
                    message="Registration not found",
                    detail=f"User {user_id} is not registered for event {event_id}"
                )
            if self.repos.counter.decrement(Event, Event.attendees_count, event_id) == 0:
                logger.warning(f"attendees_count for event {event_id} was already 0")

        return self.get_event_or_404(event_id).attendees_count

    def is_user_registered(self, event_id: UUID, user_id: UUID) -> bool:
        return self.repos.registration.get_by_event_and_user(event_id, user_id) is not None

    def get_event_registrations(
        self,
        event_id: UUID,
        current_user: CurrentUser,
        status: Optional[RegistrationStatusType] = None,
    ) -> List[RegistrationListItemResponse]:
        """이벤트 등록 목록 (관리자, status 필터 선택)"""
        self.verify_admin(current_user, "view event registrations")
        self.get_event_or_404(event_id)

        registrations = self.repos.registration.get_by_event_id(event_id, status)
        result = []
        for registration in registrations:
            item = RegistrationListItemResponse.model_validate(registration)
            if registration.user is not None:
                item.user_name = registration.user.full_name or None
                item.user_email = registration.user.email
            result.append(item)
        return result

    def update_registration_status(
        self,
        registration_id: UUID,
        status: RegistrationStatusType,
        current_user: CurrentUser,
    ) -> EventRegistration:
        """
        등록 상태 변경 (관리자)
        - 상태 전이 검증 없이 지정한 상태로 바로 변경
        """
        self.verify_admin(current_user, "update registration status")
        registration = self._require(
            self.repos.registration.get_by_id(registration_id), "Registration", registration_id
        )

        with transaction(self.db):
            self.repos.registration.update_status(registration.id, status)

        self.db.refresh(registration)
        return registration
