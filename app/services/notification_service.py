from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.networking import Notification
from app.repositories.notification_repository import NotificationRepository
from app.schemas.auth import CurrentUser
from app.services.base import BaseService
from app.exceptions import ForbiddenError
from app.utils.transaction import transaction


class NotificationService(BaseService):
    """사용자 알림"""

    def __init__(self, db: Session, notification_repo: NotificationRepository):
        super().__init__(db)
        self.notification_repo = notification_repo

    def get_notifications(self, user_id: UUID) -> List[Notification]:
        """사용자 알림 목록 (최신순)"""
        return self.notification_repo.get_for_user(user_id)

    def build_notification(
        self,
        user_id: UUID,
        content: str,
        notification_type: str,
        related_entity_type: Optional[str] = None,
        related_entity_id: Optional[UUID] = None,
    ) -> Notification:
        """
        알림 행 추가 (flush만)
        - 호출한 쪽 트랜잭션에 같이 커밋됨
        """
        return self.notification_repo.create_notification(
            Notification(
                user_id=user_id,
                content=content,
                notification_type=notification_type,
                is_read=False,
                related_entity_type=related_entity_type,
                related_entity_id=related_entity_id,
            )
        )

    def create_notification(
        self,
        user_id: UUID,
        content: str,
        notification_type: str,
        related_entity_type: Optional[str] = None,
        related_entity_id: Optional[UUID] = None,
    ) -> Notification:
        with transaction(self.db):
            notification = self.build_notification(
                user_id, content, notification_type, related_entity_type, related_entity_id
            )
        return notification

    def mark_as_read(self, notification_id: UUID, current_user: CurrentUser) -> Notification:
        notification = self._require(
            self.notification_repo.get_by_id(notification_id), "Notification", notification_id
        )
        if notification.user_id != current_user.id:
            raise ForbiddenError(
                message="Forbidden",
                detail="Cannot modify another user's notification"
            )
        with transaction(self.db):
            self.notification_repo.mark_read(notification)
        return notification

    def mark_all_as_read(self, user_id: UUID) -> int:
        """읽지 않은 알림 전부 읽음 처리, 변경 수 반환"""
        with transaction(self.db):
            updated = self.notification_repo.mark_all_read(user_id)
        return updated
