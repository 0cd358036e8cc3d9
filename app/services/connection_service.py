import logging
from typing import List
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.dependencies.aggregate_repositories import NetworkingAggregateRepositories
from app.models import User
from app.models.networking import (
    Connection,
    ConnectionStatusType,
    IntroductionRequest,
    IntroductionStatusType,
)
from app.schemas.auth import CurrentUser
from app.schemas.networking import IntroductionCreateRequest
from app.services.base import BaseService
from app.services.notification_service import NotificationService
from app.exceptions import ConflictError, ForbiddenError, ValidationError
from app.utils.transaction import transaction

logger = logging.getLogger(__name__)

DEFAULT_SUGGESTION_LIMIT = 5


class ConnectionService(BaseService):
    """회원 간 연결 요청 및 소개 요청"""

    def __init__(
        self,
        db: Session,
        repos: NetworkingAggregateRepositories,
        notification_service: NotificationService,
    ):
        super().__init__(db)
        self.repos = repos
        self.notification_service = notification_service

    # ------------------------------------------------------------------
    # Connections
    # ------------------------------------------------------------------

    def get_user_connections(self, user_id: UUID) -> List[Connection]:
        return self.repos.connection.get_for_user(user_id)

    def create_connection_request(self, recipient_id: UUID, current_user: CurrentUser) -> Connection:
        """
        연결 요청
        - 두 사용자 사이에 어떤 상태든 연결이 있으면 ConflictError
        - 연결 생성 + 수신자 알림을 한 트랜잭션으로
        """
        if recipient_id == current_user.id:
            raise ValidationError(
                message="Invalid connection request",
                detail="Cannot connect with yourself"
            )
        self._require(self.repos.user.get_by_id(recipient_id), "User", recipient_id)

        if self.repos.connection.get_between(current_user.id, recipient_id):
            raise ConflictError(
                message="Connection already exists",
                detail=f"A connection with user {recipient_id} already exists"
            )

        requester_name = f"{current_user.first_name or ''} {current_user.last_name or ''}".strip()
        try:
            with transaction(self.db):
                connection = self.repos.connection.create_connection(current_user.id, recipient_id)
                self.notification_service.build_notification(
                    user_id=recipient_id,
                    content=f"{requester_name or current_user.email} sent you a connection request",
                    notification_type="connection_request",
                    related_entity_type="connection",
                    related_entity_id=connection.id,
                )
        except IntegrityError:
            raise ConflictError(
                message="Connection already exists",
                detail=f"A connection with user {recipient_id} already exists"
            )

        logger.info(f"Connection request {connection.id}: {current_user.id} -> {recipient_id}")
        return connection

    def update_connection_status(
        self, connection_id: UUID, status: ConnectionStatusType, current_user: CurrentUser
    ) -> Connection:
        """수신자만 수락/거절/차단 가능"""
        connection = self._require(
            self.repos.connection.get_by_id(connection_id), "Connection", connection_id
        )
        if connection.recipient_id != current_user.id:
            raise ForbiddenError(
                message="Forbidden",
                detail="Only the recipient can respond to a connection request"
            )
        with transaction(self.db):
            self.repos.connection.set_status(connection, status)
        return connection

    def get_connection_suggestions(
        self, user_id: UUID, limit: int = DEFAULT_SUGGESTION_LIMIT
    ) -> List[User]:
        """아직 연결되지 않은 다른 사용자"""
        excluded = self.repos.connection.get_connected_user_ids(user_id)
        excluded.add(user_id)
        return self.repos.user.list_excluding(excluded, limit)

    # ------------------------------------------------------------------
    # Introductions
    # ------------------------------------------------------------------

    def get_introduction_requests(self, user_id: UUID, role: str) -> List[IntroductionRequest]:
        """role: requester | intermediary | target"""
        return self.repos.introduction.get_for_user(user_id, role)

    def create_introduction_request(
        self, request: IntroductionCreateRequest, current_user: CurrentUser
    ) -> IntroductionRequest:
        participants = {current_user.id, request.intermediary_id, request.target_id}
        if len(participants) != 3:
            raise ValidationError(
                message="Invalid introduction request",
                detail="Requester, intermediary and target must be different users"
            )
        self._require(self.repos.user.get_by_id(request.intermediary_id), "User", request.intermediary_id)
        self._require(self.repos.user.get_by_id(request.target_id), "User", request.target_id)

        with transaction(self.db):
            introduction = self.repos.introduction.create_request(
                IntroductionRequest(
                    requester_id=current_user.id,
                    intermediary_id=request.intermediary_id,
                    target_id=request.target_id,
                    message=request.message,
                    status=IntroductionStatusType.PENDING,
                )
            )
            self.notification_service.build_notification(
                user_id=request.intermediary_id,
                content="You received an introduction request",
                notification_type="introduction_request",
                related_entity_type="introduction_request",
                related_entity_id=introduction.id,
            )
        return introduction

    def update_introduction_status(
        self, request_id: UUID, status: IntroductionStatusType, current_user: CurrentUser
    ) -> IntroductionRequest:
        """중개자 또는 대상자만 상태 변경"""
        introduction = self._require(
            self.repos.introduction.get_by_id(request_id), "Introduction request", request_id
        )
        if current_user.id not in (introduction.intermediary_id, introduction.target_id):
            raise ForbiddenError(
                message="Forbidden",
                detail="Only the intermediary or target can update this introduction request"
            )
        with transaction(self.db):
            self.repos.introduction.set_status(introduction, status)
        return introduction
