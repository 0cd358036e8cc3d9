from typing import List
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from app.models.networking import (
    Connection, ConnectionStatusType, IntroductionRequest, IntroductionStatusType,
)


def make_pair_key(user_a: UUID, user_b: UUID) -> str:
    """방향과 무관한 사용자 쌍 키"""
    first, second = sorted([str(user_a), str(user_b)])
    return f"{first}:{second}"


class ConnectionRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_for_user(self, user_id: UUID) -> List[Connection]:
        """요청자 또는 수신자로 참여한 연결 목록"""
        stmt = (
            select(Connection)
            .where(or_(Connection.requester_id == user_id, Connection.recipient_id == user_id))
            .order_by(Connection.created_at.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_by_id(self, connection_id: UUID) -> Connection | None:
        stmt = select(Connection).where(Connection.id == connection_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_between(self, user_a: UUID, user_b: UUID) -> Connection | None:
        stmt = select(Connection).where(Connection.pair_key == make_pair_key(user_a, user_b))
        return self.db.execute(stmt).scalar_one_or_none()

    def get_connected_user_ids(self, user_id: UUID) -> set[UUID]:
        """상태와 무관하게 이미 연결(요청) 관계가 있는 상대방 ID"""
        ids: set[UUID] = set()
        for conn in self.get_for_user(user_id):
            ids.add(conn.recipient_id if conn.requester_id == user_id else conn.requester_id)
        return ids

    def create_connection(self, requester_id: UUID, recipient_id: UUID) -> Connection:
        connection = Connection(
            requester_id=requester_id,
            recipient_id=recipient_id,
            pair_key=make_pair_key(requester_id, recipient_id),
            status=ConnectionStatusType.PENDING,
        )
        self.db.add(connection)
        self.db.flush()
        self.db.refresh(connection)
        return connection

    def set_status(self, connection: Connection, status: ConnectionStatusType) -> Connection:
        connection.status = status
        self.db.flush()
        self.db.refresh(connection)
        return connection


class IntroductionRepository:
    def __init__(self, db: Session):
        self.db = db

    # role -> 필터 컬럼
    ROLE_COLUMNS = {
        "requester": IntroductionRequest.requester_id,
        "intermediary": IntroductionRequest.intermediary_id,
        "target": IntroductionRequest.target_id,
    }

    def get_for_user(self, user_id: UUID, role: str) -> List[IntroductionRequest]:
        column = self.ROLE_COLUMNS[role]
        stmt = (
            select(IntroductionRequest)
            .where(column == user_id)
            .order_by(IntroductionRequest.created_at.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_by_id(self, request_id: UUID) -> IntroductionRequest | None:
        stmt = select(IntroductionRequest).where(IntroductionRequest.id == request_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def create_request(self, request: IntroductionRequest) -> IntroductionRequest:
        self.db.add(request)
        self.db.flush()
        self.db.refresh(request)
        return request

    def set_status(
        self, request: IntroductionRequest, status: IntroductionStatusType
    ) -> IntroductionRequest:
        request.status = status
        self.db.flush()
        self.db.refresh(request)
        return request
