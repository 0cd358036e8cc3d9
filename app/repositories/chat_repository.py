from typing import Any, List
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session, joinedload

from app.models.chat import ChatRoom, ChatMessage


class ChatRepository:
    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Rooms
    # ------------------------------------------------------------------

    def get_rooms(self) -> List[ChatRoom]:
        """채팅방 목록 (최신순)"""
        stmt = select(ChatRoom).order_by(ChatRoom.created_at.desc())
        return list(self.db.execute(stmt).scalars().all())

    def get_room_by_id(self, room_id: UUID) -> ChatRoom | None:
        stmt = select(ChatRoom).where(ChatRoom.id == room_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def room_exists(self, room_id: UUID) -> bool:
        stmt = select(func.count(ChatRoom.id)).where(ChatRoom.id == room_id)
        return self.db.execute(stmt).scalar_one() > 0

    def get_room_by_direct_key(self, direct_key: str) -> ChatRoom | None:
        stmt = select(ChatRoom).where(ChatRoom.direct_key == direct_key)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_private_room_by_names(self, names: List[str]) -> ChatRoom | None:
        """dm_a_b / dm_b_a 이름의 비공개 방 (direct_key 없이 만들어진 방 호환)"""
        stmt = (
            select(ChatRoom)
            .where(ChatRoom.name.in_(names), ChatRoom.is_private.is_(True))
            .limit(1)
        )
        return self.db.execute(stmt).scalars().first()

    def create_room(self, room: ChatRoom) -> ChatRoom:
        self.db.add(room)
        self.db.flush()
        self.db.refresh(room)
        return room

    def update_room(self, room: ChatRoom, changes: dict[str, Any]) -> ChatRoom:
        for field, value in changes.items():
            setattr(room, field, value)
        self.db.flush()
        self.db.refresh(room)
        return room

    def delete_room(self, room: ChatRoom) -> None:
        """메시지 먼저 삭제 후 방 삭제"""
        self.db.execute(delete(ChatMessage).where(ChatMessage.room_id == room.id))
        self.db.delete(room)
        self.db.flush()

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def get_messages(self, room_id: UUID) -> List[ChatMessage]:
        """방 메시지 + 보낸 사람 프로필 (오래된 순)"""
        stmt = (
            select(ChatMessage)
            .options(joinedload(ChatMessage.sender))
            .where(ChatMessage.room_id == room_id)
            .order_by(ChatMessage.created_at.asc())
        )
        return list(self.db.execute(stmt).unique().scalars().all())

    def create_message(self, message: ChatMessage) -> ChatMessage:
        self.db.add(message)
        self.db.flush()
        self.db.refresh(message)
        return message
