import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import User
from app.models.chat import ChatMessage, ChatRoom
from app.repositories.auth import UserRepository
from app.repositories.chat_repository import ChatRepository
from app.schemas.auth import CurrentUser
from app.schemas.chat import (
    ChatMessageResponse,
    ChatRoomCreateRequest,
    ChatRoomUpdateRequest,
)
from app.services.base import BaseService
from app.exceptions import ForbiddenError, NotFoundError, ValidationError
from app.utils.transaction import transaction

logger = logging.getLogger(__name__)

UNKNOWN_SENDER_NAME = "Unknown User"


def sender_display_name(sender: Optional[User]) -> str:
    """표시 이름 (first last), 프로필이 없거나 이름이 비면 Unknown User"""
    if sender is None:
        return UNKNOWN_SENDER_NAME
    return sender.full_name or UNKNOWN_SENDER_NAME


def direct_room_names(user1_id: UUID, user2_id: UUID) -> tuple[str, str]:
    return f"dm_{user1_id}_{user2_id}", f"dm_{user2_id}_{user1_id}"


def direct_room_key(user1_id: UUID, user2_id: UUID) -> str:
    first, second = sorted([str(user1_id), str(user2_id)])
    return f"{first}:{second}"


class ChatService(BaseService):
    """채팅방/메시지 서비스"""

    def __init__(self, db: Session, chat_repo: ChatRepository, user_repo: UserRepository):
        super().__init__(db)
        self.chat_repo = chat_repo
        self.user_repo = user_repo

    def _get_room_or_404(self, room_id: UUID) -> ChatRoom:
        return self._require(self.chat_repo.get_room_by_id(room_id), "Chat room", room_id)

    def _verify_room_manager(self, room: ChatRoom, current_user: CurrentUser, operation: str) -> None:
        """방 생성자 또는 관리자만"""
        if current_user.is_admin or room.created_by == current_user.id:
            return
        raise ForbiddenError(
            message="Forbidden",
            detail=f"Only the room creator or an administrator can {operation}"
        )

    # ------------------------------------------------------------------
    # Rooms
    # ------------------------------------------------------------------

    def get_chat_rooms(self) -> List[ChatRoom]:
        return self.chat_repo.get_rooms()

    def get_chat_room(self, room_id: UUID) -> ChatRoom:
        return self._get_room_or_404(room_id)

    def check_chat_room_exists(self, room_id: UUID) -> bool:
        return self.chat_repo.room_exists(room_id)

    def create_chat_room(self, request: ChatRoomCreateRequest, current_user: CurrentUser) -> ChatRoom:
        """채팅방 생성 (status=active)"""
        room = ChatRoom(
            name=request.name,
            description=request.description,
            is_private=request.is_private,
            created_by=current_user.id,
            status="active",
        )
        with transaction(self.db):
            self.chat_repo.create_room(room)
        return room

    def update_chat_room(
        self, room_id: UUID, request: ChatRoomUpdateRequest, current_user: CurrentUser
    ) -> ChatRoom:
        room = self._get_room_or_404(room_id)
        self._verify_room_manager(room, current_user, "update this room")
        with transaction(self.db):
            self.chat_repo.update_room(room, self._changes(request))
        return room

    def delete_chat_room(self, room_id: UUID, current_user: CurrentUser) -> None:
        """메시지 -> 방 순서로 한 트랜잭션에서 삭제"""
        room = self._get_room_or_404(room_id)
        self._verify_room_manager(room, current_user, "delete this room")
        with transaction(self.db):
            self.chat_repo.delete_room(room)

    def get_or_create_direct_message_room(self, user1_id: UUID, user2_id: UUID) -> ChatRoom:
        """
        두 사용자 간 1:1 비공개 방
        - 사용자 쌍(순서 무관)당 하나, 있으면 그대로 반환
        - 없으면 dm_<user1>_<user2> 이름으로 생성
        """
        if user1_id == user2_id:
            raise ValidationError(
                message="Invalid direct message",
                detail="Cannot open a direct message room with yourself"
            )

        key = direct_room_key(user1_id, user2_id)
        existing = self.chat_repo.get_room_by_direct_key(key)
        if existing is None:
            existing = self.chat_repo.get_private_room_by_names(list(direct_room_names(user1_id, user2_id)))
        if existing is not None:
            return existing

        user1 = self.user_repo.get_by_id(user1_id)
        user2 = self.user_repo.get_by_id(user2_id)
        if user1 is None or user2 is None:
            missing = user1_id if user1 is None else user2_id
            raise NotFoundError(
                message="User not found",
                detail=f"User with id {missing} not found"
            )

        room = ChatRoom(
            name=direct_room_names(user1_id, user2_id)[0],
            description=(
                f"Private chat between {sender_display_name(user1)} "
                f"and {sender_display_name(user2)}"
            ),
            is_private=True,
            status="active",
            created_by=user1_id,
            direct_key=key,
        )
        try:
            with transaction(self.db):
                self.chat_repo.create_room(room)
        except IntegrityError:
            winner = self.chat_repo.get_room_by_direct_key(key)
            if winner is None:
                raise
            logger.warning(f"Concurrent DM room creation for {key}, using room {winner.id}")
            return winner

        logger.info(f"Created direct message room {room.id} for {key}")
        return room

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def get_chat_messages(self, room_id: UUID) -> List[ChatMessageResponse]:
        """메시지 목록 (오래된 순, 보낸 사람 이름/아바타 포함)"""
        self._get_room_or_404(room_id)
        return [
            ChatMessageResponse(
                id=message.id,
                room_id=message.room_id,
                user_id=message.user_id,
                content=message.content,
                created_at=message.created_at,
                updated_at=message.updated_at,
                sender_name=sender_display_name(message.sender),
                sender_avatar=message.sender.photo_url if message.sender else None,
            )
            for message in self.chat_repo.get_messages(room_id)
        ]

    def send_chat_message(self, room_id: UUID, content: str, current_user: CurrentUser) -> ChatMessageResponse:
        self._get_room_or_404(room_id)
        message = ChatMessage(room_id=room_id, user_id=current_user.id, content=content)
        with transaction(self.db):
            self.chat_repo.create_message(message)

        sender = self.user_repo.get_by_id(current_user.id)
        return ChatMessageResponse(
            id=message.id,
            room_id=message.room_id,
            user_id=message.user_id,
            content=message.content,
            created_at=message.created_at,
            updated_at=message.updated_at,
            sender_name=sender_display_name(sender),
            sender_avatar=sender.photo_url if sender else None,
        )
