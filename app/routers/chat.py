from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from app.dependencies.auth import get_current_user
from app.dependencies.services import get_chat_service
from app.schemas.auth import CurrentUser
from app.schemas.chat import (
    ChatMessageCreateRequest,
    ChatMessageResponse,
    ChatRoomCreateRequest,
    ChatRoomExistsResponse,
    ChatRoomResponse,
    ChatRoomUpdateRequest,
    DirectMessageRoomRequest,
)
from app.services.chat_service import ChatService


router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("/rooms", response_model=List[ChatRoomResponse])
def list_chat_rooms(
    current_user: CurrentUser = Depends(get_current_user),
    chat_service: ChatService = Depends(get_chat_service),
) -> List[ChatRoomResponse]:
    return [ChatRoomResponse.model_validate(r) for r in chat_service.get_chat_rooms()]


@router.post("/rooms", response_model=ChatRoomResponse, status_code=status.HTTP_201_CREATED)
def create_chat_room(
    request: ChatRoomCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatRoomResponse:
    return ChatRoomResponse.model_validate(chat_service.create_chat_room(request, current_user))


@router.post("/direct", response_model=ChatRoomResponse)
def get_or_create_direct_room(
    request: DirectMessageRoomRequest,
    current_user: CurrentUser = Depends(get_current_user),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatRoomResponse:
    """
    1:1 채팅방 API
    - 두 사용자 사이의 방이 있으면 반환, 없으면 생성
    """
    room = chat_service.get_or_create_direct_message_room(current_user.id, request.other_user_id)
    return ChatRoomResponse.model_validate(room)


@router.get("/rooms/{room_id}", response_model=ChatRoomResponse)
def get_chat_room(
    room_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatRoomResponse:
    return ChatRoomResponse.model_validate(chat_service.get_chat_room(room_id))


@router.get("/rooms/{room_id}/exists", response_model=ChatRoomExistsResponse)
def check_chat_room_exists(
    room_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatRoomExistsResponse:
    return ChatRoomExistsResponse(room_id=room_id, exists=chat_service.check_chat_room_exists(room_id))


@router.patch("/rooms/{room_id}", response_model=ChatRoomResponse)
def update_chat_room(
    room_id: UUID,
    request: ChatRoomUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatRoomResponse:
    return ChatRoomResponse.model_validate(chat_service.update_chat_room(room_id, request, current_user))


@router.delete("/rooms/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_chat_room(
    room_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    chat_service: ChatService = Depends(get_chat_service),
) -> Response:
    chat_service.delete_chat_room(room_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/rooms/{room_id}/messages", response_model=List[ChatMessageResponse])
def list_chat_messages(
    room_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    chat_service: ChatService = Depends(get_chat_service),
) -> List[ChatMessageResponse]:
    """메시지 목록 (오래된 순)"""
    return chat_service.get_chat_messages(room_id)


@router.post("/rooms/{room_id}/messages", response_model=ChatMessageResponse, status_code=status.HTTP_201_CREATED)
def send_chat_message(
    room_id: UUID,
    request: ChatMessageCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatMessageResponse:
    return chat_service.send_chat_message(room_id, request.content, current_user)
