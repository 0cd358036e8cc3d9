from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from app.schemas.common import reject_explicit_nulls


class ChatRoomCreateRequest(BaseModel):
    """채팅방 생성 요청"""
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    is_private: bool = False


class ChatRoomUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    is_private: bool | None = None
    status: str | None = Field(default=None, max_length=20)

    @model_validator(mode='after')
    def check_nulls(self):
        return reject_explicit_nulls(self, ("name", "is_private", "status"))


class ChatRoomResponse(BaseModel):
    id: UUID
    name: str
    description: str | None
    is_private: bool
    status: str
    created_by: UUID | None
    created_at: datetime

    class Config:
        from_attributes = True


class ChatRoomExistsResponse(BaseModel):
    room_id: UUID
    exists: bool


class DirectMessageRoomRequest(BaseModel):
    """상대방과의 1:1 채팅방 조회/생성"""
    other_user_id: UUID


class ChatMessageCreateRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)


class ChatMessageResponse(BaseModel):
    """보낸 사람 이름/아바타를 펼친 메시지"""
    id: UUID
    room_id: UUID
    user_id: UUID | None
    content: str
    created_at: datetime
    updated_at: datetime | None = None
    sender_name: str
    sender_avatar: str | None = None
