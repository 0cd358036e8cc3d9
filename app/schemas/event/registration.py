from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.event import RegistrationStatusType


class RegistrationRequest(BaseModel):
    """이벤트 등록 요청 (회사명은 통계용, 선택)"""
    user_company: str | None = Field(default=None, max_length=255)


class RegistrationResultResponse(BaseModel):
    """
    이벤트 등록 결과
    - created=False 이면 기존 등록을 그대로 반환한 것
    """
    registration_id: UUID
    event_id: UUID
    created: bool
    attendees_count: int


class RegistrationResponse(BaseModel):
    id: UUID
    event_id: UUID
    user_id: UUID
    status: RegistrationStatusType
    role: str
    user_company: str | None
    registered_at: datetime

    class Config:
        from_attributes = True


class RegistrationListItemResponse(RegistrationResponse):
    """관리자용 등록 목록 항목 (등록자 정보 포함)"""
    user_name: str | None = None
    user_email: str | None = None


class RegistrationStatusUpdateRequest(BaseModel):
    status: RegistrationStatusType


class RegistrationStatusResponse(BaseModel):
    """로그인 사용자의 이벤트 등록 여부"""
    event_id: UUID
    is_registered: bool


class RegistrationCancelResponse(BaseModel):
    """등록 취소 결과 (취소 후 참석자 수)"""
    event_id: UUID
    attendees_count: int
