from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from app.models.mentorship import SessionStatusType
from app.schemas.common import reject_explicit_nulls


class MentorApplicationRequest(BaseModel):
    """멘토 신청 (승인 전까지 목록에 노출 안 됨)"""
    bio: str | None = None
    expertise: list[str] = Field(default_factory=list)
    availability: str | None = None
    hourly_rate: float | None = Field(default=None, ge=0)
    industry: str | None = None
    experience: str | None = None


class MentorProfileResponse(BaseModel):
    id: UUID
    user_id: UUID
    bio: str | None
    expertise: list[str] | None
    availability: str | None
    hourly_rate: float | None
    industry: str | None
    experience: str | None
    is_approved: bool
    created_at: datetime
    # 사용자 프로필
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    photo_url: str | None = None
    company: str | None = None
    profession: str | None = None

    class Config:
        from_attributes = True


class MentorSessionCreateRequest(BaseModel):
    mentor_id: UUID
    topic: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    scheduled_at: datetime
    duration: int = Field(default=60, gt=0)
    meeting_link: str | None = None


class MentorSessionUpdateRequest(BaseModel):
    topic: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    scheduled_at: datetime | None = None
    duration: int | None = Field(default=None, gt=0)
    status: SessionStatusType | None = None
    meeting_link: str | None = None

    @model_validator(mode='after')
    def check_nulls(self):
        return reject_explicit_nulls(self, ("topic", "scheduled_at", "duration", "status"))


class MentorSessionResponse(BaseModel):
    id: UUID
    mentor_id: UUID
    mentee_id: UUID
    topic: str
    description: str | None
    scheduled_at: datetime
    duration: int
    status: SessionStatusType
    meeting_link: str | None
    created_at: datetime

    class Config:
        from_attributes = True
