from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from app.models.membership import ApplicationStatusType
from app.schemas.common import reject_explicit_nulls


class MemberCreateRequest(BaseModel):
    """회원 생성 요청 (관리자)"""
    user_id: UUID
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    bio: str | None = None
    avatar_url: str | None = None
    company: str | None = None
    role: str | None = None
    location: str | None = None
    contact_email: str | None = None
    website: str | None = None
    linkedin: str | None = None
    twitter: str | None = None
    industry: str | None = None
    interests: str | None = None
    membership_level: str = Field(default="standard", max_length=30)


class MemberUpdateRequest(BaseModel):
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    bio: str | None = None
    avatar_url: str | None = None
    company: str | None = None
    role: str | None = None
    location: str | None = None
    contact_email: str | None = None
    website: str | None = None
    linkedin: str | None = None
    twitter: str | None = None
    industry: str | None = None
    interests: str | None = None
    membership_level: str | None = Field(default=None, max_length=30)
    is_active: bool | None = None

    @model_validator(mode='after')
    def check_nulls(self):
        return reject_explicit_nulls(self, ("membership_level", "is_active"))


class MemberResponse(BaseModel):
    id: UUID
    user_id: UUID
    first_name: str | None
    last_name: str | None
    bio: str | None
    avatar_url: str | None
    company: str | None
    role: str | None
    location: str | None
    contact_email: str | None
    website: str | None
    linkedin: str | None
    twitter: str | None
    industry: str | None
    interests: str | None
    membership_level: str
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class MembershipApplicationRequest(BaseModel):
    """가입 신청서 (status는 항상 pending으로 저장)"""
    phone: str | None = Field(default=None, max_length=50)
    department: str | None = None
    year_of_study: str | None = Field(default=None, max_length=50)
    interests: str | None = None
    previous_experience: str | None = None
    expectations: str | None = None


class MembershipApplicationResponse(BaseModel):
    id: UUID
    user_id: UUID
    phone: str | None
    department: str | None
    year_of_study: str | None
    interests: str | None
    previous_experience: str | None
    expectations: str | None
    status: ApplicationStatusType
    created_at: datetime
    # 신청자 정보
    applicant_name: str | None = None
    applicant_email: str | None = None

    class Config:
        from_attributes = True


class ApplicationDecisionResponse(BaseModel):
    application_id: UUID
    status: ApplicationStatusType
    member_id: UUID | None = None
    message: str


class ApplicationStatusResponse(BaseModel):
    """status가 None이면 신청 내역 없음"""
    has_applied: bool
    status: ApplicationStatusType | None = None
