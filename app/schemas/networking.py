from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from app.models.networking import ConnectionStatusType, IntroductionStatusType
from app.schemas.common import reject_explicit_nulls


# ============================================================================
# Startups
# ============================================================================

class StartupCreateRequest(BaseModel):
    """스타트업 등록 (founder_id 생략 시 요청자)"""
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    logo_url: str | None = None
    website_url: str | None = None
    industry: str | None = None
    team_size: int | None = Field(default=None, ge=0)
    funding_stage: str | None = Field(default=None, max_length=50)
    founding_date: date | None = None
    founder_id: UUID | None = None
    linkedin_url: str | None = None
    instagram_url: str | None = None
    twitter_url: str | None = None
    github_url: str | None = None


class StartupUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    logo_url: str | None = None
    website_url: str | None = None
    industry: str | None = None
    team_size: int | None = Field(default=None, ge=0)
    funding_stage: str | None = Field(default=None, max_length=50)
    founding_date: date | None = None
    linkedin_url: str | None = None
    instagram_url: str | None = None
    twitter_url: str | None = None
    github_url: str | None = None

    @model_validator(mode='after')
    def check_nulls(self):
        return reject_explicit_nulls(self, ("name",))


class FounderSummary(BaseModel):
    id: UUID
    first_name: str | None
    last_name: str | None
    photo_url: str | None
    company: str | None
    profession: str | None

    class Config:
        from_attributes = True


class StartupResponse(BaseModel):
    id: UUID
    name: str
    description: str | None
    logo_url: str | None
    website_url: str | None
    industry: str | None
    team_size: int | None
    funding_stage: str | None
    founding_date: date | None
    founder_id: UUID | None
    is_featured: bool
    linkedin_url: str | None
    instagram_url: str | None
    twitter_url: str | None
    github_url: str | None
    created_at: datetime

    class Config:
        from_attributes = True


class StartupWithFounderResponse(StartupResponse):
    founder: FounderSummary | None = None


# ============================================================================
# Connections
# ============================================================================

class ConnectionRequest(BaseModel):
    recipient_id: UUID


class ConnectionStatusUpdateRequest(BaseModel):
    status: ConnectionStatusType


class ConnectionResponse(BaseModel):
    id: UUID
    requester_id: UUID
    recipient_id: UUID
    status: ConnectionStatusType
    created_at: datetime
    updated_at: datetime | None

    class Config:
        from_attributes = True


class ConnectionSuggestionResponse(BaseModel):
    """연결 추천 사용자"""
    id: UUID
    first_name: str | None
    last_name: str | None
    photo_url: str | None
    company: str | None
    profession: str | None
    industry: str | None

    class Config:
        from_attributes = True


# ============================================================================
# Introductions
# ============================================================================

IntroductionRole = Literal["requester", "intermediary", "target"]


class IntroductionCreateRequest(BaseModel):
    intermediary_id: UUID
    target_id: UUID
    message: str | None = Field(default=None, max_length=2000)


class IntroductionStatusUpdateRequest(BaseModel):
    status: IntroductionStatusType


class IntroductionResponse(BaseModel):
    id: UUID
    requester_id: UUID
    intermediary_id: UUID
    target_id: UUID
    message: str | None
    status: IntroductionStatusType
    created_at: datetime
    updated_at: datetime | None

    class Config:
        from_attributes = True


# ============================================================================
# Notifications
# ============================================================================

class NotificationCreateRequest(BaseModel):
    user_id: UUID
    content: str = Field(..., min_length=1)
    notification_type: str = Field(..., min_length=1, max_length=50)
    related_entity_type: str | None = Field(default=None, max_length=50)
    related_entity_id: UUID | None = None


class NotificationResponse(BaseModel):
    id: UUID
    user_id: UUID
    content: str
    notification_type: str
    is_read: bool
    related_entity_type: str | None
    related_entity_id: UUID | None
    created_at: datetime

    class Config:
        from_attributes = True


class MarkAllReadResponse(BaseModel):
    updated_count: int
