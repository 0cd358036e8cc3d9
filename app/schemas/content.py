from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from app.schemas.common import reject_explicit_nulls


# ============================================================================
# Success stories
# ============================================================================

class SuccessStoryCreateRequest(BaseModel):
    """성공 사례 등록 (company_name, founder, description 필수)"""
    company_name: str = Field(..., min_length=1, max_length=255)
    founder: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    achievements: list[str] | None = None
    industry: str | None = None
    year: int | None = Field(default=None, ge=1900, le=2100)
    featured: bool = False
    image_url: str | None = None


class SuccessStoryUpdateRequest(BaseModel):
    company_name: str | None = Field(default=None, min_length=1, max_length=255)
    founder: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    achievements: list[str] | None = None
    industry: str | None = None
    year: int | None = Field(default=None, ge=1900, le=2100)
    featured: bool | None = None
    image_url: str | None = None

    @model_validator(mode='after')
    def check_nulls(self):
        return reject_explicit_nulls(self, ("company_name", "founder", "description", "featured"))


class SuccessStoryResponse(BaseModel):
    id: UUID
    user_id: UUID | None
    company_name: str
    founder: str
    description: str
    achievements: list[str] | None
    industry: str | None
    year: int | None
    featured: bool
    image_url: str | None
    created_at: datetime

    class Config:
        from_attributes = True


# ============================================================================
# Resources
# ============================================================================

class ResourceCategoryCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    type: str | None = Field(default=None, max_length=50)


class ResourceCategoryResponse(BaseModel):
    id: UUID
    name: str
    description: str | None
    type: str | None

    class Config:
        from_attributes = True


class ResourceCreateRequest(BaseModel):
    category_id: UUID | None = None
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    content: str | None = None
    attachment_url: str | None = None
    is_premium: bool = False


class ResourceUpdateRequest(BaseModel):
    category_id: UUID | None = None
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    content: str | None = None
    attachment_url: str | None = None
    is_premium: bool | None = None

    @model_validator(mode='after')
    def check_nulls(self):
        return reject_explicit_nulls(self, ("title", "is_premium"))


class ResourceResponse(BaseModel):
    id: UUID
    category_id: UUID | None
    title: str
    description: str | None
    content: str | None
    attachment_url: str | None
    view_count: int
    is_premium: bool
    created_by: UUID | None
    created_at: datetime

    class Config:
        from_attributes = True


# ============================================================================
# Past recordings
# ============================================================================

class RecordingCreateRequest(BaseModel):
    event_id: UUID | None = None
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    recording_url: str = Field(..., min_length=1)
    thumbnail_url: str | None = None
    presenter_name: str | None = None
    duration: int | None = Field(default=None, ge=0)
    recorded_at: datetime | None = None
    is_public: bool = True


class RecordingUpdateRequest(BaseModel):
    event_id: UUID | None = None
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    recording_url: str | None = Field(default=None, min_length=1)
    thumbnail_url: str | None = None
    presenter_name: str | None = None
    duration: int | None = Field(default=None, ge=0)
    recorded_at: datetime | None = None
    is_public: bool | None = None

    @model_validator(mode='after')
    def check_nulls(self):
        return reject_explicit_nulls(self, ("title", "recording_url", "is_public"))


class RecordingResponse(BaseModel):
    id: UUID
    event_id: UUID | None
    title: str
    description: str | None
    recording_url: str
    thumbnail_url: str | None
    presenter_name: str | None
    duration: int | None
    recorded_at: datetime | None
    is_public: bool
    view_count: int
    created_at: datetime

    class Config:
        from_attributes = True


class RecordingStatsResponse(BaseModel):
    total_recordings: int
    total_views: int
    most_viewed: RecordingResponse | None = None
