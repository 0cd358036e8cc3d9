from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, model_validator

from app.schemas.common import reject_explicit_nulls


class ReorderRequest(BaseModel):
    """화면 순서대로 나열한 ID 목록, display_order는 1부터 다시 매김"""
    ids: list[UUID] = Field(..., min_length=1)


# ============================================================================
# Home slides
# ============================================================================

class SlideCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    image_url: str = Field(..., min_length=1)
    display_order: int | None = Field(default=None, ge=0)
    is_active: bool = True


class SlideUpdateRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    image_url: str | None = Field(default=None, min_length=1)
    display_order: int | None = Field(default=None, ge=0)
    is_active: bool | None = None

    @model_validator(mode='after')
    def check_nulls(self):
        return reject_explicit_nulls(self, ("title", "image_url", "display_order", "is_active"))


class SlideResponse(BaseModel):
    id: UUID
    title: str
    description: str | None
    image_url: str
    display_order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime | None

    class Config:
        from_attributes = True


# ============================================================================
# Sponsors
# ============================================================================

class SponsorCreateRequest(BaseModel):
    company_name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    website_url: str | None = None
    logo_url: str | None = None
    is_active: bool = True
    display_order: int | None = Field(default=None, ge=0)
    partnership_start_date: date | None = None
    partnership_end_date: date | None = None

    @model_validator(mode='after')
    def check_partnership_dates(self):
        if (
            self.partnership_start_date is not None
            and self.partnership_end_date is not None
            and self.partnership_end_date < self.partnership_start_date
        ):
            raise ValueError("partnership_end_date must not be before partnership_start_date")
        return self


class SponsorUpdateRequest(BaseModel):
    company_name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    website_url: str | None = None
    logo_url: str | None = None
    is_active: bool | None = None
    display_order: int | None = Field(default=None, ge=0)
    partnership_start_date: date | None = None
    partnership_end_date: date | None = None

    @model_validator(mode='after')
    def check_nulls(self):
        return reject_explicit_nulls(self, ("company_name", "is_active", "display_order"))


class SponsorResponse(BaseModel):
    id: UUID
    company_name: str
    description: str | None
    website_url: str | None
    logo_url: str | None
    is_active: bool
    display_order: int
    partnership_start_date: date | None
    partnership_end_date: date | None
    created_at: datetime
    updated_at: datetime | None

    class Config:
        from_attributes = True


# ============================================================================
# Important members
# ============================================================================

class ImportantMemberCreateRequest(BaseModel):
    """운영진 카드 등록 (name, role 필수)"""
    name: str = Field(..., min_length=1, max_length=255)
    role: str = Field(..., min_length=1, max_length=255)
    bio: str | None = None
    avatar_url: str | None = None
    company: str | None = None
    expertise: list[str] | None = None
    linkedin_url: str | None = None
    twitter_url: str | None = None
    website_url: str | None = None
    instagram_url: str | None = None
    is_active: bool = True
    display_order: int | None = Field(default=None, ge=0)


class ImportantMemberUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    role: str | None = Field(default=None, min_length=1, max_length=255)
    bio: str | None = None
    avatar_url: str | None = None
    company: str | None = None
    expertise: list[str] | None = None
    linkedin_url: str | None = None
    twitter_url: str | None = None
    website_url: str | None = None
    instagram_url: str | None = None
    is_active: bool | None = None
    display_order: int | None = Field(default=None, ge=0)

    @model_validator(mode='after')
    def check_nulls(self):
        return reject_explicit_nulls(self, ("name", "role", "is_active", "display_order"))


class ImportantMemberResponse(BaseModel):
    id: UUID
    name: str
    role: str
    bio: str | None
    avatar_url: str | None
    company: str | None
    expertise: list[str] | None
    linkedin_url: str | None
    twitter_url: str | None
    website_url: str | None
    instagram_url: str | None
    is_active: bool
    display_order: int
    created_at: datetime
    updated_at: datetime | None

    class Config:
        from_attributes = True


# ============================================================================
# Forum categories
# ============================================================================

class ForumCategoryCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    order_num: int = Field(default=0, ge=0)


class ForumCategoryUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None
    order_num: int | None = Field(default=None, ge=0)

    @model_validator(mode='after')
    def check_nulls(self):
        return reject_explicit_nulls(self, ("name", "order_num"))


class ForumCategoryResponse(BaseModel):
    id: UUID
    name: str
    description: str | None
    order_num: int
    created_at: datetime

    class Config:
        from_attributes = True


# ============================================================================
# System config
# ============================================================================

class SystemConfigUpdateRequest(BaseModel):
    maintenance_mode: bool | None = None
    registration_open: bool | None = None
    allow_guest_access: bool | None = None
    footer_text: str | None = Field(default=None, min_length=1, max_length=255)
    primary_color: str | None = Field(default=None, pattern=r"^#[0-9a-fA-F]{6}$")
    contact_email: EmailStr | None = None

    @model_validator(mode='after')
    def check_nulls(self):
        return reject_explicit_nulls(
            self,
            ("maintenance_mode", "registration_open", "allow_guest_access", "footer_text", "primary_color"),
        )


class SystemConfigResponse(BaseModel):
    maintenance_mode: bool
    registration_open: bool
    allow_guest_access: bool
    footer_text: str
    primary_color: str
    contact_email: str | None
    updated_at: datetime

    class Config:
        from_attributes = True
