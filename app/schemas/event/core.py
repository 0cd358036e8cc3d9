from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, computed_field, field_validator, model_validator

from app.models.event import LocationType
from app.schemas.common import reject_explicit_nulls
from app.utils.event_categories import EVENT_TYPE_IDS, format_location


def _check_event_type(value: str | None) -> str | None:
    if value is not None and value not in EVENT_TYPE_IDS:
        raise ValueError(f"event_type must be one of: {', '.join(sorted(EVENT_TYPE_IDS))}")
    return value


class EventCreateRequest(BaseModel):
    """이벤트 생성 요청"""
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    start_datetime: datetime
    end_datetime: datetime
    location_type: LocationType = LocationType.PHYSICAL
    physical_address: str | None = None
    virtual_meeting_url: str | None = None
    event_type: str = "general"
    is_public: bool = True
    image_url: str | None = None
    highlights: list[str] | None = None

    @field_validator("event_type")
    @classmethod
    def check_event_type(cls, value):
        return _check_event_type(value)

    @model_validator(mode='after')
    def check_range(self):
        """종료 시간은 시작 시간 이후"""
        if self.end_datetime < self.start_datetime:
            raise ValueError("end_datetime must not be before start_datetime")
        return self


class EventUpdateRequest(BaseModel):
    """이벤트 수정 요청 (보낸 필드만 반영)"""
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    start_datetime: datetime | None = None
    end_datetime: datetime | None = None
    location_type: LocationType | None = None
    physical_address: str | None = None
    virtual_meeting_url: str | None = None
    event_type: str | None = None
    is_public: bool | None = None
    image_url: str | None = None
    highlights: list[str] | None = None

    @field_validator("event_type")
    @classmethod
    def check_event_type(cls, value):
        return _check_event_type(value)

    @model_validator(mode='after')
    def check_nulls(self):
        return reject_explicit_nulls(
            self,
            ("title", "start_datetime", "end_datetime", "location_type", "event_type", "is_public"),
        )


class EventResponse(BaseModel):
    """이벤트 응답"""
    id: UUID
    title: str
    description: str | None
    start_datetime: datetime
    end_datetime: datetime
    location_type: LocationType
    physical_address: str | None
    virtual_meeting_url: str | None
    event_type: str
    is_public: bool
    attendees_count: int
    image_url: str | None
    highlights: list[str] | None
    created_by: UUID | None
    created_at: datetime
    updated_at: datetime | None

    class Config:
        from_attributes = True

    @computed_field
    @property
    def location_label(self) -> str:
        return format_location(self)


class CalendarEventResponse(EventResponse):
    """캘린더 이벤트 (로그인 사용자의 등록 여부 포함)"""
    is_registered: bool = False


class EventImageUpdateRequest(BaseModel):
    image_url: str = Field(..., min_length=1)


class EventTypeInfo(BaseModel):
    id: str
    label: str
    description: str | None = None


class EventCategoriesResponse(BaseModel):
    """이벤트 카테고리/장소 유형 목록"""
    event_types: list[EventTypeInfo]
    location_types: list[EventTypeInfo]
