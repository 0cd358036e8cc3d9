from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.event.core import EventResponse, EventUpdateRequest


class EventStatisticsResponse(BaseModel):
    """단일 이벤트 통계"""
    event: EventResponse
    total_registered: int
    unique_companies: int
    registrations_by_date: dict[str, int]


class EventsOverviewStatsResponse(BaseModel):
    """전체 이벤트 요약 통계"""
    total_events: int
    upcoming_events: int
    past_events: int
    total_attendees: int


class BulkEventUpdateRequest(BaseModel):
    """여러 이벤트에 같은 변경 적용"""
    event_ids: list[UUID] = Field(..., min_length=1)
    updates: EventUpdateRequest


class BulkEventDeleteRequest(BaseModel):
    event_ids: list[UUID] = Field(..., min_length=1)


class BulkOperationResponse(BaseModel):
    """일괄 처리 결과"""
    message: str
    updated_count: int | None = None
    deleted_count: int | None = None
    not_found_ids: list[UUID] = []
