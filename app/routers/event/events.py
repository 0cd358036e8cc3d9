from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from app.dependencies.auth import get_optional_user
from app.dependencies.services import get_event_service
from app.schemas.auth import CurrentUser
from app.schemas.event import (
    CalendarEventResponse,
    EventCategoriesResponse,
    EventResponse,
)
from app.services.event import EventService


router = APIRouter(tags=["events"])


@router.get("/events", response_model=List[EventResponse])
def list_events(
    search: Optional[str] = Query(default=None),
    event_type: Optional[str] = Query(default=None),
    event_service: EventService = Depends(get_event_service),
) -> List[EventResponse]:
    """
    이벤트 목록 API
    - search / event_type 이 있으면 필터링 (event_type=all 은 필터 없음)
    - 없으면 전체 (시작 시간순)
    """
    if search is None and event_type is None:
        events = event_service.get_events()
    else:
        events = event_service.get_filtered_events(search or "", event_type or "all")
    return [EventResponse.model_validate(e) for e in events]


@router.get("/events/upcoming", response_model=List[EventResponse])
def list_upcoming_events(
    event_service: EventService = Depends(get_event_service),
) -> List[EventResponse]:
    return [EventResponse.model_validate(e) for e in event_service.get_upcoming_events()]


@router.get("/events/past", response_model=List[EventResponse])
def list_past_events(
    event_service: EventService = Depends(get_event_service),
) -> List[EventResponse]:
    return [EventResponse.model_validate(e) for e in event_service.get_past_events()]


@router.get("/events/popular", response_model=List[EventResponse])
def list_popular_events(
    limit: int = Query(default=5, ge=1, le=50),
    event_service: EventService = Depends(get_event_service),
) -> List[EventResponse]:
    """참석자 수 많은 순"""
    return [EventResponse.model_validate(e) for e in event_service.get_most_popular_events(limit)]


@router.get("/events/categories", response_model=EventCategoriesResponse)
def get_event_categories(
    event_service: EventService = Depends(get_event_service),
) -> EventCategoriesResponse:
    return event_service.get_categories()


@router.get("/events/calendar", response_model=List[CalendarEventResponse])
def get_calendar_events(
    start: datetime = Query(...),
    end: datetime = Query(...),
    current_user: Optional[CurrentUser] = Depends(get_optional_user),
    event_service: EventService = Depends(get_event_service),
) -> List[CalendarEventResponse]:
    """
    캘린더 API
    - 로그인한 경우 각 이벤트에 is_registered 표시
    """
    user_id = current_user.id if current_user else None
    return event_service.get_user_calendar_events(user_id, start, end)


@router.get("/events/{event_id}", response_model=EventResponse)
def get_event(
    event_id: UUID,
    event_service: EventService = Depends(get_event_service),
) -> EventResponse:
    return EventResponse.model_validate(event_service.get_event(event_id))
