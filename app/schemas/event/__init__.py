"""
Event 관련 스키마 모듈
"""
# Core schemas
from app.schemas.event.core import (
    EventCreateRequest,
    EventUpdateRequest,
    EventResponse,
    CalendarEventResponse,
    EventImageUpdateRequest,
    EventTypeInfo,
    EventCategoriesResponse,
)

# Registration schemas
from app.schemas.event.registration import (
    RegistrationRequest,
    RegistrationResultResponse,
    RegistrationResponse,
    RegistrationListItemResponse,
    RegistrationStatusUpdateRequest,
    RegistrationStatusResponse,
    RegistrationCancelResponse,
)

# Stats / bulk schemas
from app.schemas.event.stats import (
    EventStatisticsResponse,
    EventsOverviewStatsResponse,
    BulkEventUpdateRequest,
    BulkEventDeleteRequest,
    BulkOperationResponse,
)

__all__ = [
    "EventCreateRequest",
    "EventUpdateRequest",
    "EventResponse",
    "CalendarEventResponse",
    "EventImageUpdateRequest",
    "EventTypeInfo",
    "EventCategoriesResponse",
    "RegistrationRequest",
    "RegistrationResultResponse",
    "RegistrationResponse",
    "RegistrationListItemResponse",
    "RegistrationStatusUpdateRequest",
    "RegistrationStatusResponse",
    "RegistrationCancelResponse",
    "EventStatisticsResponse",
    "EventsOverviewStatsResponse",
    "BulkEventUpdateRequest",
    "BulkEventDeleteRequest",
    "BulkOperationResponse",
]
