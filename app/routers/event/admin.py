from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status

from app.dependencies.auth import require_admin
from app.dependencies.services import (
    get_event_admin_service,
    get_event_service,
    get_registration_service,
)
from app.models.event import RegistrationStatusType
from app.schemas.auth import CurrentUser
from app.schemas.event import (
    BulkEventDeleteRequest,
    BulkEventUpdateRequest,
    BulkOperationResponse,
    EventCreateRequest,
    EventImageUpdateRequest,
    EventResponse,
    EventStatisticsResponse,
    EventsOverviewStatsResponse,
    EventUpdateRequest,
    RegistrationListItemResponse,
    RegistrationResponse,
    RegistrationStatusUpdateRequest,
)
from app.schemas.storage import UploadResponse
from app.services.event import EventAdminService, EventService, RegistrationService
from app.services.event.event_service import EVENT_IMAGE_BUCKET


router = APIRouter(prefix="/admin", tags=["admin-events"])


# ----------------------------------------------------------------------
# Event manager
# ----------------------------------------------------------------------

@router.post("/events", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def create_event(
    request: EventCreateRequest,
    current_user: CurrentUser = Depends(require_admin),
    event_service: EventService = Depends(get_event_service),
) -> EventResponse:
    """이벤트 생성 API (attendees_count는 0)"""
    event = event_service.create_event(request, current_user)
    return EventResponse.model_validate(event)


@router.get("/events/export")
def export_events(
    current_user: CurrentUser = Depends(require_admin),
    admin_service: EventAdminService = Depends(get_event_admin_service),
) -> Response:
    """전체 이벤트 CSV 다운로드"""
    csv_text = admin_service.export_events_csv(current_user)
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=events.csv"},
    )


@router.get("/events/stats", response_model=EventsOverviewStatsResponse)
def get_events_overview_stats(
    current_user: CurrentUser = Depends(require_admin),
    admin_service: EventAdminService = Depends(get_event_admin_service),
) -> EventsOverviewStatsResponse:
    return admin_service.get_events_overview_stats()


@router.post("/events/bulk-update", response_model=BulkOperationResponse)
def bulk_update_events(
    request: BulkEventUpdateRequest,
    current_user: CurrentUser = Depends(require_admin),
    admin_service: EventAdminService = Depends(get_event_admin_service),
) -> BulkOperationResponse:
    return admin_service.bulk_update_events(request.event_ids, request.updates, current_user)


@router.post("/events/bulk-delete", response_model=BulkOperationResponse)
def bulk_delete_events(
    request: BulkEventDeleteRequest,
    current_user: CurrentUser = Depends(require_admin),
    admin_service: EventAdminService = Depends(get_event_admin_service),
) -> BulkOperationResponse:
    return admin_service.bulk_delete_events(request.event_ids, current_user)


@router.post("/events/image", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_event_image(
    file: UploadFile = File(...),
    event_id: Optional[str] = Form(default=None),
    current_user: CurrentUser = Depends(require_admin),
    event_service: EventService = Depends(get_event_service),
) -> UploadResponse:
    """
    이벤트 이미지 업로드 API
    - event_id가 없거나 UUID가 아니면 임의 키로 저장
    - 반환된 public_url을 이벤트 image_url로 저장하는 것은 별도 API
    """
    content = await file.read()
    path, url = event_service.upload_event_image(event_id, file.filename, content, file.content_type)
    return UploadResponse(bucket=EVENT_IMAGE_BUCKET, path=path, public_url=url)


@router.patch("/events/{event_id}", response_model=EventResponse)
def update_event(
    event_id: UUID,
    request: EventUpdateRequest,
    current_user: CurrentUser = Depends(require_admin),
    event_service: EventService = Depends(get_event_service),
) -> EventResponse:
    event = event_service.update_event(event_id, request, current_user)
    return EventResponse.model_validate(event)


@router.put("/events/{event_id}/image", response_model=EventResponse)
def update_event_image(
    event_id: str,
    request: EventImageUpdateRequest,
    current_user: CurrentUser = Depends(require_admin),
    event_service: EventService = Depends(get_event_service),
) -> EventResponse:
    event = event_service.update_event_image(event_id, request.image_url, current_user)
    return EventResponse.model_validate(event)


@router.delete("/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    event_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    event_service: EventService = Depends(get_event_service),
) -> Response:
    event_service.delete_event(event_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/events/{event_id}/duplicate", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def duplicate_event(
    event_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    admin_service: EventAdminService = Depends(get_event_admin_service),
) -> EventResponse:
    """이벤트 복제 ("Copy of " + 제목, 참석자 0)"""
    return EventResponse.model_validate(admin_service.duplicate_event(event_id, current_user))


@router.get("/events/{event_id}/statistics", response_model=EventStatisticsResponse)
def get_event_statistics(
    event_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    admin_service: EventAdminService = Depends(get_event_admin_service),
) -> EventStatisticsResponse:
    return admin_service.get_event_statistics(event_id, current_user)


# ----------------------------------------------------------------------
# Registration manager
# ----------------------------------------------------------------------

@router.get("/events/{event_id}/registrations", response_model=List[RegistrationListItemResponse])
def list_event_registrations(
    event_id: UUID,
    status_filter: Optional[RegistrationStatusType] = Query(default=None, alias="status"),
    current_user: CurrentUser = Depends(require_admin),
    registration_service: RegistrationService = Depends(get_registration_service),
) -> List[RegistrationListItemResponse]:
    return registration_service.get_event_registrations(event_id, current_user, status_filter)


@router.patch("/registrations/{registration_id}", response_model=RegistrationResponse)
def update_registration_status(
    registration_id: UUID,
    request: RegistrationStatusUpdateRequest,
    current_user: CurrentUser = Depends(require_admin),
    registration_service: RegistrationService = Depends(get_registration_service),
) -> RegistrationResponse:
    registration = registration_service.update_registration_status(
        registration_id, request.status, current_user
    )
    return RegistrationResponse.model_validate(registration)
