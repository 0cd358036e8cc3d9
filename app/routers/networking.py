from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile, status

from app.dependencies.auth import get_current_user, require_admin
from app.dependencies.services import (
    get_connection_service,
    get_notification_service,
    get_startup_service,
)
from app.schemas.auth import CurrentUser
from app.schemas.networking import (
    ConnectionRequest,
    ConnectionResponse,
    ConnectionStatusUpdateRequest,
    ConnectionSuggestionResponse,
    IntroductionCreateRequest,
    IntroductionResponse,
    IntroductionRole,
    IntroductionStatusUpdateRequest,
    MarkAllReadResponse,
    NotificationCreateRequest,
    NotificationResponse,
    StartupCreateRequest,
    StartupResponse,
    StartupUpdateRequest,
    StartupWithFounderResponse,
)
from app.services.connection_service import ConnectionService
from app.services.notification_service import NotificationService
from app.services.startup_service import StartupService


router = APIRouter(tags=["networking"])


# ----------------------------------------------------------------------
# Startups
# ----------------------------------------------------------------------

@router.get("/startups", response_model=List[StartupResponse])
def list_startups(
    startup_service: StartupService = Depends(get_startup_service),
) -> List[StartupResponse]:
    return [StartupResponse.model_validate(s) for s in startup_service.get_startups()]


@router.post("/startups", response_model=StartupResponse, status_code=status.HTTP_201_CREATED)
def create_startup(
    request: StartupCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    startup_service: StartupService = Depends(get_startup_service),
) -> StartupResponse:
    return StartupResponse.model_validate(startup_service.create_startup(request, current_user))


@router.get("/startups/{startup_id}", response_model=StartupWithFounderResponse)
def get_startup(
    startup_id: UUID,
    startup_service: StartupService = Depends(get_startup_service),
) -> StartupWithFounderResponse:
    """스타트업 상세 (창업자 프로필 포함)"""
    return StartupWithFounderResponse.model_validate(startup_service.get_startup_with_founder(startup_id))


@router.patch("/startups/{startup_id}", response_model=StartupResponse)
def update_startup(
    startup_id: UUID,
    request: StartupUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    startup_service: StartupService = Depends(get_startup_service),
) -> StartupResponse:
    return StartupResponse.model_validate(startup_service.update_startup(startup_id, request, current_user))


@router.delete("/startups/{startup_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_startup(
    startup_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    startup_service: StartupService = Depends(get_startup_service),
) -> Response:
    startup_service.delete_startup(startup_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/startups/{startup_id}/featured", response_model=StartupResponse)
def toggle_startup_featured(
    startup_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    startup_service: StartupService = Depends(get_startup_service),
) -> StartupResponse:
    return StartupResponse.model_validate(startup_service.toggle_featured(startup_id, current_user))


@router.post("/startups/{startup_id}/logo", response_model=StartupResponse)
async def upload_startup_logo(
    startup_id: UUID,
    file: UploadFile = File(...),
    current_user: CurrentUser = Depends(get_current_user),
    startup_service: StartupService = Depends(get_startup_service),
) -> StartupResponse:
    content = await file.read()
    startup = startup_service.upload_logo(startup_id, file.filename, content, file.content_type, current_user)
    return StartupResponse.model_validate(startup)


# ----------------------------------------------------------------------
# Connections
# ----------------------------------------------------------------------

@router.get("/connections", response_model=List[ConnectionResponse])
def list_connections(
    current_user: CurrentUser = Depends(get_current_user),
    connection_service: ConnectionService = Depends(get_connection_service),
) -> List[ConnectionResponse]:
    return [ConnectionResponse.model_validate(c) for c in connection_service.get_user_connections(current_user.id)]


@router.post("/connections", response_model=ConnectionResponse, status_code=status.HTTP_201_CREATED)
def create_connection_request(
    request: ConnectionRequest,
    current_user: CurrentUser = Depends(get_current_user),
    connection_service: ConnectionService = Depends(get_connection_service),
) -> ConnectionResponse:
    """
    연결 요청 API
    - 이미 연결(요청)이 있으면 409
    - 수신자에게 알림 생성
    """
    connection = connection_service.create_connection_request(request.recipient_id, current_user)
    return ConnectionResponse.model_validate(connection)


@router.get("/connections/suggestions", response_model=List[ConnectionSuggestionResponse])
def get_connection_suggestions(
    limit: int = Query(default=5, ge=1, le=50),
    current_user: CurrentUser = Depends(get_current_user),
    connection_service: ConnectionService = Depends(get_connection_service),
) -> List[ConnectionSuggestionResponse]:
    users = connection_service.get_connection_suggestions(current_user.id, limit)
    return [ConnectionSuggestionResponse.model_validate(u) for u in users]


@router.patch("/connections/{connection_id}", response_model=ConnectionResponse)
def update_connection_status(
    connection_id: UUID,
    request: ConnectionStatusUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    connection_service: ConnectionService = Depends(get_connection_service),
) -> ConnectionResponse:
    """수신자만 응답 가능"""
    connection = connection_service.update_connection_status(connection_id, request.status, current_user)
    return ConnectionResponse.model_validate(connection)


# ----------------------------------------------------------------------
# Introductions
# ----------------------------------------------------------------------

@router.get("/introductions", response_model=List[IntroductionResponse])
def list_introduction_requests(
    role: IntroductionRole = Query(default="requester"),
    current_user: CurrentUser = Depends(get_current_user),
    connection_service: ConnectionService = Depends(get_connection_service),
) -> List[IntroductionResponse]:
    requests = connection_service.get_introduction_requests(current_user.id, role)
    return [IntroductionResponse.model_validate(r) for r in requests]


@router.post("/introductions", response_model=IntroductionResponse, status_code=status.HTTP_201_CREATED)
def create_introduction_request(
    request: IntroductionCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    connection_service: ConnectionService = Depends(get_connection_service),
) -> IntroductionResponse:
    return IntroductionResponse.model_validate(
        connection_service.create_introduction_request(request, current_user)
    )


@router.patch("/introductions/{request_id}", response_model=IntroductionResponse)
def update_introduction_status(
    request_id: UUID,
    request: IntroductionStatusUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    connection_service: ConnectionService = Depends(get_connection_service),
) -> IntroductionResponse:
    return IntroductionResponse.model_validate(
        connection_service.update_introduction_status(request_id, request.status, current_user)
    )


# ----------------------------------------------------------------------
# Notifications
# ----------------------------------------------------------------------

@router.get("/notifications", response_model=List[NotificationResponse])
def list_notifications(
    current_user: CurrentUser = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service),
) -> List[NotificationResponse]:
    return [NotificationResponse.model_validate(n) for n in notification_service.get_notifications(current_user.id)]


@router.post("/notifications", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
def create_notification(
    request: NotificationCreateRequest,
    current_user: CurrentUser = Depends(require_admin),
    notification_service: NotificationService = Depends(get_notification_service),
) -> NotificationResponse:
    """관리자 알림 발송"""
    notification = notification_service.create_notification(**request.model_dump())
    return NotificationResponse.model_validate(notification)


@router.post("/notifications/read-all", response_model=MarkAllReadResponse)
def mark_all_notifications_read(
    current_user: CurrentUser = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service),
) -> MarkAllReadResponse:
    return MarkAllReadResponse(updated_count=notification_service.mark_all_as_read(current_user.id))


@router.post("/notifications/{notification_id}/read", response_model=NotificationResponse)
def mark_notification_read(
    notification_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service),
) -> NotificationResponse:
    return NotificationResponse.model_validate(
        notification_service.mark_as_read(notification_id, current_user)
    )
