from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Response, status

from app.dependencies.auth import get_current_user
from app.dependencies.services import get_registration_service
from app.schemas.auth import CurrentUser
from app.schemas.event import (
    RegistrationCancelResponse,
    RegistrationRequest,
    RegistrationResultResponse,
    RegistrationStatusResponse,
)
from app.services.event import RegistrationService


router = APIRouter(tags=["events-registration"])


@router.post("/events/{event_id}/register", response_model=RegistrationResultResponse)
def register_for_event(
    event_id: UUID,
    response: Response,
    request: Optional[RegistrationRequest] = Body(default=None),
    current_user: CurrentUser = Depends(get_current_user),
    registration_service: RegistrationService = Depends(get_registration_service),
) -> RegistrationResultResponse:
    """
    이벤트 등록 API
    - 새로 등록하면 201, 이미 등록되어 있으면 기존 등록과 함께 200
    """
    result = registration_service.register_for_event(
        event_id,
        current_user,
        user_company=request.user_company if request else None,
    )
    response.status_code = status.HTTP_201_CREATED if result.created else status.HTTP_200_OK
    return result


@router.delete("/events/{event_id}/register", response_model=RegistrationCancelResponse)
def cancel_registration(
    event_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    registration_service: RegistrationService = Depends(get_registration_service),
) -> RegistrationCancelResponse:
    attendees_count = registration_service.cancel_event_registration(event_id, current_user.id)
    return RegistrationCancelResponse(event_id=event_id, attendees_count=attendees_count)


@router.get("/events/{event_id}/registration", response_model=RegistrationStatusResponse)
def get_registration_status(
    event_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    registration_service: RegistrationService = Depends(get_registration_service),
) -> RegistrationStatusResponse:
    """로그인 사용자의 등록 여부"""
    return RegistrationStatusResponse(
        event_id=event_id,
        is_registered=registration_service.is_user_registered(event_id, current_user.id),
    )
