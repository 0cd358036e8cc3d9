from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.dependencies.auth import get_current_user, require_admin
from app.dependencies.services import get_mentorship_service
from app.schemas.auth import CurrentUser
from app.schemas.mentorship import (
    MentorApplicationRequest,
    MentorProfileResponse,
    MentorSessionCreateRequest,
    MentorSessionResponse,
    MentorSessionUpdateRequest,
)
from app.services.mentorship_service import MentorshipService, to_mentor_response


router = APIRouter(tags=["mentorship"])


@router.get("/mentors", response_model=List[MentorProfileResponse])
def list_mentors(
    mentorship_service: MentorshipService = Depends(get_mentorship_service),
) -> List[MentorProfileResponse]:
    """승인된 멘토 목록"""
    return mentorship_service.get_mentors()


@router.post("/mentors/apply", response_model=MentorProfileResponse, status_code=status.HTTP_201_CREATED)
def apply_as_mentor(
    request: MentorApplicationRequest,
    current_user: CurrentUser = Depends(get_current_user),
    mentorship_service: MentorshipService = Depends(get_mentorship_service),
) -> MentorProfileResponse:
    """멘토 신청 (사용자당 1회, 승인 대기)"""
    profile = mentorship_service.apply_as_mentor(request, current_user)
    return to_mentor_response(profile)


@router.get("/mentors/{profile_id}", response_model=MentorProfileResponse)
def get_mentor(
    profile_id: UUID,
    mentorship_service: MentorshipService = Depends(get_mentorship_service),
) -> MentorProfileResponse:
    return mentorship_service.get_mentor(profile_id)


@router.get("/mentorship/sessions", response_model=List[MentorSessionResponse])
def list_my_sessions(
    current_user: CurrentUser = Depends(get_current_user),
    mentorship_service: MentorshipService = Depends(get_mentorship_service),
) -> List[MentorSessionResponse]:
    """내 멘토링 세션 (예정 시간순)"""
    return [MentorSessionResponse.model_validate(s) for s in mentorship_service.get_mentee_sessions(current_user.id)]


@router.post("/mentorship/sessions", response_model=MentorSessionResponse, status_code=status.HTTP_201_CREATED)
def create_session(
    request: MentorSessionCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    mentorship_service: MentorshipService = Depends(get_mentorship_service),
) -> MentorSessionResponse:
    return MentorSessionResponse.model_validate(mentorship_service.create_session(request, current_user))


@router.patch("/mentorship/sessions/{session_id}", response_model=MentorSessionResponse)
def update_session(
    session_id: UUID,
    request: MentorSessionUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    mentorship_service: MentorshipService = Depends(get_mentorship_service),
) -> MentorSessionResponse:
    return MentorSessionResponse.model_validate(
        mentorship_service.update_session(session_id, request, current_user)
    )


@router.get("/admin/mentors/applications", response_model=List[MentorProfileResponse])
def list_mentor_applications(
    current_user: CurrentUser = Depends(require_admin),
    mentorship_service: MentorshipService = Depends(get_mentorship_service),
) -> List[MentorProfileResponse]:
    return mentorship_service.get_mentor_applications(current_user)


@router.post("/admin/mentors/{profile_id}/approve", response_model=MentorProfileResponse)
def approve_mentor_application(
    profile_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    mentorship_service: MentorshipService = Depends(get_mentorship_service),
) -> MentorProfileResponse:
    return mentorship_service.approve_mentor_application(profile_id, current_user)
