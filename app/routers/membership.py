from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from app.dependencies.auth import get_current_user, require_admin
from app.dependencies.services import get_membership_service
from app.schemas.auth import CurrentUser
from app.schemas.membership import (
    ApplicationDecisionResponse,
    ApplicationStatusResponse,
    MemberCreateRequest,
    MemberResponse,
    MembershipApplicationRequest,
    MembershipApplicationResponse,
    MemberUpdateRequest,
)
from app.services.membership_service import MembershipService


router = APIRouter(tags=["membership"])


# ----------------------------------------------------------------------
# Members
# ----------------------------------------------------------------------

@router.get("/members", response_model=List[MemberResponse])
def list_members(
    industry: Optional[str] = Query(default=None),
    current_user: CurrentUser = Depends(get_current_user),
    membership_service: MembershipService = Depends(get_membership_service),
) -> List[MemberResponse]:
    """회원 목록 (industry 필터 선택)"""
    if industry:
        members = membership_service.get_members_by_industry(industry)
    else:
        members = membership_service.get_members()
    return [MemberResponse.model_validate(m) for m in members]


@router.get("/members/me", response_model=MemberResponse)
def get_my_membership(
    current_user: CurrentUser = Depends(get_current_user),
    membership_service: MembershipService = Depends(get_membership_service),
) -> MemberResponse:
    return MemberResponse.model_validate(membership_service.get_member_by_user_id(current_user.id))


@router.get("/members/by-user/{user_id}", response_model=MemberResponse)
def get_member_by_user(
    user_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    membership_service: MembershipService = Depends(get_membership_service),
) -> MemberResponse:
    return MemberResponse.model_validate(membership_service.get_member_by_user_id(user_id))


@router.post("/members", response_model=MemberResponse, status_code=status.HTTP_201_CREATED)
def create_member(
    request: MemberCreateRequest,
    current_user: CurrentUser = Depends(require_admin),
    membership_service: MembershipService = Depends(get_membership_service),
) -> MemberResponse:
    return MemberResponse.model_validate(membership_service.create_member(request, current_user))


@router.patch("/members/{member_id}", response_model=MemberResponse)
def update_member(
    member_id: UUID,
    request: MemberUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    membership_service: MembershipService = Depends(get_membership_service),
) -> MemberResponse:
    member = membership_service.update_member_profile(member_id, request, current_user)
    return MemberResponse.model_validate(member)


@router.delete("/members/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_member(
    member_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    membership_service: MembershipService = Depends(get_membership_service),
) -> Response:
    membership_service.delete_member(member_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ----------------------------------------------------------------------
# Applications
# ----------------------------------------------------------------------

@router.post(
    "/membership/applications",
    response_model=MembershipApplicationResponse,
    status_code=status.HTTP_201_CREATED,
)
def submit_application(
    request: MembershipApplicationRequest,
    current_user: CurrentUser = Depends(get_current_user),
    membership_service: MembershipService = Depends(get_membership_service),
) -> MembershipApplicationResponse:
    """가입 신청 API (status는 항상 pending)"""
    application = membership_service.submit_membership_application(request, current_user)
    return MembershipApplicationResponse.model_validate(application)


@router.get("/membership/applications/me", response_model=ApplicationStatusResponse)
def get_my_application_status(
    current_user: CurrentUser = Depends(get_current_user),
    membership_service: MembershipService = Depends(get_membership_service),
) -> ApplicationStatusResponse:
    """내 가입 신청 상태 (신청 내역이 없으면 status=None)"""
    return ApplicationStatusResponse(
        has_applied=membership_service.has_user_applied(current_user.id),
        status=membership_service.get_user_application_status(current_user.id),
    )


@router.get("/admin/membership/applications", response_model=List[MembershipApplicationResponse])
def list_applications(
    pending_only: bool = Query(default=False),
    current_user: CurrentUser = Depends(require_admin),
    membership_service: MembershipService = Depends(get_membership_service),
) -> List[MembershipApplicationResponse]:
    if pending_only:
        return membership_service.get_pending_applications(current_user)
    return membership_service.get_membership_applications(current_user)


@router.post(
    "/admin/membership/applications/{application_id}/approve",
    response_model=ApplicationDecisionResponse,
)
def approve_application(
    application_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    membership_service: MembershipService = Depends(get_membership_service),
) -> ApplicationDecisionResponse:
    """
    가입 승인 API
    - 승인 + 회원 생성이 한 트랜잭션
    - 이미 처리된 신청은 409
    """
    return membership_service.approve_application(application_id, current_user)


@router.post(
    "/admin/membership/applications/{application_id}/reject",
    response_model=ApplicationDecisionResponse,
)
def reject_application(
    application_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    membership_service: MembershipService = Depends(get_membership_service),
) -> ApplicationDecisionResponse:
    return membership_service.reject_application(application_id, current_user)
