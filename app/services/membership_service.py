import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.dependencies.aggregate_repositories import MembershipAggregateRepositories
from app.models.membership import ApplicationStatusType, Member, MembershipApplication
from app.schemas.auth import CurrentUser
from app.schemas.membership import (
    ApplicationDecisionResponse,
    MemberCreateRequest,
    MembershipApplicationRequest,
    MembershipApplicationResponse,
    MemberUpdateRequest,
)
from app.services.base import BaseService
from app.exceptions import ConflictError, ForbiddenError
from app.utils.transaction import transaction

logger = logging.getLogger(__name__)


class MembershipService(BaseService):
    """동아리 회원 및 가입 신청 관리"""

    def __init__(self, db: Session, repos: MembershipAggregateRepositories):
        super().__init__(db)
        self.repos = repos

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------

    def get_members(self) -> List[Member]:
        return self.repos.member.get_all()

    def get_members_by_industry(self, industry: str) -> List[Member]:
        return self.repos.member.get_by_industry(industry)

    def get_member(self, member_id: UUID) -> Member:
        return self._require(self.repos.member.get_by_id(member_id), "Member", member_id)

    def get_member_by_user_id(self, user_id: UUID) -> Member:
        member = self.repos.member.get_by_user_id(user_id)
        return self._require(member, "Member", f"user {user_id}")

    def create_member(self, request: MemberCreateRequest, current_user: CurrentUser) -> Member:
        """
        회원 생성 (관리자)
        - 사용자당 하나, 이미 있으면 ConflictError
        """
        self.verify_admin(current_user, "create members")
        self._require(self.repos.user.get_by_id(request.user_id), "User", request.user_id)

        if self.repos.member.get_by_user_id(request.user_id):
            raise ConflictError(
                message="Member already exists",
                detail=f"User {request.user_id} is already a member"
            )

        member = Member(**request.model_dump(), is_active=True)
        try:
            with transaction(self.db):
                self.repos.member.create_member(member)
        except IntegrityError:
            raise ConflictError(
                message="Member already exists",
                detail=f"User {request.user_id} is already a member"
            )
        return member

    def update_member_profile(
        self, member_id: UUID, request: MemberUpdateRequest, current_user: CurrentUser
    ) -> Member:
        """본인 또는 관리자만 수정"""
        member = self.get_member(member_id)
        if not current_user.is_admin and member.user_id != current_user.id:
            raise ForbiddenError(
                message="Forbidden",
                detail="Only the member or an administrator can update this profile"
            )
        with transaction(self.db):
            self.repos.member.update_member(member, self._changes(request))
        return member

    def delete_member(self, member_id: UUID, current_user: CurrentUser) -> None:
        self.verify_admin(current_user, "delete members")
        member = self.get_member(member_id)
        with transaction(self.db):
            self.repos.member.delete_member(member)

    # ------------------------------------------------------------------
    # Applications
    # ------------------------------------------------------------------

    def _to_application_response(self, application: MembershipApplication) -> MembershipApplicationResponse:
        response = MembershipApplicationResponse.model_validate(application)
        if application.user is not None:
            response.applicant_name = application.user.full_name or None
            response.applicant_email = application.user.email
        return response

    def get_membership_applications(self, current_user: CurrentUser) -> List[MembershipApplicationResponse]:
        """전체 가입 신청 (신청자 이름/이메일 포함, 최신순)"""
        self.verify_admin(current_user, "view membership applications")
        return [self._to_application_response(a) for a in self.repos.application.get_all()]

    def get_pending_applications(self, current_user: CurrentUser) -> List[MembershipApplicationResponse]:
        self.verify_admin(current_user, "view membership applications")
        return [
            self._to_application_response(a)
            for a in self.repos.application.get_all(ApplicationStatusType.PENDING)
        ]

    def submit_membership_application(
        self, request: MembershipApplicationRequest, current_user: CurrentUser
    ) -> MembershipApplication:
        """가입 신청 제출 (상태는 무조건 pending)"""
        application = MembershipApplication(
            **request.model_dump(),
            user_id=current_user.id,
            status=ApplicationStatusType.PENDING,
        )
        with transaction(self.db):
            self.repos.application.create_application(application)
        return application

    def approve_application(self, application_id: UUID, current_user: CurrentUser) -> ApplicationDecisionResponse:
        """
        가입 승인 (한 트랜잭션)
        1. pending -> approved 조건부 업데이트
        2. 신청자의 회원 행이 없으면 standard/active 회원 생성
        - 이미 처리된 신청은 ConflictError
        """
        self.verify_admin(current_user, "approve membership applications")
        application = self._require(
            self.repos.application.get_by_id(application_id), "Membership application", application_id
        )
        user = self.repos.user.get_by_id(application.user_id)

        try:
            with transaction(self.db):
                if not self.repos.application.set_status_if_pending(
                    application_id, ApplicationStatusType.APPROVED
                ):
                    raise ConflictError(
                        message="Application already decided",
                        detail=f"Membership application {application_id} is not pending"
                    )

                member = self.repos.member.get_by_user_id(application.user_id)
                if member is None:
                    member = self.repos.member.create_member(
                        Member(
                            user_id=application.user_id,
                            first_name=user.first_name if user else None,
                            last_name=user.last_name if user else None,
                            contact_email=user.email if user else None,
                            interests=application.interests,
                            membership_level="standard",
                            is_active=True,
                        )
                    )
        except IntegrityError:
            # 동시에 같은 사용자의 회원 행이 생성된 경우 승인 자체가 롤백됨
            raise ConflictError(
                message="Application already decided",
                detail=f"Membership application {application_id} was processed concurrently"
            )

        self.db.refresh(application)
        logger.info(f"Membership application {application_id} approved, member {member.id}")
        return ApplicationDecisionResponse(
            application_id=application_id,
            status=application.status,
            member_id=member.id,
            message="Application approved",
        )

    def reject_application(self, application_id: UUID, current_user: CurrentUser) -> ApplicationDecisionResponse:
        self.verify_admin(current_user, "reject membership applications")
        application = self._require(
            self.repos.application.get_by_id(application_id), "Membership application", application_id
        )

        with transaction(self.db):
            if not self.repos.application.set_status_if_pending(
                application_id, ApplicationStatusType.REJECTED
            ):
                raise ConflictError(
                    message="Application already decided",
                    detail=f"Membership application {application_id} is not pending"
                )

        self.db.refresh(application)
        logger.info(f"Membership application {application_id} rejected")
        return ApplicationDecisionResponse(
            application_id=application_id,
            status=application.status,
            message="Application rejected",
        )

    def has_user_applied(self, user_id: UUID) -> bool:
        return self.repos.application.count_by_user_id(user_id) > 0

    def get_user_application_status(self, user_id: UUID) -> Optional[ApplicationStatusType]:
        """
        가장 최근 신청 상태
        - 신청 내역이 없으면 None
        - 조회 실패는 예외로 전파 (None과 구분)
        """
        application = self.repos.application.get_latest_by_user_id(user_id)
        return application.status if application else None
